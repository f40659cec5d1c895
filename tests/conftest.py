from __future__ import annotations

from typing import Callable

import pytest

from studyfocus.core.settings import TimerSettings
from studyfocus.core.timer import CompletedSession, TimerEngine


class FakeScheduler:
    def __init__(self, journal: list[tuple]) -> None:
        self.journal = journal
        self.callback: Callable[[], object] | None = None
        self.is_active = False
        self.start_calls = 0

    def start(self, callback: Callable[[], object]) -> None:
        self.callback = callback
        if not self.is_active:
            self.start_calls += 1
            self.is_active = True

    def stop(self) -> None:
        self.is_active = False

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self.is_active and self.callback is not None:
                self.callback()


class RecordingRecorder:
    def __init__(self, journal: list[tuple]) -> None:
        self.journal = journal
        self.events: list[CompletedSession] = []
        self.engine: TimerEngine | None = None

    def record(self, event: CompletedSession) -> None:
        phase = self.engine.phase if self.engine else None
        self.journal.append(("record", event, phase))
        self.events.append(event)


class RecordingAlarm:
    def __init__(self, journal: list[tuple], error: Exception | None = None) -> None:
        self.journal = journal
        self.error = error
        self.engine: TimerEngine | None = None
        self.sounds: list[str] = []

    def play(self, sound_ref: str) -> None:
        phase = self.engine.phase if self.engine else None
        self.journal.append(("alarm", sound_ref, phase))
        self.sounds.append(sound_ref)
        if self.error is not None:
            raise self.error


@pytest.fixture
def journal() -> list[tuple]:
    return []


@pytest.fixture
def scheduler(journal) -> FakeScheduler:
    return FakeScheduler(journal)


@pytest.fixture
def recorder(journal) -> RecordingRecorder:
    return RecordingRecorder(journal)


@pytest.fixture
def alarm(journal) -> RecordingAlarm:
    return RecordingAlarm(journal)


@pytest.fixture
def make_engine(scheduler, recorder, alarm):
    def _make(settings: TimerSettings | None = None) -> TimerEngine:
        engine = TimerEngine(
            settings or TimerSettings.from_minutes(25, 5, 15, 4),
            scheduler,
            recorder=recorder,
            alarm=alarm,
        )
        recorder.engine = engine
        alarm.engine = engine
        return engine

    return _make
