from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from loguru import logger

from studyfocus.core.phases import (
    counter_after_leaving,
    duration_of,
    next_break_phase,
    periods_completed_in_cycle,
    progress_percent,
)
from studyfocus.core.settings import Phase, TimerSettings


DEFAULT_SUBJECT = "General study"


class InvalidStateError(RuntimeError):
    """Command issued in a timer state that does not accept it."""


@dataclass(frozen=True)
class CompletedSession:
    subject: str
    duration_minutes: int


@dataclass(frozen=True)
class PhaseAdvance:
    previous: Phase
    current: Phase
    natural: bool
    session: CompletedSession | None = None


@dataclass(frozen=True)
class TimerSnapshot:
    phase: Phase
    remaining_seconds: int
    total_seconds: int
    is_running: bool
    completed_focus_count: int
    periods_completed_in_cycle: int
    periods_per_cycle: int
    progress_percent: float
    subject: str

    @property
    def clock_text(self) -> str:
        return format_clock(self.remaining_seconds)


class TickScheduler(Protocol):
    @property
    def is_active(self) -> bool: ...

    def start(self, callback: Callable[[], object]) -> None: ...

    def stop(self) -> None: ...


class SessionRecorder(Protocol):
    def record(self, event: CompletedSession) -> None: ...


class AlarmNotifier(Protocol):
    def play(self, sound_ref: str) -> None: ...


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class TimerEngine:
    """Focus/break cycle state machine driven by an external one-second scheduler.

    The engine never touches wall-clock time: every second is a ``tick()``
    delivered by the injected scheduler, which is started and stopped in
    lockstep with ``is_running``. Phase advances mutate state in a fixed
    order: session record, cycle counter, phase and countdown, alarm cue.
    """

    def __init__(
        self,
        settings: TimerSettings,
        scheduler: TickScheduler,
        recorder: SessionRecorder | None = None,
        alarm: AlarmNotifier | None = None,
        on_transition: Callable[[PhaseAdvance], None] | None = None,
    ) -> None:
        if not isinstance(settings, TimerSettings):
            raise ValueError("settings must be a TimerSettings instance")
        self._settings = settings
        self._scheduler = scheduler
        self._recorder = recorder
        self._alarm = alarm
        self._on_transition = on_transition

        self._phase = Phase.FOCUS
        self._remaining_sec = duration_of(Phase.FOCUS, settings)
        self._is_running = False
        self._completed_focus_count = 0
        self._subject = DEFAULT_SUBJECT

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_sec

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def completed_focus_count(self) -> int:
        return self._completed_focus_count

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def total_seconds(self) -> int:
        return duration_of(self._phase, self._settings)

    @property
    def progress_percent(self) -> float:
        return progress_percent(self.total_seconds, self._remaining_sec)

    @property
    def periods_completed_in_cycle(self) -> int:
        return periods_completed_in_cycle(self._completed_focus_count, self._settings.periods_per_cycle)

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            remaining_seconds=self._remaining_sec,
            total_seconds=self.total_seconds,
            is_running=self._is_running,
            completed_focus_count=self._completed_focus_count,
            periods_completed_in_cycle=self.periods_completed_in_cycle,
            periods_per_cycle=self._settings.periods_per_cycle,
            progress_percent=self.progress_percent,
            subject=self._subject,
        )

    def start(self) -> None:
        if self._is_running:
            return
        self._set_running(True)

    def pause(self) -> None:
        if not self._is_running:
            return
        self._set_running(False)

    def reset(self) -> None:
        self._set_running(False)
        self._remaining_sec = self.total_seconds

    def close(self) -> None:
        self._is_running = False
        self._scheduler.stop()

    def tick(self) -> PhaseAdvance | None:
        if not self._is_running:
            return None
        if self._remaining_sec > 0:
            self._remaining_sec -= 1
            logger.debug("{} {}", self._phase.value, format_clock(self._remaining_sec))
            return None
        return self._advance(natural=True)

    def skip(self) -> PhaseAdvance:
        return self._advance(natural=False)

    def set_subject(self, label: str) -> None:
        if self._phase != Phase.FOCUS or self._is_running:
            raise InvalidStateError("Subject can only be changed while focus is paused")
        self._subject = label

    def reconfigure(self, settings: TimerSettings) -> None:
        """Swaps the configuration; the running countdown keeps its value."""
        if not isinstance(settings, TimerSettings):
            raise ValueError("settings must be a TimerSettings instance")
        self._settings = settings

    def _set_running(self, running: bool) -> None:
        self._is_running = running
        if running:
            self._scheduler.start(self.tick)
        else:
            self._scheduler.stop()

    def _advance(self, natural: bool) -> PhaseAdvance:
        previous = self._phase
        settings = self._settings
        session = None

        if previous == Phase.FOCUS:
            session = CompletedSession(
                subject=self._subject,
                duration_minutes=max(1, settings.focus_seconds // 60),
            )
            if self._recorder is not None:
                self._recorder.record(session)
            self._completed_focus_count += 1
            current = next_break_phase(self._completed_focus_count, settings.periods_per_cycle)
            running = settings.auto_start_breaks
        else:
            self._completed_focus_count = counter_after_leaving(previous, self._completed_focus_count)
            current = Phase.FOCUS
            running = settings.auto_start_focus

        self._phase = current
        self._remaining_sec = duration_of(current, settings)
        self._set_running(running)
        logger.info(
            "{} -> {} ({}, cycle {}/{})",
            previous.value,
            current.value,
            "expired" if natural else "skipped",
            self.periods_completed_in_cycle,
            settings.periods_per_cycle,
        )

        if self._alarm is not None:
            try:
                self._alarm.play(settings.alarm_sound)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Alarm cue failed: {}", exc)

        transition = PhaseAdvance(previous=previous, current=current, natural=natural, session=session)
        if self._on_transition is not None:
            self._on_transition(transition)
        return transition
