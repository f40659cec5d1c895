from __future__ import annotations

from typing import Iterable

from PyQt6.QtCore import QObject, pyqtSignal

from studyfocus.core.alarm import SoundAlarm
from studyfocus.core.scheduler import QtTickScheduler
from studyfocus.core.settings import FocusLevel, TimerSettings
from studyfocus.core.subjects import SubjectTask, available_subjects
from studyfocus.core.timer import (
    AlarmNotifier,
    CompletedSession,
    PhaseAdvance,
    TickScheduler,
    TimerEngine,
)
from studyfocus.data.storage import Storage


class AppState(QObject):
    """Owns the timer engine and bridges it to storage and Qt signals."""

    state_changed = pyqtSignal()
    settings_changed = pyqtSignal(object)
    session_logged = pyqtSignal(object)
    phase_changed = pyqtSignal(object)

    def __init__(
        self,
        scheduler: TickScheduler | None = None,
        alarm: AlarmNotifier | None = None,
    ) -> None:
        super().__init__()
        self.settings = TimerSettings()
        self.tasks: list[SubjectTask] = []
        self._storage: Storage | None = None
        self._scheduler = scheduler if scheduler is not None else QtTickScheduler(parent=self)
        self.engine = TimerEngine(
            self.settings,
            self._scheduler,
            recorder=self,
            alarm=alarm if alarm is not None else SoundAlarm(),
            on_transition=self._on_transition,
        )

    @property
    def subjects(self) -> list[str]:
        return available_subjects(self.tasks)

    def load_from_storage(self, storage: Storage) -> None:
        self._storage = storage
        self.settings = storage.load_timer_settings()
        self.engine.reconfigure(self.settings)
        if not self.engine.is_running:
            self.engine.reset()
        self.settings_changed.emit(self.settings)
        self.state_changed.emit()

    def apply_settings(self, settings: TimerSettings) -> None:
        self.engine.reconfigure(settings)
        self.settings = settings
        if self._storage:
            self._storage.save_timer_settings(settings)
        self.settings_changed.emit(settings)
        self.state_changed.emit()

    def select_focus_level(self, level: FocusLevel | str) -> None:
        self.apply_settings(self.settings.with_focus_level(level))

    def set_tasks(self, tasks: Iterable[SubjectTask]) -> None:
        self.tasks = list(tasks)
        self.state_changed.emit()

    def record(self, event: CompletedSession) -> None:
        if self._storage:
            self._storage.record(event)
        self.session_logged.emit(event)

    def shutdown(self) -> None:
        self.engine.close()

    def _on_transition(self, transition: PhaseAdvance) -> None:
        self.phase_changed.emit(transition)
        self.state_changed.emit()
