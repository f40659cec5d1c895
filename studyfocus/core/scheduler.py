from __future__ import annotations

"""One-second tick driver backed by a single owned ``QTimer``."""

from typing import Callable

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class QtTickScheduler(QObject):
    """Repeating timer handle; start and stop are idempotent.

    Only one ``QTimer`` ever exists per scheduler, so repeated start/pause
    cycles cannot leave orphaned timers firing into the engine.
    """

    def __init__(self, interval_ms: int = TICK_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callback: Callable[[], object] | None = None
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self, callback: Callable[[], object]) -> None:
        self._callback = callback
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _on_timeout(self) -> None:
        # a timeout already queued before stop() must not reach the engine
        if not self._timer.isActive() or self._callback is None:
            return
        self._callback()
