from __future__ import annotations

"""Headless entry point: runs the focus timer on a Qt event loop."""

import os
import sys
from pathlib import Path

from loguru import logger
from PyQt6.QtCore import QCoreApplication

from studyfocus.core.app_state import AppState
from studyfocus.core.timer import PhaseAdvance
from studyfocus.data.storage import Storage
from studyfocus.logging_setup import setup_logging


def default_db_path() -> Path:
    return Path.cwd() / "studyfocus.db"


def main() -> int:
    setup_logging(os.environ.get("STUDYFOCUS_LOG_LEVEL", "INFO"))
    app = QCoreApplication(sys.argv)

    storage = Storage(default_db_path())
    storage.init_db()

    app_state = AppState()
    app_state.load_from_storage(storage)

    def on_phase(transition: PhaseAdvance) -> None:
        snap = app_state.engine.snapshot()
        logger.info(
            "Now {} for {} ({} min studied today)",
            snap.phase.value,
            snap.clock_text,
            storage.minutes_today(),
        )

    app_state.phase_changed.connect(on_phase)
    app.aboutToQuit.connect(app_state.shutdown)

    settings = app_state.settings
    logger.info(
        "Focus {} min, short break {} min, long break {} min, long break every {} periods",
        settings.focus_seconds // 60,
        settings.short_break_seconds // 60,
        settings.long_break_seconds // 60,
        settings.periods_per_cycle,
    )
    app_state.engine.start()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
