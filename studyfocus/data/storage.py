from __future__ import annotations

"""SQLite store for timer settings and the completed focus-session log."""

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from studyfocus.core.settings import TimerSettings
from studyfocus.core.timer import CompletedSession


SCHEMA_VERSION = 1
TIMER_SETTINGS_KEY = "timer_settings"


@dataclass(frozen=True)
class SessionRow:
    id: int
    subject: str
    logged_at: str
    duration_min: int


class Storage:
    """Wraps the SQLite connection; also serves as the engine's session recorder."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    subject TEXT NOT NULL,
                    logged_at TEXT NOT NULL,
                    duration_min INTEGER NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )

    def get_setting(self, key: str, default: Any = None) -> Any:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        if not row:
            return default
        raw = row["value"]
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return raw

    def set_setting(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, payload),
            )

    def load_timer_settings(self) -> TimerSettings:
        return TimerSettings.from_dict(self.get_setting(TIMER_SETTINGS_KEY, {}))

    def save_timer_settings(self, settings: TimerSettings) -> None:
        self.set_setting(TIMER_SETTINGS_KEY, settings.to_dict())

    def record(self, event: CompletedSession, logged_at: str | None = None) -> int:
        logged_at = logged_at or datetime.now().isoformat(timespec="seconds")
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO sessions(subject, logged_at, duration_min) VALUES (?, ?, ?)",
                (event.subject, logged_at, event.duration_minutes),
            )
            session_id = int(cursor.lastrowid)
        logger.info("Logged {} min of {!r}", event.duration_minutes, event.subject)
        return session_id

    def list_sessions(self, limit: int = 100) -> list[SessionRow]:
        """Newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, subject, logged_at, duration_min FROM sessions ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [
            SessionRow(
                id=row["id"],
                subject=row["subject"],
                logged_at=row["logged_at"],
                duration_min=row["duration_min"],
            )
            for row in rows
        ]

    def minutes_by_subject(self) -> dict[str, int]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT subject, SUM(duration_min) AS total
                FROM sessions
                GROUP BY subject
                ORDER BY MIN(id) ASC
                """
            ).fetchall()
        return {row["subject"]: int(row["total"]) for row in rows}

    def total_focus_minutes(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COALESCE(SUM(duration_min), 0) AS total FROM sessions").fetchone()
        return int(row["total"])

    def sessions_today(self) -> int:
        today = date.today().isoformat()
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS c FROM sessions WHERE date(logged_at) = ?",
                (today,),
            ).fetchone()
        return int(row["c"] if row else 0)

    def minutes_today(self) -> int:
        today = date.today().isoformat()
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COALESCE(SUM(duration_min), 0) AS total FROM sessions WHERE date(logged_at) = ?",
                (today,),
            ).fetchone()
        return int(row["total"])
