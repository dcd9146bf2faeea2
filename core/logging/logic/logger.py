"""
core/logging/logic/logger.py
============================

Process-wide event logger.

Every event is kept in ``Logger.entries`` for the running process and
appended to the ``logs`` table of the logging database. A log database that
cannot be opened or written is tolerated: the event stays in memory and the
caller carries on. Reading (``fetch_logs``/``query_logs``) does raise, since
those callers asked for the database explicitly.
"""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from core.common.db_interface import SQLiteRepository
from core.config.config_service import config_service
from core.logging.models.log_entry import LogEntry

LOG_DB_PATH: Path = config_service.database.logging

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_COLUMNS = ("timestamp", "feature", "event", "reference_id", "message", "log_level")


def normalize_level(level: Optional[str]) -> str:
    level = (level or "INFO").upper()
    return level if level in LEVELS else "INFO"


# --------------------------------------------------------------------------- #
#  Storage                                                                    #
# --------------------------------------------------------------------------- #
class LogRepository(SQLiteRepository):
    """The ``logs`` table. Not locked; Logger serializes access."""

    def __init__(self, db_path: Path | str) -> None:
        super().__init__(db_path, check_same_thread=False)
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    feature TEXT NOT NULL,
                    event TEXT NOT NULL,
                    reference_id TEXT,
                    message TEXT,
                    log_level TEXT NOT NULL DEFAULT 'INFO'
                )
                """
            )
        self._schema_ready = True

    def insert(self, entry: LogEntry) -> None:
        self._ensure_schema()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self.transaction() as conn:
            conn.execute(
                f"INSERT INTO logs ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                (
                    entry.timestamp.isoformat(),
                    entry.feature,
                    entry.event,
                    entry.reference_id,
                    entry.message,
                    entry.log_level,
                ),
            )

    def select(self, filters: dict, start_time: Optional[str], end_time: Optional[str],
               limit: int) -> List[LogEntry]:
        self._ensure_schema()
        clauses: List[str] = []
        params: List[object] = []
        for column, value in filters.items():
            if value is not None:
                clauses.append(f"{column} = ?")
                params.append(value)
        if start_time is not None:
            clauses.append("timestamp >= ?")
            params.append(start_time)
        if end_time is not None:
            clauses.append("timestamp <= ?")
            params.append(end_time)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(limit)
        rows = self.conn.execute(
            f"SELECT * FROM logs{where} ORDER BY timestamp DESC, id DESC LIMIT ?", params
        ).fetchall()
        return [LogEntry.from_dict(dict(row)) for row in rows]

    def close(self) -> None:
        super().close()
        self._schema_ready = False

    def delete_all(self) -> None:
        self._ensure_schema()
        with self.transaction() as conn:
            conn.execute("DELETE FROM logs")


# --------------------------------------------------------------------------- #
#  Singleton facade                                                           #
# --------------------------------------------------------------------------- #
class Logger:
    """Thread-safe singleton logger."""

    _instance: "Logger | None" = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "Logger":  # noqa: D401
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False  # type: ignore[attr-defined]
        return cls._instance  # type: ignore[return-value]

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True

        self._lock = threading.Lock()
        self._repo = LogRepository(LOG_DB_PATH)
        self.entries: list[LogEntry] = []

    @property
    def db_path(self) -> Path:
        return self._repo.db_path

    def close(self) -> None:
        with self._lock:
            self._repo.close()

    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        level: str = "INFO",
        reference_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Records an event; never raises for database problems."""
        entry = LogEntry(
            id=None,
            timestamp=datetime.now(timezone.utc),
            log_level=normalize_level(level),
            feature=feature,
            event=event,
            reference_id=reference_id,
            message=message,
        )
        with self._lock:
            self.entries.append(entry)
            try:
                self._repo.insert(entry)
            except (OSError, sqlite3.Error):
                self._repo.close()

    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        """Newest first."""
        return self.query_logs(limit=limit)

    def query_logs(
        self,
        *,
        feature: Optional[str] = None,
        event: Optional[str] = None,
        reference_id: Optional[str] = None,
        level: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        limit: int = 1_000,
    ) -> List[LogEntry]:
        """
        Filters are ANDed; ``start_time``/``end_time`` are UTC ISO strings.
        """
        filters = {
            "feature": feature,
            "event": event,
            "reference_id": reference_id,
            "log_level": level.upper() if level else None,
        }
        with self._lock:
            return self._repo.select(filters, start_time, end_time, limit)

    def clear_logs(self) -> None:
        with self._lock:
            self._repo.delete_all()
            self.entries.clear()


logger: Logger = Logger()
