"""
core/settings/logic/key_value_store.py
======================================

Implementations of :class:`core.contracts.settings.IKeyValueStore`.

- SQLiteKeyValueStore : single ``kv`` table in the settings database
- MemoryKeyValueStore : process-local dict (tests, previews)

The SQLite file is first touched by ``get``/``set``/``delete``, so an
unreadable or corrupt database surfaces as ``sqlite3.Error`` from those calls
and never from the constructor.
"""

from __future__ import annotations

from pathlib import Path
from threading import RLock
from typing import Dict, Final, Optional

from core.common.db_interface import SQLiteRepository
from core.contracts.settings import IKeyValueStore


class SQLiteKeyValueStore(SQLiteRepository, IKeyValueStore):
    _lock: Final[RLock] = RLock()

    def __init__(self, db_path: Path | str) -> None:
        super().__init__(db_path, check_same_thread=False)
        self._schema_ready = False

    # ------------------------- public API --------------------------- #
    def get(self, key: str) -> Optional[str]:
        with self._lock:
            self._ensure_schema()
            row = self.conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._ensure_schema()
            with self.transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO kv (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value
                    """,
                    (key, value),
                )

    def delete(self, key: str) -> None:
        with self._lock:
            self._ensure_schema()
            with self.transaction() as conn:
                conn.execute("DELETE FROM kv WHERE key=?", (key,))

    def close(self) -> None:
        super().close()
        self._schema_ready = False

    # ------------------------- schema -------------------------------- #
    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv(
                    key   TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        self._schema_ready = True


class MemoryKeyValueStore(IKeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
