"""
core/common/db_interface.py
===========================

SQLite plumbing shared by the key-value store and the event logger.

The widget and a separately launched settings window may hold the same
database file open at once, so connections wait on locks for ``timeout``
seconds instead of failing immediately.
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

MEMORY_DB = ":memory:"
DEFAULT_TIMEOUT_S = 5.0


def create_sqlite_connection(
    db_path: Path | str,
    *,
    check_same_thread: bool = False,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> sqlite3.Connection:
    """Opens ``db_path`` (creating its directory) with ``sqlite3.Row`` rows."""
    target = str(db_path)
    if target != MEMORY_DB:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(target, check_same_thread=check_same_thread, timeout=timeout)
    conn.row_factory = sqlite3.Row
    return conn


class SQLiteRepository:
    """Base for classes owning one lazily opened connection."""

    def __init__(self, db_path: Path | str, *, check_same_thread: bool = False) -> None:
        self._db_path = Path(db_path) if str(db_path) != MEMORY_DB else db_path
        self._check_same_thread = check_same_thread
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def db_path(self) -> Path | str:
        return self._db_path

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = create_sqlite_connection(
                self._db_path, check_same_thread=self._check_same_thread
            )
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commits when the block succeeds, rolls back and re-raises otherwise."""
        with self.conn as conn:
            yield conn

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()
