"""
SQLite Key-Value Backend

Stores values in a single ``kv_store`` table. Blocking sqlite3 calls run in the
default executor so the event loop never waits on disk I/O.
"""

import asyncio
import logging
import os
import sqlite3
import threading
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from typecore.storage.backends.base import BaseKeyValueBackend

logger = logging.getLogger(__name__)

T = TypeVar('T')

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL,
  updated_at REAL NOT NULL
)
"""


class SQLiteBackend(BaseKeyValueBackend):
    """
    SQLite implementation of the key-value contract.

    One connection is shared by all executor threads and serialized with a
    lock, which also keeps ``:memory:`` databases usable.
    """

    backend_type = "sqlite"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the SQLite backend.

        Args:
            config: Supports ``db_path`` (default ``typecore.sqlite3``) and
                ``connection_timeout`` in seconds (default 30)
        """
        super().__init__(config)
        self.db_path = str(self.config.get("db_path", "typecore.sqlite3"))
        self.connection_timeout = float(self.config.get("connection_timeout", 30.0))
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    async def _execute(self, func: Callable[[sqlite3.Connection], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._execute_locked, func)

    def _execute_locked(self, func: Callable[[sqlite3.Connection], T]) -> T:
        with self._lock:
            if self._conn is None:
                raise RuntimeError("SQLite connection is closed")
            return func(self._conn)

    async def _initialize_backend(self) -> None:
        if self.db_path != ":memory:" and os.path.dirname(self.db_path):
            os.makedirs(os.path.dirname(self.db_path), exist_ok=True)
        self._conn = sqlite3.connect(
            self.db_path,
            timeout=self.connection_timeout,
            isolation_level=None,  # autocommit
            check_same_thread=False,
        )
        await self._execute(lambda conn: conn.execute(_SCHEMA))
        logger.debug("Opened SQLite key-value store at %s", self.db_path)

    async def _shutdown_backend(self) -> None:
        def close() -> None:
            with self._lock:
                if self._conn is not None:
                    self._conn.close()
                    self._conn = None

        await asyncio.get_running_loop().run_in_executor(None, close)
        logger.debug("Closed SQLite key-value store at %s", self.db_path)

    async def _get_value(self, key: str) -> Optional[str]:
        def read(conn: sqlite3.Connection) -> Optional[str]:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

        return await self._execute(read)

    async def _set_value(self, key: str, value: str) -> None:
        def write(conn: sqlite3.Connection) -> None:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                  value=excluded.value,
                  updated_at=excluded.updated_at
                """,
                (key, value, time.time()),
            )

        await self._execute(write)

    async def _delete_value(self, key: str) -> bool:
        def remove(conn: sqlite3.Connection) -> bool:
            return conn.execute("DELETE FROM kv_store WHERE key = ?", (key,)).rowcount > 0

        return await self._execute(remove)
