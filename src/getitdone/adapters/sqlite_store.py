"""SQLite key-value backend.

Stores each key as one row of the ``kv`` table. The connection is opened
lazily on first use and kept for the lifetime of the store.
"""

from __future__ import annotations

import os
import sqlite3
import time
from datetime import UTC, datetime
from pathlib import Path

from platformdirs import user_data_dir

from getitdone.repositories import KeyValueStore

CREATE_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

UPSERT_KV = """
INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
"""


class SqliteKeyValueStore(KeyValueStore):
    """Key-value store backed by a single SQLite table.

    Provides:
    - WAL mode for safer concurrent readers
    - Automatic directory creation
    - Proper file permissions (owner read/write only)
    - Retry on "database is locked"
    """

    def __init__(self, db_path: str | Path | None = None):
        """
        Args:
            db_path: Path to database file. If None, uses default location.
        """
        if db_path is None:
            db_path = Path(user_data_dir("getitdone")) / "tasks.db"
        self.db_path = Path(db_path)
        self._connection: sqlite3.Connection | None = None

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection is not None:
            return self._connection

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not self.db_path.exists()

        connection = sqlite3.connect(str(self.db_path), timeout=30.0)
        connection.execute("PRAGMA journal_mode = WAL")
        connection.execute(CREATE_KV_TABLE)
        connection.commit()

        if is_new_database:
            os.chmod(self.db_path, 0o600)

        self._connection = connection
        return connection

    @staticmethod
    def _execute_with_retry(
        connection: sqlite3.Connection,
        sql: str,
        params: tuple,
        max_retries: int = 3,
    ) -> sqlite3.Cursor:
        for attempt in range(max_retries):
            try:
                return connection.execute(sql, params)
            except sqlite3.OperationalError as e:
                if "database is locked" in str(e) and attempt < max_retries - 1:
                    # Exponential backoff: 0.1s, 0.2s, 0.4s
                    time.sleep(0.1 * (2**attempt))
                    continue
                raise
        raise sqlite3.OperationalError("Max retries exceeded")

    def get(self, key: str) -> str | None:
        conn = self._get_connection()
        row = self._execute_with_retry(
            conn, "SELECT value FROM kv WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        now = datetime.now(UTC).isoformat()
        self._execute_with_retry(conn, UPSERT_KV, (key, value, now))
        conn.commit()

    def delete(self, key: str) -> None:
        conn = self._get_connection()
        self._execute_with_retry(conn, "DELETE FROM kv WHERE key = ?", (key,))
        conn.commit()

    def close(self) -> None:
        if self._connection is not None:
            try:
                self._connection.close()
            finally:
                self._connection = None

    @property
    def storage_type(self) -> str:
        return "sqlite"
