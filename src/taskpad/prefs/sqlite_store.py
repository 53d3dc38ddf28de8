# src/taskpad/prefs/sqlite_store.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from ..core.ports import PreferenceValue
from ..errors import PreferenceStoreError

logger = logging.getLogger(__name__)


class SqlitePreferenceStore:
    """
    SQLite key-value preference store.

    Values are stored JSON-encoded so a bool comes back as a bool and a str as a str.

    Thread-safety:
    - each call opens its own SQLite connection
    - the async API runs the blocking work in a worker thread
    """

    def __init__(self, db_path: str | Path = "prefs.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqlitePreferenceStore ready db=%s", self._db_path)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL DEFAULT 0
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get_sync(self, key: str) -> Any | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PreferenceStoreError(f"read failed key={key}: {e}") from e

        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except ValueError:
            logger.warning("Undecodable preference value key=%s; treating as absent.", key)
            return None

    def set_sync(self, key: str, value: PreferenceValue) -> None:
        encoded = json.dumps(value, ensure_ascii=False)
        try:
            # sqlite3 stores text as UTF-8; lone surrogates cannot be bound.
            encoded.encode("utf-8")
        except ValueError as e:
            raise PreferenceStoreError(f"cannot encode key={key}: {e}") from e
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO preferences(key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, encoded, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PreferenceStoreError(f"write failed key={key}: {e}") from e

    # ---- async port ----

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self.get_sync, key)

    async def set(self, key: str, value: PreferenceValue) -> None:
        await asyncio.to_thread(self.set_sync, key, value)
