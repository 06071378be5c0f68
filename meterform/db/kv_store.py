"""Durable key-value slots for the user and the offline session."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from .schema import ensure_schema

logger = logging.getLogger(__name__)


class SessionPersistence:
    """Stores JSON-serializable values under string keys in SQLite.

    Values are kept as JSON text with no versioning; readers must tolerate
    older shapes themselves.
    """

    def __init__(self, db_path: str | Path = "~/.config/meterform/meterform.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def load(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None if never set."""
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return json.loads(row["value"])

    def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO kv_store (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE
               SET value = excluded.value,
                   updated_at = datetime('now', 'localtime')""",
            (key, json.dumps(value, ensure_ascii=False)),
        )
        conn.commit()
        logger.debug("Saved slot %r", key)

    def clear(self, key: str) -> None:
        """Delete ``key``. Clearing a missing key is a no-op."""
        conn = self._get_conn()
        conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        conn.commit()
        logger.debug("Cleared slot %r", key)
