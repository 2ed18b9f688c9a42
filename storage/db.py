"""
storage/db.py

SQLite backend for the durable mirror.

Schema
------
kv_store   one row per collection key; value is the serialised collection

Usage
-----
    from storage.db import SqliteKeyValueStore
    kv = SqliteKeyValueStore(Path("data/hospital.db"))
    kv.set("patients", "[...]")
"""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from storage.kv import KeyValueStore, check_key

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_DDL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL           -- ISO-8601 UTC
);
"""


def _now() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(tz=timezone.utc).isoformat()


class SqliteKeyValueStore(KeyValueStore):
    """
    Key-value table inside a single SQLite file.

    A new connection is opened per operation, so the store can be shared
    with Streamlit's script threads without holding a connection open.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        """
        Open (or create) the SQLite database and return a connection.

        :func:`sqlite3.Row` is set as the row_factory so rows behave like dicts.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        return conn

    def init_db(self) -> None:
        """Create the table if it does not already exist.  Idempotent."""
        conn = self._connect()
        try:
            with conn:
                conn.executescript(_DDL)
        finally:
            conn.close()
        logger.info("Key-value database initialised at %s", self.path)

    def get(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        finally:
            conn.close()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (check_key(key), value, _now()),
                )
        finally:
            conn.close()
        logger.debug("Stored key=%s (%d bytes)", key, len(value))

    def keys(self) -> Iterator[str]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        finally:
            conn.close()
        return iter([r["key"] for r in rows])
