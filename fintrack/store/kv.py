"""String-keyed durable key-value store backed by SQLite."""

import sqlite3
from pathlib import Path

from fintrack.store.schema import get_db_path, init_database

RECORDS_KEY = "finance:records"
SETTINGS_KEY = "finance:settings"
FIRST_LOAD_KEY = "finance:firstLoad"


class KeyValueStore:
    """Durable string key-value store.

    Every call opens its own connection, so an instance holds no open
    handles between calls. Backend failures raise sqlite3.Error.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        init_database(self.db_path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get(self, key: str) -> str | None:
        """Return the stored value or None if the key is absent."""
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value."""
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._connect()
        try:
            return [row[0] for row in conn.execute("SELECT key FROM kv ORDER BY key")]
        finally:
            conn.close()
