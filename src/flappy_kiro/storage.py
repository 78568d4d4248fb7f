"""
storage.py: String key/value persistence for high score and character choice.

SqliteStore is the durable store. FallbackStore wraps it and quietly moves to
an in-memory dict for the rest of the session the first time the database
fails, so callers never see a storage error.
"""

import logging
import sqlite3
from typing import Dict, Optional, Protocol

from .constants import DB_FILE

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The durable store could not complete a read or write."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def close(self) -> None: ...


class MemoryStore:
    """Volatile store; lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = str(value)

    def close(self) -> None:
        pass


class SqliteStore:
    """Handles all interaction with the SQLite database."""

    def __init__(self, db_file: str = DB_FILE):
        try:
            self.conn = sqlite3.connect(db_file)
        except sqlite3.Error as e:
            raise StorageError(f"cannot open {db_file}: {e}") from e
        try:
            self.cur = self.conn.cursor()
            self.setup()
        except sqlite3.Error as e:
            self.conn.close()
            raise StorageError(f"cannot open {db_file}: {e}") from e

    def setup(self):
        """Creates the table if it doesn't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS KeyValue (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()

    def get(self, key: str) -> Optional[str]:
        try:
            self.cur.execute("SELECT value FROM KeyValue WHERE key=?", (key,))
            row = self.cur.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"get {key!r} failed: {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            self.cur.execute(
                "INSERT OR REPLACE INTO KeyValue (key, value) VALUES (?, ?)",
                (key, str(value)))
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"set {key!r} failed: {e}") from e

    def close(self):
        try:
            self.conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"close failed: {e}") from e


class FallbackStore:
    """
    Delegates to `primary` until it raises StorageError, then serves every
    later call from memory. Values written before the failure are kept.
    """

    def __init__(self, primary: KeyValueStore):
        self.primary = primary
        self.memory = MemoryStore()
        self.degraded = False

    def _degrade(self, error: StorageError):
        logger.warning("Storage unavailable, using in-memory values: %s", error)
        self.degraded = True

    def get(self, key: str) -> Optional[str]:
        if not self.degraded:
            try:
                value = self.primary.get(key)
            except StorageError as e:
                self._degrade(e)
            else:
                if value is not None:
                    self.memory.set(key, value)
                return value
        return self.memory.get(key)

    def set(self, key: str, value: str) -> None:
        self.memory.set(key, value)
        if not self.degraded:
            try:
                self.primary.set(key, value)
            except StorageError as e:
                self._degrade(e)

    def close(self) -> None:
        try:
            self.primary.close()
        except StorageError as e:
            logger.warning("Closing storage failed: %s", e)


def open_store(db_file: str = DB_FILE) -> KeyValueStore:
    try:
        return FallbackStore(SqliteStore(db_file))
    except StorageError as e:
        logger.warning("Falling back to in-memory storage: %s", e)
        return MemoryStore()
