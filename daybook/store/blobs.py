"""Synchronous string-keyed blob stores."""

import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

from daybook.errors import PersistenceFailure
from daybook.store.schema import get_db_path, init_database

logger = structlog.get_logger(__name__)


class BlobStore(ABC):
    """Key-value store holding one text blob per key."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value under key, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key if present."""


class SqliteBlobStore(BlobStore):
    """Blob store backed by the kv table of a SQLite file.

    Every call opens its own connection. sqlite3 errors are raised as
    PersistenceFailure.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()

    def _connect(self) -> sqlite3.Connection:
        """Create a connection, creating the schema on first use."""
        if not self.db_path.exists():
            init_database(self.db_path)
        return sqlite3.connect(self.db_path)

    def get_item(self, key: str) -> str | None:
        """Get the blob stored under key.

        Args:
            key: Storage key.

        Returns:
            Stored text, or None if nothing is stored under key.

        Raises:
            PersistenceFailure: If the database cannot be read.
        """
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            logger.warning("blob_read_failed", key=key, error=str(e))
            raise PersistenceFailure(f"Could not read '{key}': {e}") from e

        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            PersistenceFailure: If the database cannot be written.
        """
        self._write(
            key,
            "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        logger.debug("blob_written", key=key, size=len(value))

    def remove_item(self, key: str) -> None:
        """Remove key. Removing a missing key is not an error.

        Raises:
            PersistenceFailure: If the database cannot be written.
        """
        self._write(key, "DELETE FROM kv WHERE key = ?", (key,))
        logger.debug("blob_removed", key=key)

    def _write(self, key: str, sql: str, params: tuple[str, ...]) -> None:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as e:
            logger.warning("blob_write_failed", key=key, error=str(e))
            raise PersistenceFailure(f"Could not write '{key}': {e}") from e

        try:
            conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.warning("blob_write_failed", key=key, error=str(e))
            raise PersistenceFailure(f"Could not write '{key}': {e}") from e
        finally:
            conn.close()
