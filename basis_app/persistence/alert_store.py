"""Key-value alert persistence backed by SQLite."""

import sqlite3
import threading
from collections.abc import Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import orjson

from ..data.models import PriceAlert
from ..errors import MalformedDataError, PersistenceError
from ..logging.config import get_logger


class AlertStore:
    """
    SQLite key-value store holding the alert list as one JSON document.

    The whole list is written under a single storage key, so a save always
    replaces the previous list.
    """

    def __init__(self, db_path: str = "alerts.db", storage_key: str = "priceAlerts"):
        self.db_path = Path(db_path)
        self.storage_key = storage_key
        self.logger = get_logger("alerts.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", db_path=str(self.db_path), error=str(e))
            raise
        finally:
            if conn:
                conn.close()

    def load(self) -> list[PriceAlert]:
        """
        Load the stored alert list.

        Returns:
            Stored alerts; an empty list when nothing is stored. Undecodable
            documents and malformed entries are logged and dropped.

        Raises:
            PersistenceError: If the database cannot be read
        """
        with self._lock:
            try:
                with self._get_connection() as conn:
                    row = conn.execute(
                        "SELECT value FROM kv_store WHERE key = ?", (self.storage_key,)
                    ).fetchone()
            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to load alerts: {e}", operation="load", target=str(self.db_path)
                ) from e

        if row is None:
            return []

        try:
            entries = orjson.loads(row[0])
        except orjson.JSONDecodeError as e:
            self.logger.warning("Stored alerts are not valid JSON, starting empty", error=str(e))
            return []

        if not isinstance(entries, list):
            self.logger.warning("Stored alerts are not a list, starting empty", kind=type(entries).__name__)
            return []

        alerts = []
        for entry in entries:
            try:
                alerts.append(PriceAlert.from_dict(entry))
            except MalformedDataError as e:
                self.logger.warning("Dropping malformed stored alert", error=str(e), raw_data=e.raw_data)

        return alerts

    def save(self, alerts: Sequence[PriceAlert]) -> None:
        """
        Replace the stored alert list.

        Raises:
            PersistenceError: If the write fails
        """
        document = orjson.dumps([alert.to_dict() for alert in alerts]).decode()
        now = datetime.now(timezone.utc).isoformat()

        with self._lock:
            try:
                with self._get_connection() as conn:
                    conn.execute(
                        "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                        (self.storage_key, document, now),
                    )
                    conn.commit()
            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to save alerts: {e}", operation="save", target=str(self.db_path)
                ) from e

        self.logger.debug("Alerts saved", count=len(alerts), key=self.storage_key)

    def updated_at(self) -> Optional[str]:
        """Timestamp of the last save, None if never saved."""
        with self._lock:
            try:
                with self._get_connection() as conn:
                    row = conn.execute(
                        "SELECT updated_at FROM kv_store WHERE key = ?", (self.storage_key,)
                    ).fetchone()
            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to read alert timestamp: {e}", operation="updated_at", target=str(self.db_path)
                ) from e
        return row[0] if row else None
