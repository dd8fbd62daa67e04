"""Tests for alert persistence layer."""

import os
import sqlite3
import tempfile
from datetime import datetime, timezone

import orjson
import pytest

from basis_app.data.models import AlertCondition, PriceAlert, Ticker
from basis_app.errors import PersistenceError
from basis_app.persistence.alert_store import AlertStore


def make_alert(alert_id: str = "a1", ticker: Ticker = Ticker.NQ, price: float = 26000.0,
               condition: AlertCondition = AlertCondition.ABOVE, triggered: bool = False) -> PriceAlert:
    return PriceAlert(
        id=alert_id,
        ticker=ticker,
        condition=condition,
        price=price,
        triggered=triggered,
        created_at=datetime(2026, 10, 18, 14, 30, tzinfo=timezone.utc),
    )


class TestAlertStore:
    """Test AlertStore class."""

    def setup_method(self):
        """Setup test database."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = os.path.join(self.temp_dir, "test_alerts.db")
        self.store = AlertStore(self.db_path)

    def teardown_method(self):
        """Cleanup test database."""
        import shutil
        shutil.rmtree(self.temp_dir)

    def _write_raw(self, value: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                ("priceAlerts", value, "2026-10-18T00:00:00+00:00"),
            )
        conn.close()

    def test_init_database(self):
        """Test database initialization."""
        assert os.path.exists(self.db_path)

        with sqlite3.connect(self.db_path) as conn:
            tables = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        conn.close()

        assert "kv_store" in [t[0] for t in tables]

    def test_load_empty(self):
        """Test loading before anything is saved."""
        assert self.store.load() == []
        assert self.store.updated_at() is None

    def test_save_and_load(self):
        """Test saved alerts load back unchanged."""
        alerts = [
            make_alert("a1"),
            make_alert("a2", Ticker.SPY, 600.0, AlertCondition.BELOW, triggered=True),
        ]
        self.store.save(alerts)

        assert self.store.load() == alerts
        assert self.store.updated_at() is not None

    def test_save_replaces_list(self):
        """Test a save replaces the previous document."""
        self.store.save([make_alert("a1"), make_alert("a2")])
        self.store.save([make_alert("a3")])

        assert [a.id for a in self.store.load()] == ["a3"]

    def test_stored_document_format(self):
        """Test the stored JSON uses the wire field names."""
        self.store.save([make_alert("a1")])

        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = 'priceAlerts'").fetchone()
        conn.close()

        entry = orjson.loads(row[0])[0]
        assert entry["ticker"] == "NQ"
        assert entry["condition"] == "above"
        assert entry["triggered"] is False
        assert "createdAt" in entry

    def test_separate_storage_keys(self):
        """Test stores with different keys do not share alerts."""
        other = AlertStore(self.db_path, storage_key="otherAlerts")
        self.store.save([make_alert("a1")])

        assert other.load() == []

    def test_corrupt_document(self):
        """Test invalid JSON degrades to an empty list."""
        self._write_raw("{not json")
        assert self.store.load() == []

    def test_non_list_document(self):
        """Test a JSON object instead of a list degrades to an empty list."""
        self._write_raw('{"id": "a1"}')
        assert self.store.load() == []

    def test_malformed_entries_dropped(self):
        """Test malformed entries are skipped while valid ones load."""
        valid = make_alert("a1").to_dict()
        self._write_raw(orjson.dumps([
            valid,
            {"id": "a2", "ticker": "BTC", "condition": "above", "price": 1, "createdAt": "2026-10-18"},
            {"id": "a3", "ticker": "NQ"},
        ]).decode())

        alerts = self.store.load()
        assert [a.id for a in alerts] == ["a1"]

    def test_unreadable_database(self):
        """Test database errors surface as PersistenceError."""
        os.remove(self.db_path)
        os.mkdir(self.db_path)

        with pytest.raises(PersistenceError) as exc_info:
            self.store.save([make_alert()])

        assert exc_info.value.operation == "save"

    def test_unreadable_timestamp(self):
        """Test timestamp reads wrap database errors too."""
        os.remove(self.db_path)
        os.mkdir(self.db_path)

        with pytest.raises(PersistenceError) as exc_info:
            self.store.updated_at()

        assert exc_info.value.operation == "updated_at"
