"""
Error handling tests for the dashboard engine.

Tests cover error classification, boundary rejection of bad input and the
fallbacks the engine applies instead of propagating data quality errors.
"""

import os
import tempfile
from datetime import date

import pytest

from basis_app.data.models import EconomicEvent, OHLCVBar, PriceSnapshot, Ticker
from basis_app.data.sources import assemble_snapshot
from basis_app.engine import DashboardEngine
from basis_app.errors import (
    DataQualityError,
    InvalidNumericInputError,
    MalformedDataError,
    MissingDataError,
    PersistenceError,
    SystemFailureError,
    UnknownTickerError,
)
from basis_app.metrics.calculator import OrderFlowCalculator
from basis_app.persistence.alert_store import AlertStore
from basis_app.pricing.converter import convert, convert_input


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors have proper hierarchy."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        missing_error = MissingDataError("missing data", data_type="snapshot")
        assert isinstance(missing_error, DataQualityError)
        assert missing_error.data_type == "snapshot"

        malformed_error = MalformedDataError("bad bar", raw_data="{}", expected_format="ohlcv")
        assert isinstance(malformed_error, DataQualityError)
        assert malformed_error.expected_format == "ohlcv"

        numeric_error = InvalidNumericInputError("not a number", raw_value="abc")
        assert isinstance(numeric_error, DataQualityError)
        assert numeric_error.raw_value == "abc"

        ticker_error = UnknownTickerError("unknown", ticker="BTC")
        assert isinstance(ticker_error, DataQualityError)
        assert ticker_error.ticker == "BTC"

    def test_system_failure_error_hierarchy(self):
        """Test that system failure errors have proper hierarchy."""
        persistence_error = PersistenceError("write failed", operation="save", target="alerts.db")
        assert isinstance(persistence_error, SystemFailureError)
        assert persistence_error.recoverable is False
        assert persistence_error.operation == "save"
        assert persistence_error.target == "alerts.db"

    def test_context_is_kept(self):
        error = MissingDataError("missing", context={"missing": ["GC"]})
        assert error.context == {"missing": ["GC"]}


class TestConverterErrorHandling:
    """Test conversion input boundaries."""

    def test_unknown_ticker_raises(self, snapshot, carry_params):
        """Test unknown tickers are rejected at the boundary."""
        with pytest.raises(UnknownTickerError):
            convert_input("100", "BTC", "NQ", snapshot, carry_params)

    def test_bad_number_returns_none(self, snapshot, carry_params):
        assert convert_input("12..5", "QQQ", "NQ", snapshot, carry_params) is None

    def test_unsupported_pair_is_identity(self, snapshot, carry_params):
        """Test pairs without a rule pass the value through unchanged."""
        assert convert(3000.0, Ticker.GC, Ticker.NQ, snapshot, carry_params) == 3000.0


class TestCalculatorErrorHandling:
    """Test analytics on degenerate input never raise."""

    def test_single_bar(self):
        snapshot = OrderFlowCalculator().analyze([OHLCVBar(open=100, high=101, low=99, close=100, volume=10)])
        assert snapshot.delta.direction == "NEUTRAL"
        assert snapshot.blocks.block_flow == 0

    def test_zero_volume_series(self, make_bars):
        snapshot = OrderFlowCalculator().analyze(make_bars([100, 101, 102], volume=0))
        assert snapshot.vwap.vwap == 102
        assert snapshot.imbalance.ofi == 0.0

    def test_flat_series(self, make_bars):
        snapshot = OrderFlowCalculator().analyze(make_bars([100.0] * 30, spread=0.0))
        assert snapshot.imbalance.aggressor == "BALANCED"
        assert snapshot.delta.direction == "SELLING"


class TestErrorRecoveryMechanisms:
    """Test fallbacks that keep the dashboard running."""

    def test_snapshot_rejects_partial_prices(self):
        with pytest.raises(MissingDataError):
            PriceSnapshot.from_mapping({"QQQ": 629.0})

    def test_snapshot_assembly_fills_gaps(self):
        """Test partial quotes are completed from defaults instead of raising."""
        snapshot = assemble_snapshot({"QQQ": 629.0})
        assert set(snapshot.prices) == set(Ticker)

    def test_engine_discards_malformed_vix(self, make_bars):
        """Test a malformed VIX series is dropped and the default level used."""
        bad_vix = [OHLCVBar(open=20, high=19, low=18, close=20, volume=0)]
        result = DashboardEngine().predict(
            make_bars([100 + i for i in range(30)]),
            vix_bars=bad_vix,
            today=date(2026, 10, 18),
        )
        assert result.vix_level == 20.0
        assert result.breadth.vix_regime == "UNKNOWN"

    def test_engine_skips_undated_events(self, make_bars):
        """Test an event with an unparseable date does not stop the prediction."""
        result = DashboardEngine().predict(
            make_bars([100 + i for i in range(30)]),
            events=[
                EconomicEvent(date="TBD", event="FOMC"),
                EconomicEvent(date="2026-10-20", event="CPI m/m"),
            ],
            today=date(2026, 10, 18),
        )

        assert [u.event.event for u in result.economic_events] == ["CPI m/m"]
        assert result.news.news_type == "CPI m/m"

    def test_store_failure_propagates(self):
        """Test persistence failures surface to the caller."""
        temp_dir = tempfile.mkdtemp()
        try:
            db_path = os.path.join(temp_dir, "alerts.db")
            store = AlertStore(db_path)
            os.remove(db_path)
            os.mkdir(db_path)

            with pytest.raises(PersistenceError):
                store.load()
        finally:
            import shutil
            shutil.rmtree(temp_dir)
