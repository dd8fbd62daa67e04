"""Tests for the canonical data models"""

import math
from datetime import datetime, timezone

import pytest

from basis_app.data.models import (
    AlertCondition,
    CarryParams,
    InstrumentClass,
    OHLCVBar,
    PriceAlert,
    PriceSnapshot,
    Ticker,
)
from basis_app.errors import MalformedDataError, MissingDataError, UnknownTickerError


class TestTicker:
    """Test ticker parsing"""

    def test_parse_normalizes(self):
        assert Ticker.parse(" nq ") == Ticker.NQ
        assert Ticker.parse(Ticker.GC) is Ticker.GC

    def test_parse_unknown(self):
        with pytest.raises(UnknownTickerError) as exc_info:
            Ticker.parse("BTC")
        assert exc_info.value.ticker == "BTC"

    def test_parse_non_string(self):
        with pytest.raises(UnknownTickerError):
            Ticker.parse(5)


class TestPriceSnapshot:
    """Test snapshot construction and lookups"""

    def test_lookup(self, snapshot):
        assert snapshot.price("spy") == 595.0
        assert snapshot[Ticker.NQ] == 25993.25
        assert snapshot.ndx_spx_ratio == pytest.approx(4.3274773109)

    def test_prices_are_read_only(self, snapshot):
        with pytest.raises(TypeError):
            snapshot.prices[Ticker.NQ] = 1.0

    def test_missing_ticker(self, snapshot):
        """Test an incomplete snapshot is rejected"""
        prices = {t.value: p for t, p in snapshot.prices.items() if t != Ticker.GC}
        with pytest.raises(MissingDataError) as exc_info:
            PriceSnapshot.from_mapping(prices)
        assert exc_info.value.data_type == "snapshot"

    @pytest.mark.parametrize("bad_price", [0.0, -5.0, math.nan, math.inf, True, "600"])
    def test_invalid_price(self, snapshot, bad_price):
        """Test non-positive, non-finite and non-numeric prices are rejected"""
        prices = {t.value: p for t, p in snapshot.prices.items()}
        prices["SPY"] = bad_price
        with pytest.raises(MalformedDataError):
            PriceSnapshot.from_mapping(prices)

    def test_unknown_key(self, snapshot):
        prices = {t.value: p for t, p in snapshot.prices.items()}
        prices["BTC"] = 100000.0
        with pytest.raises(UnknownTickerError):
            PriceSnapshot.from_mapping(prices)


class TestCarryParams:
    """Test carry parameter validation"""

    def test_dividend_yield_by_family(self, carry_params):
        assert carry_params.dividend_yield(InstrumentClass.NQ) == 0.66
        assert carry_params.dividend_yield(InstrumentClass.ES) == 1.13
        assert carry_params.dividend_yield(InstrumentClass.GC) == 0.0

    @pytest.mark.parametrize("days", [0, -3, 1.5])
    def test_invalid_days(self, days):
        with pytest.raises(MalformedDataError):
            CarryParams(risk_free_rate=4.5, ndx_div_yield=0.66, spx_div_yield=1.13,
                        days_to_exp=days, next_expiration="2026-12-18")


class TestOHLCVBar:
    """Test derived bar properties"""

    def test_properties(self):
        bar = OHLCVBar(open=100, high=110, low=90, close=105, volume=1000)
        assert bar.range_value == 20
        assert bar.typical_price == pytest.approx(305 / 3)
        assert bar.midpoint == 100
        assert bar.close_position == pytest.approx(0.75)
        assert bar.is_bullish

    def test_zero_range(self):
        bar = OHLCVBar(open=100, high=100, low=100, close=100, volume=1000)
        assert bar.close_position is None
        assert not bar.is_bullish


class TestPriceAlert:
    """Test alert conditions and serialization"""

    def _alert(self, condition):
        return PriceAlert(id="a1", ticker=Ticker.NQ, condition=condition, price=26000.0,
                          created_at=datetime(2026, 10, 18, tzinfo=timezone.utc))

    def test_above(self):
        alert = self._alert(AlertCondition.ABOVE)
        assert alert.is_hit(26000.0)
        assert alert.is_hit(26000.25)
        assert not alert.is_hit(25999.75)

    def test_below(self):
        alert = self._alert(AlertCondition.BELOW)
        assert alert.is_hit(26000.0)
        assert not alert.is_hit(26000.25)

    def test_dict_round_trip(self):
        alert = self._alert(AlertCondition.BELOW)
        data = alert.to_dict()

        assert data["createdAt"] == "2026-10-18T00:00:00+00:00"
        assert PriceAlert.from_dict(data) == alert

    def test_from_dict_malformed(self):
        with pytest.raises(MalformedDataError):
            PriceAlert.from_dict({"id": "a1", "ticker": "NQ", "condition": "sideways",
                                  "price": 1, "createdAt": "2026-10-18"})
