"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

import pytest

from basis_app.data.models import CarryParams, OHLCVBar, PriceSnapshot

DEFAULT_PRICES = {
    "QQQ": 629.0,
    "NQ": 25993.25,
    "NDX": 25748.49,
    "SPY": 595.0,
    "ES": 5961.9,
    "SPX": 5950.0,
    "GLD": 305.0,
    "GC": 3050.0,
}


@pytest.fixture
def snapshot() -> PriceSnapshot:
    """Snapshot with the dashboard's default market prices."""
    return PriceSnapshot.from_mapping(
        DEFAULT_PRICES,
        timestamp=datetime(2026, 10, 18, 14, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def carry_params() -> CarryParams:
    """Carry parameters: 4.5% rate, 0.66%/1.13% yields, 45 days."""
    return CarryParams(
        risk_free_rate=4.5,
        ndx_div_yield=0.66,
        spx_div_yield=1.13,
        days_to_exp=45,
        next_expiration="2026-12-18",
    )


@pytest.fixture
def make_bars() -> Callable[..., list[OHLCVBar]]:
    """Factory building bars from closes with a fixed spread around each close."""

    def _make_bars(closes: list[float], volume: float = 1000.0,
                   volumes: Optional[list[float]] = None, spread: float = 1.0) -> list[OHLCVBar]:
        bars = []
        for i, close in enumerate(closes):
            open_price = closes[i - 1] if i > 0 else close
            bars.append(OHLCVBar(
                open=open_price,
                high=max(open_price, close) + spread,
                low=min(open_price, close) - spread,
                close=close,
                volume=volumes[i] if volumes is not None else volume,
                date=(date(2026, 1, 1) + timedelta(days=i)).isoformat(),
            ))
        return bars

    return _make_bars
