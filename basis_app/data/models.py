"""
Canonical data models for prices, carry inputs and OHLCV history.

This module defines immutable data structures that the pricing and analytics
core consumes. Validation happens at construction so the core can assume a
fully-populated, positive-priced snapshot.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional, Union

from ..errors import MalformedDataError, MissingDataError, UnknownTickerError


class Ticker(str, Enum):
    """Supported instruments."""
    QQQ = "QQQ"
    NQ = "NQ"
    NDX = "NDX"
    SPY = "SPY"
    ES = "ES"
    SPX = "SPX"
    GLD = "GLD"
    GC = "GC"

    @classmethod
    def parse(cls, symbol: Union[str, "Ticker"]) -> "Ticker":
        """Map a ticker string to the enum, rejecting unknown symbols."""
        if isinstance(symbol, Ticker):
            return symbol
        if not isinstance(symbol, str):
            raise UnknownTickerError(f"Ticker must be a string, got {type(symbol)}", ticker=str(symbol))
        key = symbol.strip().upper()
        try:
            return cls(key)
        except ValueError:
            raise UnknownTickerError(f"Unsupported ticker: {symbol}", ticker=symbol) from None


class InstrumentClass(str, Enum):
    """Futures families with their own contract multiplier and carry inputs."""
    NQ = "NQ"
    ES = "ES"
    GC = "GC"


class AlertCondition(str, Enum):
    """Direction a price must cross for an alert to trigger."""
    ABOVE = "above"
    BELOW = "below"


@dataclass(frozen=True)
class PriceSnapshot:
    """Live prices for every supported ticker at a point in time."""
    prices: Mapping[Ticker, float]
    timestamp: datetime

    def __post_init__(self):
        """Freeze the price mapping and check the snapshot is complete."""
        normalized = {Ticker.parse(k): v for k, v in dict(self.prices).items()}

        missing = [t.value for t in Ticker if t not in normalized]
        if missing:
            raise MissingDataError(
                f"Snapshot missing prices for: {', '.join(missing)}",
                data_type="snapshot",
                context={"missing": missing}
            )

        for ticker, price in normalized.items():
            if not isinstance(price, (int, float)) or isinstance(price, bool):
                raise MalformedDataError(f"Invalid price type for {ticker.value}: {type(price)}")
            if math.isnan(price) or math.isinf(price) or price <= 0:
                raise MalformedDataError(f"Non-positive price for {ticker.value}: {price}")

        object.__setattr__(self, "prices", MappingProxyType(
            {ticker: float(price) for ticker, price in normalized.items()}
        ))

    @classmethod
    def from_mapping(cls, prices: Mapping[Any, float],
                     timestamp: Optional[datetime] = None) -> "PriceSnapshot":
        """Build a snapshot from a {symbol: price} mapping."""
        return cls(
            prices={Ticker.parse(k): v for k, v in prices.items()},
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    def price(self, ticker: Union[str, Ticker]) -> float:
        """Current price for a ticker."""
        return self.prices[Ticker.parse(ticker)]

    def __getitem__(self, ticker: Union[str, Ticker]) -> float:
        return self.price(ticker)

    @property
    def ndx_spx_ratio(self) -> float:
        """NDX/SPX index ratio."""
        return self.prices[Ticker.NDX] / self.prices[Ticker.SPX]


@dataclass(frozen=True)
class CarryParams:
    """Cost-of-carry inputs shared by the converter and premium analyzer."""
    risk_free_rate: float           # Percent, e.g. 4.5
    ndx_div_yield: float            # Percent
    spx_div_yield: float            # Percent
    days_to_exp: int                # Calendar days, never below 1
    next_expiration: str            # ISO date of the next quarterly expiration
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.days_to_exp, int) or isinstance(self.days_to_exp, bool):
            raise MalformedDataError(f"days_to_exp must be an integer, got {type(self.days_to_exp)}")
        if self.days_to_exp < 1:
            raise MalformedDataError(f"days_to_exp must be at least 1, got {self.days_to_exp}")

    def dividend_yield(self, instrument_class: InstrumentClass) -> float:
        """Dividend yield of the underlying index for a futures family."""
        if instrument_class == InstrumentClass.NQ:
            return self.ndx_div_yield
        if instrument_class == InstrumentClass.ES:
            return self.spx_div_yield
        # Gold carries no dividend; storage is priced into the future
        return 0.0


@dataclass(frozen=True)
class PremiumInfo:
    """Theoretical vs actual futures premium, rounded for display."""
    points: float
    percent: float
    dollars: float
    theoretical: float
    actual: float


@dataclass(frozen=True)
class OHLCVBar:
    """Single OHLCV bar, day-level or intraday."""
    open: float
    high: float
    low: float
    close: float
    volume: float
    date: str = ""

    @property
    def range_value(self) -> float:
        return self.high - self.low

    @property
    def typical_price(self) -> float:
        return (self.high + self.low + self.close) / 3

    @property
    def midpoint(self) -> float:
        return (self.high + self.low) / 2

    @property
    def close_position(self) -> Optional[float]:
        """Where the close sits within the range (0 = low, 1 = high), None for zero range."""
        if self.range_value == 0:
            return None
        return (self.close - self.low) / self.range_value

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open


@dataclass(frozen=True)
class VolumeProfile:
    """Volume-at-price summary for one analysis window."""
    poc: float = 0.0
    value_area_high: float = 0.0
    value_area_low: float = 0.0
    biggest_buyers_below: float = 0.0
    biggest_sellers_above: float = 0.0


@dataclass(frozen=True)
class PriceAlert:
    """User price alert against one ticker."""
    id: str
    ticker: Ticker
    condition: AlertCondition
    price: float
    triggered: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_hit(self, current_price: float) -> bool:
        """True when the current price satisfies the alert condition."""
        if self.condition == AlertCondition.ABOVE:
            return current_price >= self.price
        return current_price <= self.price

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ticker": self.ticker.value,
            "condition": self.condition.value,
            "price": self.price,
            "triggered": self.triggered,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriceAlert":
        try:
            return cls(
                id=str(data["id"]),
                ticker=Ticker.parse(data["ticker"]),
                condition=AlertCondition(data["condition"]),
                price=float(data["price"]),
                triggered=bool(data.get("triggered", False)),
                created_at=datetime.fromisoformat(data["createdAt"]),
            )
        except (KeyError, TypeError, ValueError, UnknownTickerError) as e:
            raise MalformedDataError(f"Invalid stored alert: {e}", raw_data=str(data)[:100]) from e


@dataclass(frozen=True)
class CryptoAsset:
    """Market summary for a single crypto asset."""
    id: str
    symbol: str
    name: str
    price: float = 0.0
    change_24h: float = 0.0
    change_7d: float = 0.0
    market_cap: float = 0.0
    volume_24h: float = 0.0


@dataclass(frozen=True)
class CryptoGlobalMarket:
    """Whole-market totals; zeros when the global feed is unavailable."""
    btc_dominance: float = 0.0      # % of total market cap
    eth_dominance: float = 0.0
    total_market_cap: float = 0.0   # USD
    total_volume_24h: float = 0.0   # USD


@dataclass(frozen=True)
class EconomicEvent:
    """Scheduled macro release."""
    date: str                       # ISO date
    event: str
    importance: str = "HIGH"
    consensus: str = "N/A"
    previous: str = "N/A"
