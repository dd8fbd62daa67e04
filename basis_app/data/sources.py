"""
Fallback resolution for collaborator data.

Providers (quote feeds, dividend history, rate series) are fetched outside
this package. These functions turn whatever they returned into validated
snapshots and carry parameters, substituting configured defaults field by
field and logging each substitution.
"""

import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from ..config.defaults import CarryDefaults, QuoteDefaults
from ..logging.config import get_logger
from ..utils.time import next_quarterly_expiration
from .models import CarryParams, PriceSnapshot, Ticker

logger = get_logger(__name__)


def _usable_price(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value) or value <= 0:
        return None
    return float(value)


def assemble_snapshot(fetched: Mapping[str, Any], defaults: Optional[QuoteDefaults] = None,
                      timestamp: Optional[datetime] = None) -> PriceSnapshot:
    """
    Build a complete snapshot from possibly partial provider quotes

    Args:
        fetched: Quotes keyed by ticker symbol; missing, null, non-numeric or
            non-positive entries are replaced
        defaults: Per-ticker fallback prices
        timestamp: Snapshot time, defaults to now (UTC)

    Returns:
        PriceSnapshot with every ticker present
    """
    defaults = defaults or QuoteDefaults()
    normalized = {str(k).strip().upper(): v for k, v in fetched.items()}

    prices = {}
    for ticker in Ticker:
        price = _usable_price(normalized.get(ticker.value))
        if price is None:
            price = getattr(defaults, ticker.value.lower())
            logger.warning(
                "Quote unavailable, using fallback price",
                ticker=ticker.value,
                received=normalized.get(ticker.value),
                fallback=price,
            )
        prices[ticker] = price

    return PriceSnapshot(prices=prices, timestamp=timestamp or datetime.now(timezone.utc))


def trailing_dividend_yield(dividends: Optional[Sequence[tuple[datetime, float]]],
                            price: Optional[float], now: Optional[datetime] = None,
                            fallback: float = 0.0) -> float:
    """
    Trailing twelve-month dividend yield in percent, rounded to 3 decimals

    Args:
        dividends: (timestamp, amount) events; None when the provider failed
        price: Current ETF price
        now: Reference time, defaults to now (UTC)
        fallback: Yield used when dividends or price are unavailable

    Returns:
        Yield percent
    """
    if dividends is None or not price or price <= 0:
        logger.warning("Dividend data unavailable, using fallback yield", fallback=fallback)
        return fallback

    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=365)

    total = sum(amount for when, amount in dividends if when > cutoff)
    return round(total / price * 100, 3)


def resolve_risk_free_rate(primary: Optional[float], secondary: Optional[float] = None,
                           defaults: Optional[CarryDefaults] = None) -> float:
    """
    Pick the risk-free rate from the primary or secondary source

    Each source is only trusted inside its sanity bounds; otherwise the
    configured fallback rate is used.
    """
    defaults = defaults or CarryDefaults()

    if primary is not None and defaults.primary_rate_min <= primary <= defaults.primary_rate_max:
        return round(primary, 3)

    if secondary is not None and defaults.secondary_rate_min <= secondary <= defaults.secondary_rate_max:
        logger.info("Primary rate rejected, using secondary source", primary=primary, secondary=secondary)
        return round(secondary, 3)

    logger.warning(
        "No usable risk-free rate, using fallback",
        primary=primary,
        secondary=secondary,
        fallback=defaults.risk_free_rate,
    )
    return defaults.risk_free_rate


def build_carry_params(now: Optional[datetime] = None, risk_free_rate: Optional[float] = None,
                       ndx_div_yield: Optional[float] = None, spx_div_yield: Optional[float] = None,
                       defaults: Optional[CarryDefaults] = None) -> CarryParams:
    """Assemble carry parameters for the next quarterly expiration"""
    defaults = defaults or CarryDefaults()
    now = now or datetime.now(timezone.utc)
    expiration = next_quarterly_expiration(now)

    return CarryParams(
        risk_free_rate=risk_free_rate if risk_free_rate is not None else defaults.risk_free_rate,
        ndx_div_yield=ndx_div_yield if ndx_div_yield else defaults.ndx_div_yield,
        spx_div_yield=spx_div_yield if spx_div_yield else defaults.spx_div_yield,
        days_to_exp=expiration.days_remaining,
        next_expiration=expiration.iso_date,
        updated_at=now,
    )
