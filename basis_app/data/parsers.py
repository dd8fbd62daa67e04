"""
Parsers for user input and quote-provider payloads.

This module handles the conversion of raw strings and chart responses into
the canonical models, applying the per-field defaults the dashboard uses when
a provider returns partial data.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional, Union

import orjson

from ..errors import InvalidNumericInputError, MalformedDataError
from .models import CryptoAsset, CryptoGlobalMarket, OHLCVBar


def parse_json_payload(raw_data: Union[str, bytes]) -> dict[str, Any]:
    """
    Parse a raw JSON provider response into a dictionary.

    Raises:
        MalformedDataError: If the payload is not valid JSON or not an object
    """
    try:
        payload = orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedDataError(f"Invalid JSON: {e}", raw_data=str(raw_data)[:100]) from e

    if not isinstance(payload, dict):
        raise MalformedDataError(
            f"Expected JSON object, got {type(payload).__name__}",
            expected_format="object"
        )
    return payload


def parse_numeric_input(raw_value: Union[str, int, float]) -> float:
    """
    Parse a user-entered value into a finite float.

    Raises:
        InvalidNumericInputError: If the value is empty, non-numeric or not finite
    """
    if isinstance(raw_value, bool):
        raise InvalidNumericInputError("Boolean is not a numeric input", raw_value=str(raw_value))

    if isinstance(raw_value, (int, float)):
        value = float(raw_value)
    else:
        text = str(raw_value).strip().replace(",", "")
        if not text:
            raise InvalidNumericInputError("Empty numeric input", raw_value=str(raw_value))
        try:
            value = float(text)
        except ValueError:
            raise InvalidNumericInputError(f"Not a number: {raw_value}", raw_value=str(raw_value)) from None

    if math.isnan(value) or math.isinf(value):
        raise InvalidNumericInputError(f"Not a finite number: {raw_value}", raw_value=str(raw_value))

    return value


def _chart_result(payload: dict[str, Any]) -> Optional[dict[str, Any]]:
    results = (payload.get("chart") or {}).get("result") or []
    if not results:
        return None
    return results[0]


def parse_chart_bars(payload: dict[str, Any]) -> list[OHLCVBar]:
    """
    Parse a chart response (timestamps plus quote arrays) into bars.

    Entries with a null close are skipped. Missing open/high/low fall back to
    the close and a missing volume to zero. An empty list is a valid "no data"
    result.
    """
    result = _chart_result(payload)
    if result is None:
        return []

    timestamps = result.get("timestamp") or []
    quotes = (result.get("indicators") or {}).get("quote") or [{}]
    quote = quotes[0] or {}

    def _field(name: str, i: int) -> Optional[float]:
        values = quote.get(name) or []
        return values[i] if i < len(values) else None

    bars = []
    for i, ts in enumerate(timestamps):
        close = _field("close", i)
        if close is None:
            continue
        bars.append(OHLCVBar(
            open=float(_field("open", i) or close),
            high=float(_field("high", i) or close),
            low=float(_field("low", i) or close),
            close=float(close),
            volume=float(_field("volume", i) or 0),
            date=datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat(),
        ))

    return bars


def parse_chart_price(payload: dict[str, Any]) -> Optional[float]:
    """
    Read the latest price from a chart response, rounded to cents.

    Prefers the regular market price from the metadata and falls back to the
    last non-null close. Returns None when neither is available.
    """
    result = _chart_result(payload)
    if result is None:
        return None

    price = (result.get("meta") or {}).get("regularMarketPrice")
    if price is None:
        quotes = (result.get("indicators") or {}).get("quote") or [{}]
        closes = [c for c in ((quotes[0] or {}).get("close") or []) if c is not None]
        price = closes[-1] if closes else None

    if not price:
        return None
    return round(float(price), 2)


def parse_chart_dividends(payload: dict[str, Any]) -> list[tuple[datetime, float]]:
    """Extract (timestamp, amount) dividend events from a chart response."""
    result = _chart_result(payload)
    if result is None:
        return []

    events = (result.get("events") or {}).get("dividends") or {}
    dividends = []
    for event in events.values():
        try:
            when = datetime.fromtimestamp(event["date"], tz=timezone.utc)
            dividends.append((when, float(event["amount"])))
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedDataError(f"Invalid dividend event: {e}", raw_data=str(event)[:100]) from e

    return sorted(dividends)


def parse_crypto_asset(coin: dict[str, Any]) -> CryptoAsset:
    """
    Map a market-list entry into a CryptoAsset

    The 24h change prefers the in-currency percentage; missing numeric fields
    default to zero.
    """
    if "id" not in coin:
        raise MalformedDataError("Coin entry missing id", raw_data=str(coin)[:100])

    change_24h = coin.get("price_change_percentage_24h_in_currency")
    if change_24h is None:
        change_24h = coin.get("price_change_percentage_24h")

    return CryptoAsset(
        id=str(coin["id"]),
        symbol=str(coin.get("symbol") or "").upper(),
        name=str(coin.get("name") or ""),
        price=float(coin.get("current_price") or 0),
        change_24h=float(change_24h or 0),
        change_7d=float(coin.get("price_change_percentage_7d_in_currency") or 0),
        market_cap=float(coin.get("market_cap") or 0),
        volume_24h=float(coin.get("total_volume") or 0),
    )


def parse_fear_greed(payload: Optional[dict[str, Any]]) -> tuple[int, str]:
    """Read (value, label) from a fear & greed response, defaulting to (50, 'Neutral')"""
    entries = (payload or {}).get("data") or [{}]
    entry = entries[0] or {}
    try:
        value = int(entry.get("value") or 50)
    except (TypeError, ValueError):
        value = 50
    return value, entry.get("value_classification") or "Neutral"


def _number_or_zero(value: Any) -> float:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_global_market(payload: Optional[dict[str, Any]]) -> CryptoGlobalMarket:
    """
    Read dominance and market totals from a global market response

    Accepts the full response (totals under "data") or the unwrapped data
    object. Any missing or non-numeric total reads as zero.
    """
    data = payload or {}
    if isinstance(data.get("data"), dict):
        data = data["data"]

    dominance = data.get("market_cap_percentage") or {}
    return CryptoGlobalMarket(
        btc_dominance=_number_or_zero(dominance.get("btc")),
        eth_dominance=_number_or_zero(dominance.get("eth")),
        total_market_cap=_number_or_zero((data.get("total_market_cap") or {}).get("usd")),
        total_volume_24h=_number_or_zero((data.get("total_volume") or {}).get("usd")),
    )
