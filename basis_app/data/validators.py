"""
Boundary validation for OHLCV bars.

Bars coming from history providers are checked here before they are handed
to the order-flow engine, which assumes consistent, chronologically ordered
input.
"""

import math
from collections.abc import Sequence

from ..errors import MalformedDataError
from .models import OHLCVBar


def validate_bar(bar: OHLCVBar) -> None:
    """
    Validate a single bar's numeric integrity and OHLC consistency.

    Raises:
        MalformedDataError: If a price or volume is invalid or the high/low
            do not bound the open and close
    """
    for name in ("open", "high", "low", "close", "volume"):
        value = getattr(bar, name)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise MalformedDataError(f"Invalid {name} type: {type(value)}", raw_data=str(bar)[:100])
        if math.isnan(value) or math.isinf(value):
            raise MalformedDataError(f"Invalid {name} value: {value}", raw_data=str(bar)[:100])

    if bar.volume < 0:
        raise MalformedDataError(f"Negative volume: {bar.volume}", raw_data=str(bar)[:100])

    if bar.high < max(bar.open, bar.close, bar.low):
        raise MalformedDataError("High price less than open/close/low", raw_data=str(bar)[:100])
    if bar.low > min(bar.open, bar.close, bar.high):
        raise MalformedDataError("Low price greater than open/close/high", raw_data=str(bar)[:100])


def validate_bars(bars: Sequence[OHLCVBar]) -> None:
    """
    Validate every bar and the ascending date order of a series.

    Bars without a date are not order-checked.
    """
    previous_date = ""
    for bar in bars:
        validate_bar(bar)
        if bar.date and previous_date and bar.date < previous_date:
            raise MalformedDataError(
                f"Bars out of order: {bar.date} after {previous_date}",
                expected_format="ascending dates"
            )
        if bar.date:
            previous_date = bar.date


def split_valid_bars(bars: Sequence[OHLCVBar]) -> tuple[list[OHLCVBar], list[MalformedDataError]]:
    """
    Separate bars that pass validate_bar from those that do not.

    Returns:
        Valid bars in their original order, and the error for each dropped bar
    """
    valid = []
    errors = []
    for bar in bars:
        try:
            validate_bar(bar)
        except MalformedDataError as e:
            errors.append(e)
            continue
        valid.append(bar)
    return valid, errors
