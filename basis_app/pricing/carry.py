"""Cost-of-carry pricing of index futures"""

import math

DAYS_PER_YEAR = 365.0


def carry_multiplier(rate_percent: float, div_yield_percent: float, days_to_exp: float) -> float:
    """
    Spot-to-futures carry multiplier

    multiplier = e^((r - d) * t), with r and d given in percent and t in
    calendar days over a 365-day year

    Args:
        rate_percent: Risk-free rate, e.g. 4.5 for 4.5%
        div_yield_percent: Dividend yield of the underlying, in percent
        days_to_exp: Calendar days until expiration

    Returns:
        Carry multiplier (> 1 when the rate exceeds the yield)
    """
    t = days_to_exp / DAYS_PER_YEAR
    r = rate_percent / 100.0
    d = div_yield_percent / 100.0
    return math.exp((r - d) * t)


def carry_price(spot: float, rate_percent: float, div_yield_percent: float, days_to_exp: float) -> float:
    """
    Theoretical futures price from a spot index value

    Futures = Spot * e^((r - d) * t). No rounding; callers round for display.
    """
    return spot * carry_multiplier(rate_percent, div_yield_percent, days_to_exp)
