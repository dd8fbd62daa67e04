"""VWAP with volume-weighted standard deviation bands"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..data.models import OHLCVBar


@dataclass(frozen=True)
class VWAPBands:
    """VWAP and its +/- 1 standard deviation bands"""
    vwap: float
    upper_band: float
    lower_band: float


def calculate_vwap(bars: Sequence[OHLCVBar], fallback_band: float = 50.0) -> VWAPBands:
    """
    Calculate typical-price VWAP with one standard deviation bands

    VWAP = sum(tp * vol) / sum(vol), where tp = (high + low + close) / 3
    std  = sqrt(E[tp^2] - E[tp]^2), floored at zero variance

    Args:
        bars: Bars to include (caller selects the lookback)
        fallback_band: Half-width of the band around the last close when the
            window carries no volume

    Returns:
        VWAPBands; zeroes for an empty series
    """
    if not bars:
        return VWAPBands(vwap=0.0, upper_band=0.0, lower_band=0.0)

    total_volume = 0.0
    weighted_price = 0.0
    weighted_square = 0.0

    for bar in bars:
        tp = bar.typical_price
        total_volume += bar.volume
        weighted_price += tp * bar.volume
        weighted_square += tp * tp * bar.volume

    if total_volume == 0:
        last_close = bars[-1].close
        return VWAPBands(
            vwap=last_close,
            upper_band=last_close + fallback_band,
            lower_band=last_close - fallback_band,
        )

    vwap = weighted_price / total_volume
    variance = weighted_square / total_volume - vwap * vwap
    std_dev = math.sqrt(max(variance, 0.0))

    return VWAPBands(vwap=vwap, upper_band=vwap + std_dev, lower_band=vwap - std_dev)
