"""Volume-at-price profile with point of control and value area"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..data.models import OHLCVBar, VolumeProfile
from .imbalance import split_volume


@dataclass
class PriceBin:
    """Volume accumulated in one price bin"""
    index: int
    total: float = 0.0
    buy: float = 0.0
    sell: float = 0.0


@dataclass(frozen=True)
class ProfileSet:
    """Volume profiles over the daily, weekly and monthly windows"""
    daily: VolumeProfile
    weekly: VolumeProfile
    monthly: VolumeProfile


def bin_volume(bars: Sequence[OHLCVBar], bins: int = 50) -> tuple[float, float, dict[int, PriceBin]]:
    """
    Bucket bar volume into equal-width price bins

    Each bar is assigned to the bin containing its high/low midpoint, with
    the index clamped to the valid range.

    Returns:
        Tuple of (min price, bin size, occupied bins keyed by index)
    """
    min_price = min(bar.low for bar in bars)
    max_price = max(bar.high for bar in bars)
    price_range = (max_price - min_price) or 1.0
    bin_size = price_range / bins

    occupied: dict[int, PriceBin] = {}
    for bar in bars:
        index = math.floor((bar.midpoint - min_price) / bin_size)
        index = min(max(index, 0), bins - 1)

        price_bin = occupied.setdefault(index, PriceBin(index=index))
        buy_volume, sell_volume = split_volume(bar)
        price_bin.total += bar.volume
        price_bin.buy += buy_volume
        price_bin.sell += sell_volume

    return min_price, bin_size, occupied


def calculate_volume_profile(bars: Sequence[OHLCVBar], bins: int = 50,
                             value_area_pct: float = 0.70) -> VolumeProfile:
    """
    Calculate volume profile levels

    Args:
        bars: Bars to profile
        bins: Number of equal-width price bins over [min low, max high]
        value_area_pct: Share of total volume the value area must capture

    Returns:
        VolumeProfile with POC, VAH/VAL and imbalance levels; all zero for an
        empty series
    """
    if not bars:
        return VolumeProfile()

    min_price, bin_size, occupied = bin_volume(bars, bins)

    def bin_midpoint(index: int) -> float:
        return min_price + (index + 0.5) * bin_size

    ascending = [occupied[index] for index in sorted(occupied)]

    # Stable sort: ties go to the lower bin
    ranked = sorted(
        ascending,
        key=lambda b: b.total,
        reverse=True,
    )
    total_volume = sum(b.total for b in ranked)

    value_area = []
    cumulative = 0.0
    for price_bin in ranked:
        cumulative += price_bin.total
        value_area.append(price_bin.index)
        if cumulative >= total_volume * value_area_pct:
            break

    low_bin = min(value_area)
    high_bin = max(value_area)

    buyers_below = [b for b in ascending if b.index < low_bin and b.buy > 0]
    sellers_above = [b for b in ascending if b.index > high_bin and b.sell > 0]

    biggest_buyers = max(buyers_below, key=lambda b: b.buy, default=None)
    biggest_sellers = max(sellers_above, key=lambda b: b.sell, default=None)

    return VolumeProfile(
        poc=bin_midpoint(ranked[0].index),
        value_area_high=min_price + (high_bin + 1) * bin_size,
        value_area_low=min_price + low_bin * bin_size,
        biggest_buyers_below=bin_midpoint(biggest_buyers.index) if biggest_buyers else 0.0,
        biggest_sellers_above=bin_midpoint(biggest_sellers.index) if biggest_sellers else 0.0,
    )


def build_profile_set(bars: Sequence[OHLCVBar], windows: tuple[int, int, int] = (1, 5, 22),
                      bins: int = 50, value_area_pct: float = 0.70) -> ProfileSet:
    """Profiles over the trailing daily, weekly and monthly bar windows"""
    daily, weekly, monthly = (
        calculate_volume_profile(bars[-window:] if bars else [], bins, value_area_pct)
        for window in windows
    )
    return ProfileSet(daily=daily, weekly=weekly, monthly=monthly)
