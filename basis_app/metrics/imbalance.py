"""Order flow imbalance from close position within each bar's range"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..data.models import OHLCVBar


@dataclass(frozen=True)
class OrderFlowImbalance:
    """Average buy/sell imbalance over a trailing window"""
    ofi: float        # -1 (all selling) .. +1 (all buying)
    aggressor: str    # 'BUYERS', 'SELLERS' or 'BALANCED'


def split_volume(bar: OHLCVBar) -> tuple[float, float]:
    """
    Split a bar's volume into buy and sell parts by close position

    A zero-range bar is treated as closing at its low.
    """
    close_position = bar.close_position or 0.0
    buy_volume = bar.volume * close_position
    return buy_volume, bar.volume - buy_volume


def calculate_order_flow_imbalance(bars: Sequence[OHLCVBar], window: int = 10,
                                   threshold: float = 0.1) -> OrderFlowImbalance:
    """
    Calculate order flow imbalance

    Per bar: (buy - sell) / total with buy = volume * close position. The
    average divides by the number of bars in the window; zero-range and
    zero-volume bars contribute nothing but still count.

    Args:
        bars: Chronologically ordered bars
        window: Trailing bars to average
        threshold: Absolute OFI beyond which one side is the aggressor

    Returns:
        OrderFlowImbalance; zero and BALANCED for an empty series
    """
    recent = list(bars[-window:])
    if not recent:
        return OrderFlowImbalance(ofi=0.0, aggressor="BALANCED")

    total = 0.0
    for bar in recent:
        if bar.range_value == 0 or bar.volume == 0:
            continue
        buy_volume, sell_volume = split_volume(bar)
        total += (buy_volume - sell_volume) / bar.volume

    ofi = total / len(recent)

    if ofi > threshold:
        aggressor = "BUYERS"
    elif ofi < -threshold:
        aggressor = "SELLERS"
    else:
        aggressor = "BALANCED"

    return OrderFlowImbalance(ofi=ofi, aggressor=aggressor)
