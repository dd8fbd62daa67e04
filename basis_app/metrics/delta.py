"""Cumulative volume delta from close-to-close direction"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..data.models import OHLCVBar


@dataclass(frozen=True)
class VolumeDelta:
    """Cumulative and recent signed volume"""
    cvd: float
    recent_delta: float
    direction: str  # 'BUYING', 'SELLING' or 'NEUTRAL'


def delta_direction(recent_delta: float) -> str:
    if recent_delta > 0:
        return "BUYING"
    if recent_delta < 0:
        return "SELLING"
    return "NEUTRAL"


def calculate_cvd(bars: Sequence[OHLCVBar], recent_window: int = 5) -> VolumeDelta:
    """
    Calculate cumulative volume delta

    Each bar after the first contributes +volume when it closes above the
    previous close and -volume otherwise (an unchanged close counts as
    selling).

    Args:
        bars: Chronologically ordered bars
        recent_window: Number of trailing deltas summed into recent_delta

    Returns:
        VolumeDelta; zero and NEUTRAL with fewer than two bars
    """
    if len(bars) < 2:
        return VolumeDelta(cvd=0.0, recent_delta=0.0, direction="NEUTRAL")

    deltas = []
    for previous, current in zip(bars, bars[1:]):
        if current.close > previous.close:
            deltas.append(current.volume)
        else:
            deltas.append(-current.volume)

    recent_delta = sum(deltas[-recent_window:])

    return VolumeDelta(
        cvd=sum(deltas),
        recent_delta=recent_delta,
        direction=delta_direction(recent_delta),
    )
