"""Equity sector rotation from short-term ETF momentum"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from ..data.models import OHLCVBar

SECTOR_ETFS = {
    "Tech": "XLK",
    "Finance": "XLF",
    "Energy": "XLE",
    "Healthcare": "XLV",
    "Consumer": "XLY",
}


@dataclass(frozen=True)
class SectorRotation:
    """Strongest and weakest sectors by recent momentum"""
    strongest_sector: str
    weakest_sector: str
    tech_momentum: float
    sector_strength: dict[str, float]


def sector_momentum(bars: Sequence[OHLCVBar], momentum_bars: int = 5) -> Optional[float]:
    """Percent change from first to last close over the trailing bars"""
    window = bars[-momentum_bars:]
    if len(window) < 2:
        return None
    return (window[-1].close / window[0].close - 1) * 100


def analyze_sector_rotation(sector_bars: Mapping[str, Sequence[OHLCVBar]],
                            momentum_bars: int = 5) -> Optional[SectorRotation]:
    """
    Rank sectors by momentum

    Args:
        sector_bars: Bars keyed by sector name (see SECTOR_ETFS)
        momentum_bars: Trailing bars used for momentum

    Returns:
        SectorRotation, or None when no sector has enough data
    """
    strength = {}
    for name, bars in sector_bars.items():
        momentum = sector_momentum(bars, momentum_bars)
        if momentum is not None:
            strength[name] = momentum

    if not strength:
        return None

    return SectorRotation(
        strongest_sector=max(strength, key=strength.get),
        weakest_sector=min(strength, key=strength.get),
        tech_momentum=strength.get("Tech", 0.0),
        sector_strength=strength,
    )
