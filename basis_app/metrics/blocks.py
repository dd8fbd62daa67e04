"""Block trade detection from volume z-scores"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..data.models import OHLCVBar


@dataclass(frozen=True)
class BlockFlow:
    """Net direction of unusually large volume bars"""
    block_flow: int
    direction: str  # 'INSTITUTIONAL BUYING', 'INSTITUTIONAL SELLING' or 'NEUTRAL'


def analyze_block_trades(bars: Sequence[OHLCVBar], window: int = 10,
                         z_threshold: float = 2.0, min_bars: int = 20) -> BlockFlow:
    """
    Detect block-sized bars and net their direction

    Volume z-scores use the population mean and standard deviation of the
    whole series. Each of the last `window` bars with z > z_threshold adds
    +1 if it closed above its open and -1 otherwise.

    Args:
        bars: Chronologically ordered bars
        window: Trailing bars checked for blocks
        z_threshold: Z-score a bar must exceed to count as a block
        min_bars: Minimum history needed for meaningful statistics

    Returns:
        BlockFlow; NEUTRAL with insufficient history
    """
    if len(bars) < min_bars:
        return BlockFlow(block_flow=0, direction="NEUTRAL")

    volumes = [bar.volume for bar in bars]
    mean = sum(volumes) / len(volumes)
    variance = sum((v - mean) ** 2 for v in volumes) / len(volumes)
    std = math.sqrt(variance) or 1.0

    block_flow = 0
    for bar in bars[-window:]:
        if (bar.volume - mean) / std > z_threshold:
            block_flow += 1 if bar.is_bullish else -1

    if block_flow > 0:
        direction = "INSTITUTIONAL BUYING"
    elif block_flow < 0:
        direction = "INSTITUTIONAL SELLING"
    else:
        direction = "NEUTRAL"

    return BlockFlow(block_flow=block_flow, direction=direction)
