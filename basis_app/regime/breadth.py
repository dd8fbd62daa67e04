"""Market breadth: volatility regime plus cross-market return correlation"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import RegimeParams
from ..data.models import OHLCVBar
from .volatility import VolatilityRegime, classify_volatility


@dataclass(frozen=True)
class MarketBreadth:
    """Composite internals read from VIX and index correlation"""
    vix_regime: str
    market_sentiment: str
    internals_score: int
    correlation: float


def close_returns(bars: Sequence[OHLCVBar]) -> list[float]:
    """Simple close-to-close returns"""
    return [
        (current.close - previous.close) / previous.close
        for previous, current in zip(bars, bars[1:])
    ]


def return_correlation(a_bars: Sequence[OHLCVBar], b_bars: Sequence[OHLCVBar],
                       lookback: int = 20) -> float:
    """
    Pearson correlation of returns over the trailing lookback bars

    Returns:
        Correlation in [-1, 1]; 0.0 when either series is shorter than the
        lookback or has zero return variance
    """
    if len(a_bars) < lookback or len(b_bars) < lookback:
        return 0.0

    a_returns = close_returns(a_bars[-lookback:])
    b_returns = close_returns(b_bars[-lookback:])

    a_mean = sum(a_returns) / len(a_returns)
    b_mean = sum(b_returns) / len(b_returns)

    covariance = 0.0
    a_variance = 0.0
    b_variance = 0.0
    for a, b in zip(a_returns, b_returns):
        covariance += (a - a_mean) * (b - b_mean)
        a_variance += (a - a_mean) ** 2
        b_variance += (b - b_mean) ** 2

    if a_variance == 0 or b_variance == 0:
        return 0.0

    return covariance / (math.sqrt(a_variance) * math.sqrt(b_variance))


def analyze_market_breadth(vix_bars: Sequence[OHLCVBar], spy_bars: Sequence[OHLCVBar],
                           nq_bars: Sequence[OHLCVBar],
                           params: Optional[RegimeParams] = None) -> MarketBreadth:
    """
    Combine the VIX regime with NQ/SPY correlation into an internals score

    Args:
        vix_bars: VIX daily bars
        spy_bars: SPY daily bars
        nq_bars: Primary (NQ or QQQ) daily bars
        params: Regime thresholds

    Returns:
        MarketBreadth; tight correlation adds +1, loose correlation -1
    """
    params = params or RegimeParams()

    volatility: VolatilityRegime = classify_volatility(vix_bars, params)
    score = volatility.score

    correlation = 0.0
    if len(nq_bars) >= params.lookback and len(spy_bars) >= params.lookback:
        correlation = return_correlation(nq_bars, spy_bars, params.lookback)
        if correlation > params.correlation_high:
            score += 1
        elif correlation < params.correlation_low:
            score -= 1

    return MarketBreadth(
        vix_regime=volatility.regime,
        market_sentiment=volatility.sentiment,
        internals_score=score,
        correlation=correlation,
    )
