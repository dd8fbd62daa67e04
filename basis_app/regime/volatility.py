"""
VIX-based volatility regime, options positioning and dealer gamma levels.

All classifications are heuristics over the VIX close series; they never
raise and fall back to neutral labels when history is short.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import GammaParams, RegimeParams
from ..data.models import OHLCVBar


@dataclass(frozen=True)
class VolatilityRegime:
    """VIX level classification and its contribution to internals"""
    regime: str       # 'LOW_FEAR', 'NORMAL', 'ELEVATED', 'HIGH_FEAR' or 'UNKNOWN'
    sentiment: str    # 'RISK_ON', 'RISK_OFF' or 'NEUTRAL'
    level: Optional[float] = None
    average: Optional[float] = None
    score: int = 0


@dataclass(frozen=True)
class OptionsPositioning:
    """Options positioning inferred from VIX versus its average"""
    positioning: str
    bias: int
    vix_vs_average: float


@dataclass(frozen=True)
class GammaExposure:
    """Dealer gamma regime with expected range and nearest round strikes"""
    regime: str       # 'HIGH_GAMMA', 'NEUTRAL_GAMMA' or 'LOW_GAMMA'
    impact: str
    support: float
    resistance: float
    key_support: float
    key_resistance: float


def vix_average(vix_bars: Sequence[OHLCVBar], lookback: int = 20) -> Optional[float]:
    """Average VIX close over the lookback, None with insufficient bars"""
    if len(vix_bars) < lookback:
        return None
    closes = [bar.close for bar in vix_bars[-lookback:]]
    return sum(closes) / lookback


def classify_volatility(vix_bars: Sequence[OHLCVBar],
                        params: Optional[RegimeParams] = None) -> VolatilityRegime:
    """
    Classify the volatility regime from VIX history

    Level: < vix_low LOW_FEAR (+1), > vix_high HIGH_FEAR (-1),
    > vix_elevated ELEVATED (0), otherwise NORMAL.
    Slope (level - avg) / avg: below -threshold RISK_ON (+1), above
    +threshold RISK_OFF (-1).

    Args:
        vix_bars: VIX daily bars, oldest first
        params: Regime thresholds

    Returns:
        VolatilityRegime; UNKNOWN / NEUTRAL with fewer than lookback bars
    """
    params = params or RegimeParams()

    average = vix_average(vix_bars, params.lookback)
    if average is None:
        return VolatilityRegime(regime="UNKNOWN", sentiment="NEUTRAL")

    level = vix_bars[-1].close
    score = 0

    if level < params.vix_low:
        regime = "LOW_FEAR"
        score += 1
    elif level > params.vix_high:
        regime = "HIGH_FEAR"
        score -= 1
    elif level > params.vix_elevated:
        regime = "ELEVATED"
    else:
        regime = "NORMAL"

    slope = (level - average) / average if average else 0.0
    if slope < -params.vix_slope_threshold:
        sentiment = "RISK_ON"
        score += 1
    elif slope > params.vix_slope_threshold:
        sentiment = "RISK_OFF"
        score -= 1
    else:
        sentiment = "NEUTRAL"

    return VolatilityRegime(regime=regime, sentiment=sentiment, level=level,
                            average=average, score=score)


def options_positioning(vix_level: float, average: Optional[float] = None,
                        threshold: float = 0.15) -> OptionsPositioning:
    """
    Infer options positioning from VIX relative to its average

    Without an average the level is compared with itself (neutral).
    """
    if not average:
        average = vix_level

    vix_vs_average = (vix_level / average - 1) * 100 if average else 0.0

    if vix_level > average * (1 + threshold):
        return OptionsPositioning("DEFENSIVE - Heavy put buying", -1, vix_vs_average)
    if vix_level < average * (1 - threshold):
        return OptionsPositioning("COMPLACENT - Call buying dominant", 1, vix_vs_average)
    return OptionsPositioning("NEUTRAL - Balanced positioning", 0, vix_vs_average)


def round_strikes(price: float, step: float = 100.0, count: int = 11) -> list[float]:
    """Strikes on a step grid centred on the step floor of price"""
    base = math.floor(price / step) * step
    half = count // 2
    return [base + (i - half) * step for i in range(count)]


def gamma_exposure(price: float, vix_level: float,
                   params: Optional[GammaParams] = None,
                   regime_params: Optional[RegimeParams] = None) -> GammaExposure:
    """
    Estimate the dealer gamma regime and expected range

    Low VIX implies dealers are long gamma (range-bound), high VIX short
    gamma (moves extend).

    Args:
        price: Current underlying price
        vix_level: Current VIX level
        params: Strike grid and band widths
        regime_params: VIX thresholds

    Returns:
        GammaExposure with price bands and nearest strikes
    """
    params = params or GammaParams()
    regime_params = regime_params or RegimeParams()

    strikes = round_strikes(price, params.strike_step, params.strike_count)
    key_resistance = next((s for s in strikes if s > price), price + params.strike_step)
    key_support = next((s for s in reversed(strikes) if s < price), price - params.strike_step)

    if vix_level < regime_params.vix_low:
        regime = "HIGH_GAMMA"
        impact = "Dealers will sell rallies and buy dips (range-bound)"
        band = params.high_gamma_band
    elif vix_level > regime_params.vix_high:
        regime = "LOW_GAMMA"
        impact = "Dealers will amplify moves (trend continuation)"
        band = params.low_gamma_band
    else:
        regime = "NEUTRAL_GAMMA"
        impact = "Normal hedging flow"
        band = params.neutral_gamma_band

    return GammaExposure(
        regime=regime,
        impact=impact,
        support=price - band,
        resistance=price + band,
        key_support=key_support,
        key_resistance=key_resistance,
    )
