"""
Composite scorers for scheduled news releases and the session open.

Both scorers sum signed votes from VWAP position, recent delta and block
flow (plus OFI for news) with the market internals score, then bucket the
total into a labelled outcome.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..config.defaults import PredictionParams


@dataclass(frozen=True)
class NewsPrediction:
    """Expected market reaction to an upcoming release"""
    news_type: str
    outcome: str
    score: float
    signals: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OpenPrediction:
    """Directional bias and trade plan for the cash open"""
    direction: str
    confidence: str
    score: float
    strategy: str
    signals: list[str] = field(default_factory=list)


def predict_news_outcome(vwap_position: str, recent_delta: float, block_flow: int,
                         ofi: float, internals_score: float,
                         news_type: str = "Economic Data",
                         params: Optional[PredictionParams] = None) -> NewsPrediction:
    """
    Score order flow into an expected news outcome

    Args:
        vwap_position: 'ABOVE' or 'BELOW'
        recent_delta: Recent volume delta
        block_flow: Net block trade count
        ofi: Order flow imbalance
        internals_score: Market breadth internals score
        news_type: Name of the upcoming release
        params: Weights and thresholds

    Returns:
        NewsPrediction with the outcome label and contributing signals
    """
    params = params or PredictionParams()
    score = 0.0
    signals = []

    if vwap_position == "ABOVE":
        score += params.news_vwap_weight
        signals.append("Price above VWAP")
    else:
        score -= params.news_vwap_weight
        signals.append("Price below VWAP")

    if recent_delta > 0:
        score += params.news_delta_weight
        signals.append("Positive delta")
    else:
        score -= params.news_delta_weight
        signals.append("Negative delta")

    if block_flow > 0:
        score += params.news_block_weight
        signals.append("Institutional buying")
    elif block_flow < 0:
        score -= params.news_block_weight
        signals.append("Institutional selling")

    if ofi > params.news_ofi_threshold:
        score += params.news_ofi_weight
        signals.append("Aggressive buying")
    elif ofi < -params.news_ofi_threshold:
        score -= params.news_ofi_weight
        signals.append("Aggressive selling")

    score += internals_score

    if score >= params.news_threshold:
        outcome = "LIKELY BETTER THAN EXPECTED"
    elif score <= -params.news_threshold:
        outcome = "LIKELY WORSE THAN EXPECTED"
    else:
        outcome = "IN-LINE EXPECTED"

    return NewsPrediction(news_type=news_type, outcome=outcome, score=score, signals=signals)


def predict_open(vwap_position: str, recent_delta: float, block_flow: int,
                 internals_score: float, poc: float, gamma_support: float,
                 gamma_resistance: float,
                 params: Optional[PredictionParams] = None) -> OpenPrediction:
    """
    Score order flow into a session-open bias and strategy

    The strategy targets the monthly POC on strong readings and trades the
    gamma range when neutral.
    """
    params = params or PredictionParams()
    score = 0.0
    signals = []

    if vwap_position == "ABOVE":
        score += params.open_vwap_weight
        signals.append("Above VWAP")
    else:
        score -= params.open_vwap_weight
        signals.append("Below VWAP")

    if recent_delta > 0:
        score += params.open_delta_weight
        signals.append("Positive delta")
    else:
        score -= params.open_delta_weight
        signals.append("Negative delta")

    if block_flow > 0:
        score += params.open_block_weight
        signals.append("Institutional buying")
    elif block_flow < 0:
        score -= params.open_block_weight
        signals.append("Institutional selling")

    score += internals_score

    if score >= params.open_strong_threshold:
        direction, confidence = "STRONG BULLISH", "High"
        strategy = f"BUY dips to VWAP, target POC {poc:.0f}"
    elif score >= params.open_threshold:
        direction, confidence = "BULLISH", "Medium"
        strategy = "BUY on confirmation above VWAP"
    elif score <= -params.open_strong_threshold:
        direction, confidence = "STRONG BEARISH", "High"
        strategy = f"SELL rallies to VWAP, target POC {poc:.0f}"
    elif score <= -params.open_threshold:
        direction, confidence = "BEARISH", "Medium"
        strategy = "SELL on confirmation below VWAP"
    else:
        direction, confidence = "NEUTRAL", "Low"
        strategy = f"RANGE trade gamma levels {gamma_support:.0f} - {gamma_resistance:.0f}"

    return OpenPrediction(direction=direction, confidence=confidence, score=score,
                          strategy=strategy, signals=signals)
