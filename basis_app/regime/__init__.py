"""Market regime classification and composite prediction scorers"""

from .breadth import MarketBreadth, analyze_market_breadth, return_correlation
from .calendar import UpcomingEvent, next_major_event, upcoming_events
from .crypto import CryptoSentiment, analyze_crypto_sentiment
from .predictor import NewsPrediction, OpenPrediction, predict_news_outcome, predict_open
from .sectors import SectorRotation, analyze_sector_rotation
from .volatility import (
    GammaExposure,
    OptionsPositioning,
    VolatilityRegime,
    classify_volatility,
    gamma_exposure,
    options_positioning,
)

__all__ = [
    "CryptoSentiment",
    "GammaExposure",
    "MarketBreadth",
    "NewsPrediction",
    "OpenPrediction",
    "OptionsPositioning",
    "SectorRotation",
    "UpcomingEvent",
    "VolatilityRegime",
    "analyze_crypto_sentiment",
    "analyze_market_breadth",
    "analyze_sector_rotation",
    "classify_volatility",
    "gamma_exposure",
    "next_major_event",
    "options_positioning",
    "predict_news_outcome",
    "predict_open",
    "return_correlation",
    "upcoming_events",
]
