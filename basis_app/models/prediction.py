"""Data models for composite dashboard results"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..data.models import InstrumentClass, PremiumInfo
from ..regime.breadth import MarketBreadth
from ..regime.calendar import UpcomingEvent
from ..regime.predictor import NewsPrediction, OpenPrediction
from ..regime.sectors import SectorRotation
from ..regime.volatility import GammaExposure, OptionsPositioning
from .metrics import OrderFlowSnapshot


@dataclass(frozen=True)
class Premarket:
    """Latest price against the previous close"""
    current_price: float
    prev_close: float
    change_pct: float


@dataclass(frozen=True)
class PricingSurface:
    """Premiums, live ratios and variance bands for the futures families"""
    premiums: dict[InstrumentClass, PremiumInfo]
    ratios: dict[InstrumentClass, dict[str, float]]
    variance_points: dict[InstrumentClass, float]
    ndx_spx_ratio: float


@dataclass(frozen=True)
class PredictionResult:
    """Complete institutional prediction for the primary instrument"""
    timestamp: datetime
    current_price: float
    vix_level: float
    premarket: Premarket
    order_flow: OrderFlowSnapshot
    positioning: OptionsPositioning
    gamma: GammaExposure
    breadth: MarketBreadth
    news: NewsPrediction
    open: OpenPrediction
    sector_rotation: Optional[SectorRotation] = None
    economic_events: list[UpcomingEvent] = field(default_factory=list)
