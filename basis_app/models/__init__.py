"""Data models for analytics results"""

from .metrics import OrderFlowSnapshot
from .prediction import Premarket, PredictionResult, PricingSurface

__all__ = ["OrderFlowSnapshot", "Premarket", "PredictionResult", "PricingSurface"]
