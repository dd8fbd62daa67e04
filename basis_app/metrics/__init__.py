"""Order-flow analytics computed from OHLCV bar series"""

from .blocks import BlockFlow, analyze_block_trades
from .calculator import OrderFlowCalculator
from .delta import VolumeDelta, calculate_cvd
from .imbalance import OrderFlowImbalance, calculate_order_flow_imbalance
from .volume_profile import ProfileSet, build_profile_set, calculate_volume_profile
from .vwap import VWAPBands, calculate_vwap

__all__ = [
    "OrderFlowCalculator",
    "BlockFlow",
    "ProfileSet",
    "OrderFlowImbalance",
    "VolumeDelta",
    "VWAPBands",
    "analyze_block_trades",
    "build_profile_set",
    "calculate_cvd",
    "calculate_order_flow_imbalance",
    "calculate_volume_profile",
    "calculate_vwap",
]
