"""Data models for order-flow analytics"""

from dataclasses import dataclass

from ..metrics.blocks import BlockFlow
from ..metrics.delta import VolumeDelta
from ..metrics.imbalance import OrderFlowImbalance
from ..metrics.volume_profile import ProfileSet
from ..metrics.vwap import VWAPBands


@dataclass(frozen=True)
class OrderFlowSnapshot:
    """Complete order-flow analysis of one bar series"""
    last_price: float
    vwap: VWAPBands
    vwap_position: str  # 'ABOVE' or 'BELOW'
    delta: VolumeDelta
    imbalance: OrderFlowImbalance
    blocks: BlockFlow
    profiles: ProfileSet
    bar_count: int = 0

    def has_data(self) -> bool:
        """Check whether the snapshot was built from any bars"""
        return self.bar_count > 0

    @property
    def above_vwap(self) -> bool:
        return self.vwap_position == "ABOVE"
