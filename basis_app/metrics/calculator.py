"""Order-flow calculator coordinating all bar-series analytics"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import OHLCVBar
from ..logging.config import get_logger
from .blocks import analyze_block_trades
from .delta import calculate_cvd
from .imbalance import calculate_order_flow_imbalance
from .volume_profile import build_profile_set
from .vwap import calculate_vwap

if TYPE_CHECKING:
    from ..models.metrics import OrderFlowSnapshot

logger = get_logger(__name__)


class OrderFlowCalculator:
    """
    Order-flow calculator that runs every analytic over one bar series
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def analyze(self, bars: Sequence[OHLCVBar]) -> "OrderFlowSnapshot":
        """
        Analyze a chronologically ordered bar series

        Args:
            bars: OHLCV bars, oldest first

        Returns:
            OrderFlowSnapshot; neutral defaults for an empty series
        """
        from ..models.metrics import OrderFlowSnapshot

        params = self.config.order_flow

        vwap = calculate_vwap(bars[-params.vwap_lookback:], params.vwap_fallback_band)
        last_price = bars[-1].close if bars else 0.0

        snapshot = OrderFlowSnapshot(
            last_price=last_price,
            vwap=vwap,
            vwap_position="ABOVE" if last_price > vwap.vwap else "BELOW",
            delta=calculate_cvd(bars, params.recent_delta_window),
            imbalance=calculate_order_flow_imbalance(bars, params.ofi_window, params.ofi_threshold),
            blocks=analyze_block_trades(
                bars,
                window=params.block_window,
                z_threshold=params.block_z_threshold,
                min_bars=params.block_min_bars,
            ),
            profiles=build_profile_set(
                bars,
                windows=(params.daily_window, params.weekly_window, params.monthly_window),
                bins=params.profile_bins,
                value_area_pct=params.value_area_pct,
            ),
            bar_count=len(bars),
        )

        logger.debug(
            "Order flow analyzed",
            bar_count=snapshot.bar_count,
            vwap_position=snapshot.vwap_position,
            delta_direction=snapshot.delta.direction,
            aggressor=snapshot.imbalance.aggressor,
        )
        return snapshot

    def update_config(self, new_config: DefaultConfig):
        """Replace the configuration used for subsequent analyses"""
        self.config = new_config
