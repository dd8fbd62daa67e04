"""Default configuration parameters for the dashboard engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CarryDefaults:
    """Fallback carry inputs used when live providers are unavailable."""
    risk_free_rate: float = 4.31                     # 3M T-bill fallback (%)
    ndx_div_yield: float = 0.66                      # QQQ trailing yield (%)
    spx_div_yield: float = 1.13                      # SPY trailing yield (%)

    # Sanity bounds for the primary and secondary rate sources
    primary_rate_min: float = 0.1
    primary_rate_max: float = 10.0
    secondary_rate_min: float = 2.0
    secondary_rate_max: float = 8.0


@dataclass(frozen=True)
class QuoteDefaults:
    """Per-ticker fallback prices for a quote snapshot."""
    qqq: float = 529.0
    nq: float = 22000.0
    ndx: float = 21800.0
    spy: float = 595.0
    es: float = 5961.0
    spx: float = 5950.0
    gld: float = 305.0
    gc: float = 3050.0


@dataclass(frozen=True)
class ContractParams:
    """Futures contract multipliers (dollars per point)."""
    nq_multiplier: float = 20.0
    es_multiplier: float = 50.0
    gc_multiplier: float = 100.0


@dataclass(frozen=True)
class ConverterParams:
    """Cross-instrument conversion parameters."""
    policy: str = "live_ratio"                       # live_ratio | carry_chained
    variance_points: float = 10.0                    # NQ-point variance band


@dataclass(frozen=True)
class OrderFlowParams:
    """Order flow and volume profile parameters."""
    vwap_lookback: int = 20                          # Bars used for VWAP
    vwap_fallback_band: float = 50.0                 # Band when volume is zero
    recent_delta_window: int = 5                     # Bars in recent delta
    ofi_window: int = 10                             # Bars averaged for OFI
    ofi_threshold: float = 0.1                       # Aggressor threshold
    block_window: int = 10                           # Recent bars checked for blocks
    block_z_threshold: float = 2.0                   # Volume z-score for a block
    block_min_bars: int = 20                         # History needed for z-scores
    profile_bins: int = 50
    value_area_pct: float = 0.70
    daily_window: int = 1
    weekly_window: int = 5
    monthly_window: int = 22


@dataclass(frozen=True)
class RegimeParams:
    """Volatility, breadth and sector rotation thresholds."""
    lookback: int = 20                               # VIX average / correlation bars
    vix_low: float = 15.0
    vix_elevated: float = 20.0
    vix_high: float = 25.0
    vix_slope_threshold: float = 0.10                # Risk-on/off deviation
    positioning_threshold: float = 0.15              # Options positioning deviation
    correlation_high: float = 0.9
    correlation_low: float = 0.7
    sector_momentum_bars: int = 5
    default_vix_level: float = 20.0                  # Used when no VIX data


@dataclass(frozen=True)
class GammaParams:
    """Gamma exposure level parameters."""
    strike_step: float = 100.0
    strike_count: int = 11
    high_gamma_band: float = 50.0
    neutral_gamma_band: float = 100.0
    low_gamma_band: float = 150.0


@dataclass(frozen=True)
class PredictionParams:
    """Weights and thresholds for the news and session-open scorers."""
    news_vwap_weight: float = 1.0
    news_delta_weight: float = 2.0
    news_block_weight: float = 1.5
    news_ofi_weight: float = 1.0
    news_ofi_threshold: float = 0.1
    news_threshold: float = 2.0

    open_vwap_weight: float = 2.0
    open_delta_weight: float = 2.0
    open_block_weight: float = 2.0
    open_strong_threshold: float = 5.0
    open_threshold: float = 2.0

    event_horizon_days: int = 14
    major_events: tuple[str, ...] = ("CPI", "NFP", "FOMC", "PPI")


@dataclass(frozen=True)
class CryptoParams:
    """Crypto sentiment thresholds."""
    etf_volume_ratio: float = 0.05                   # volume / market cap
    etf_move_pct: float = 1.0
    etf_strong_move_pct: float = 2.0
    money_flow_move_pct: float = 1.0
    defi_trend_pct: float = 1.0
    top_altcoins: int = 10
    stablecoin_ids: tuple[str, ...] = (
        "tether", "usd-coin", "dai", "first-digital-usd", "ethena-usde", "usds",
    )


@dataclass(frozen=True)
class AlertParams:
    """Price alert store parameters."""
    storage_key: str = "priceAlerts"
    db_path: str = "alerts.db"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    carry: CarryDefaults
    quotes: QuoteDefaults
    contracts: ContractParams
    converter: ConverterParams
    order_flow: OrderFlowParams
    regime: RegimeParams
    gamma: GammaParams
    prediction: PredictionParams
    crypto: CryptoParams
    alerts: AlertParams = field(default_factory=AlertParams)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        carry=CarryDefaults(),
        quotes=QuoteDefaults(),
        contracts=ContractParams(),
        converter=ConverterParams(),
        order_flow=OrderFlowParams(),
        regime=RegimeParams(),
        gamma=GammaParams(),
        prediction=PredictionParams(),
        crypto=CryptoParams(),
        alerts=AlertParams(),
    )
