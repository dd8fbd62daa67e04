"""
Main dashboard engine coordinator.

Wires configuration, the pricing engine, the order-flow calculator and the
regime classifiers into the calls the dashboard makes:

Quotes → Snapshot + CarryParams → Conversions / Premiums
OHLCV → Order Flow → Regime → Predictions
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

import structlog

from .alerts import AlertController, AlertState
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import (
    CarryParams,
    CryptoAsset,
    CryptoGlobalMarket,
    EconomicEvent,
    InstrumentClass,
    OHLCVBar,
    PriceSnapshot,
    Ticker,
)
from .data.sources import assemble_snapshot, build_carry_params
from .data.validators import split_valid_bars, validate_bars
from .errors import DataQualityError
from .logging.config import get_pricing_logger
from .metrics.calculator import OrderFlowCalculator
from .models.prediction import Premarket, PredictionResult, PricingSurface
from .persistence.alert_store import AlertStore
from .pricing.converter import (
    ConversionPolicy,
    convert,
    convert_input,
    family_variance_points,
    ratio_table,
)
from .pricing.cross_index import convert_cross_index
from .pricing.premium import premium_info
from .regime.breadth import analyze_market_breadth
from .regime.calendar import news_type, upcoming_events
from .regime.crypto import CryptoSentiment, FearGreed, analyze_crypto_sentiment
from .regime.predictor import predict_news_outcome, predict_open
from .regime.sectors import analyze_sector_rotation
from .regime.volatility import gamma_exposure, options_positioning, vix_average
from .utils.time import refresh_carry_params

logger = structlog.get_logger(__name__)
pricing_logger = get_pricing_logger(__name__)

# Futures family -> (spot index, live future)
PREMIUM_LEGS = {
    InstrumentClass.NQ: (Ticker.NDX, Ticker.NQ),
    InstrumentClass.ES: (Ticker.SPX, Ticker.ES),
}


class DashboardEngine:
    """
    Coordinator for the futures/ETF basis dashboard.

    Every call is a pure computation over the inputs passed in; the engine
    holds only configuration and the order-flow calculator.
    """

    def __init__(self, config_dir: Optional[str] = None, symbol: str = "NQ=F",
                 overrides: Optional[dict[str, Any]] = None) -> None:
        """Initialize the engine with configuration for the primary symbol."""
        self.logger = logger
        self.pricing_logger = pricing_logger

        self.config_loader = ConfigLoader.create(config_dir)
        self.symbol = symbol
        self.config = self._load_config(symbol, overrides)
        self.calculator = OrderFlowCalculator(self.config)

        self.logger.info(
            "Dashboard engine initialized",
            symbol=symbol,
            policy=self.config.converter.policy,
        )

    def _load_config(self, symbol: str, overrides: Optional[dict[str, Any]]) -> DefaultConfig:
        merged = self.config_loader.merge_config(symbol, overrides)
        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error(
                "Configuration validation failed, using defaults",
                symbol=symbol,
                errors=error_msgs
            )
            return self.config_loader.defaults

        return self.config_loader.load_config(symbol, overrides)

    @property
    def policy(self) -> ConversionPolicy:
        return ConversionPolicy.parse(self.config.converter.policy)

    def snapshot(self, fetched: Mapping[str, Any], timestamp: Optional[datetime] = None) -> PriceSnapshot:
        """Complete a provider quote mapping with the configured fallback prices."""
        return assemble_snapshot(fetched, self.config.quotes, timestamp)

    def carry_params(self, now: Optional[datetime] = None,
                     risk_free_rate: Optional[float] = None,
                     ndx_div_yield: Optional[float] = None,
                     spx_div_yield: Optional[float] = None) -> CarryParams:
        """Carry parameters for the next expiration, defaulting missing inputs from config."""
        return build_carry_params(
            now=now,
            risk_free_rate=risk_free_rate,
            ndx_div_yield=ndx_div_yield,
            spx_div_yield=spx_div_yield,
            defaults=self.config.carry,
        )

    def alert_controller(self, db_path: Optional[str] = None) -> AlertController:
        """Alert controller over the configured store, loaded with persisted alerts."""
        params = self.config.alerts
        store = AlertStore(db_path or params.db_path, params.storage_key)
        return AlertController(AlertState(), store)

    def convert(self, value: float, from_ticker: Ticker, to_ticker: Ticker,
                snapshot: PriceSnapshot, params: CarryParams) -> float:
        """Convert a price level using the configured ETF/future policy."""
        return convert(value, from_ticker, to_ticker, snapshot, params, self.policy)

    def convert_input(self, raw_value: Union[str, float], from_ticker: Union[str, Ticker],
                      to_ticker: Union[str, Ticker], snapshot: PriceSnapshot,
                      params: CarryParams) -> Optional[float]:
        """
        Convert user input, returning None for anything that cannot be converted.

        Unknown tickers are logged rather than raised.
        """
        try:
            return convert_input(raw_value, from_ticker, to_ticker, snapshot, params, self.policy)
        except DataQualityError as e:
            self.pricing_logger.warning(
                "Conversion input rejected",
                error=str(e),
                error_type=type(e).__name__,
                from_ticker=str(from_ticker),
                to_ticker=str(to_ticker),
            )
            return None

    def convert_cross_index(self, value: float, from_ticker: Ticker, to_ticker: Ticker,
                            snapshot: PriceSnapshot) -> float:
        """Approximate Nasdaq <-> S&P conversion via the NDX/SPX ratio."""
        return convert_cross_index(value, from_ticker, to_ticker, snapshot)

    def refresh_params(self, params: CarryParams, now: Optional[datetime] = None) -> CarryParams:
        """Roll carry parameters to the current expiration countdown."""
        return refresh_carry_params(params, now)

    def pricing_surface(self, snapshot: PriceSnapshot, params: CarryParams) -> PricingSurface:
        """
        Compute premiums, live ratios and variance bands for all families.

        Args:
            snapshot: Live prices
            params: Carry parameters

        Returns:
            PricingSurface keyed by futures family
        """
        premiums = {
            family: premium_info(
                snapshot.price(spot),
                snapshot.price(future),
                family,
                params,
                self.config.contracts,
            )
            for family, (spot, future) in PREMIUM_LEGS.items()
        }

        surface = PricingSurface(
            premiums=premiums,
            ratios={family: ratio_table(snapshot, family) for family in InstrumentClass},
            variance_points={
                family: family_variance_points(snapshot, family, self.config.converter.variance_points)
                for family in InstrumentClass
            },
            ndx_spx_ratio=snapshot.ndx_spx_ratio,
        )

        self.pricing_logger.debug(
            "Pricing surface computed",
            nq_premium=premiums[InstrumentClass.NQ].points,
            es_premium=premiums[InstrumentClass.ES].points,
            days_to_exp=params.days_to_exp,
        )
        return surface

    def _checked_bars(self, name: str, bars: Sequence[OHLCVBar]) -> Sequence[OHLCVBar]:
        """
        Drop malformed bars from a series.

        Inconsistent bars are removed one by one; a series whose dates are
        out of order is discarded entirely.
        """
        kept, errors = split_valid_bars(bars)
        if errors:
            self.logger.warning(
                "Dropping malformed bars",
                series=name,
                dropped=len(errors),
                bar_count=len(bars),
                first_error=str(errors[0]),
            )

        try:
            validate_bars(kept)
        except DataQualityError as e:
            self.logger.warning(
                "Discarding malformed bar series",
                series=name,
                error=str(e),
                bar_count=len(kept),
            )
            return []
        return kept

    def predict(self, primary_bars: Sequence[OHLCVBar],
                vix_bars: Sequence[OHLCVBar] = (),
                spy_bars: Sequence[OHLCVBar] = (),
                sector_bars: Optional[Mapping[str, Sequence[OHLCVBar]]] = None,
                events: Iterable[EconomicEvent] = (),
                today: Optional[date] = None) -> PredictionResult:
        """
        Run the institutional prediction pipeline.

        Args:
            primary_bars: NQ (or QQQ fallback) daily bars, oldest first
            vix_bars: VIX daily bars
            spy_bars: SPY daily bars
            sector_bars: Sector ETF bars keyed by sector name
            events: Scheduled economic releases
            today: Reference date for the calendar, defaults to today (UTC)

        Returns:
            PredictionResult; malformed or missing series degrade to neutral
            readings
        """
        regime_params = self.config.regime
        prediction_params = self.config.prediction

        primary_bars = self._checked_bars("primary", primary_bars)
        vix_bars = self._checked_bars("vix", vix_bars)
        spy_bars = self._checked_bars("spy", spy_bars)

        if not primary_bars:
            self.logger.warning("No primary bars available, prediction will be neutral")

        order_flow = self.calculator.analyze(primary_bars)
        current_price = order_flow.last_price

        vix_level = vix_bars[-1].close if vix_bars else regime_params.default_vix_level
        average = vix_average(vix_bars, regime_params.lookback) or vix_level

        positioning = options_positioning(vix_level, average, regime_params.positioning_threshold)
        gamma = gamma_exposure(current_price, vix_level, self.config.gamma, regime_params)
        breadth = analyze_market_breadth(vix_bars, spy_bars, primary_bars, regime_params)

        sector_rotation = None
        if sector_bars:
            checked = {name: self._checked_bars(name, bars) for name, bars in sector_bars.items()}
            sector_rotation = analyze_sector_rotation(checked, regime_params.sector_momentum_bars)

        today = today or datetime.now(timezone.utc).date()
        calendar = upcoming_events(events, today, prediction_params.event_horizon_days)

        news = predict_news_outcome(
            order_flow.vwap_position,
            order_flow.delta.recent_delta,
            order_flow.blocks.block_flow,
            order_flow.imbalance.ofi,
            breadth.internals_score,
            news_type=news_type(calendar, prediction_params.major_events),
            params=prediction_params,
        )
        open_prediction = predict_open(
            order_flow.vwap_position,
            order_flow.delta.recent_delta,
            order_flow.blocks.block_flow,
            breadth.internals_score,
            order_flow.profiles.monthly.poc,
            gamma.support,
            gamma.resistance,
            params=prediction_params,
        )

        prev_close = primary_bars[-2].close if len(primary_bars) >= 2 else current_price
        change_pct = (current_price - prev_close) / prev_close * 100 if prev_close else 0.0

        result = PredictionResult(
            timestamp=datetime.now(timezone.utc),
            current_price=current_price,
            vix_level=vix_level,
            premarket=Premarket(current_price=current_price, prev_close=prev_close, change_pct=change_pct),
            order_flow=order_flow,
            positioning=positioning,
            gamma=gamma,
            breadth=breadth,
            news=news,
            open=open_prediction,
            sector_rotation=sector_rotation,
            economic_events=calendar,
        )

        self.logger.info(
            "Prediction complete",
            current_price=current_price,
            news_outcome=news.outcome,
            open_direction=open_prediction.direction,
            internals_score=breadth.internals_score,
        )
        return result

    def crypto_sentiment(self, coins: Sequence[CryptoAsset],
                         fear_greed: Optional[FearGreed] = None,
                         global_market: Optional[CryptoGlobalMarket] = None) -> CryptoSentiment:
        """Crypto sentiment surface from a market-cap ordered coin list and global totals."""
        return analyze_crypto_sentiment(coins, fear_greed, self.config.crypto, global_market)
