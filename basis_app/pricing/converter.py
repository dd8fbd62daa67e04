"""
Cross-instrument price conversion.

Converts a price level between ETFs, cash indices and their futures using the
live snapshot for ratio legs and the cost-of-carry multiplier for
index/futures legs. Ratios are derived from the snapshot on every call and
never cached.

Rules, in priority order:
1. Same ticker: value unchanged
2. Pairs tracked by a pure price ratio (GLD/GC, QQQ/SPY, NDX/SPX, NQ/ES,
   QQQ/NDX, SPY/SPX): value * snapshot[to] / snapshot[from]
3. Index to future (NDX->NQ, SPX->ES): carry forward; the reverse divides by
   the same multiplier
4. ETF to future (QQQ<->NQ, SPY<->ES): per ConversionPolicy, either the live
   ratio or the ETF->index ratio chained with index->future carry
5. Anything else: value unchanged (logged no-op)
"""

import re
from collections.abc import Callable
from enum import Enum
from typing import Optional, Union

from ..data.models import CarryParams, InstrumentClass, PriceSnapshot, Ticker
from ..data.parsers import parse_numeric_input
from ..errors import InvalidNumericInputError
from ..logging.config import get_pricing_logger, log_conversion
from .carry import carry_multiplier

logger = get_pricing_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class ConversionPolicy(str, Enum):
    """How ETF <-> future conversions are priced."""
    LIVE_RATIO = "live_ratio"
    CARRY_CHAINED = "carry_chained"

    @staticmethod
    def normalize_name(name: str) -> str:
        """Snake-case a policy name written as liveRatio, live-ratio or LIVE_RATIO."""
        return _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_").lower()

    @classmethod
    def parse(cls, policy: Union["ConversionPolicy", str]) -> "ConversionPolicy":
        """
        Resolve a policy from a member or a name.

        Unrecognised names fall back to LIVE_RATIO with a warning.
        """
        if isinstance(policy, cls):
            return policy
        try:
            return cls(cls.normalize_name(str(policy)))
        except ValueError:
            logger.warning("Unknown conversion policy, using live ratio", policy=policy)
            return cls.LIVE_RATIO


def _both_ways(*pairs: tuple[Ticker, Ticker]) -> frozenset[tuple[Ticker, Ticker]]:
    return frozenset(pairs) | frozenset((b, a) for a, b in pairs)


RATIO_PAIRS = _both_ways(
    (Ticker.GLD, Ticker.GC),
    (Ticker.QQQ, Ticker.SPY),
    (Ticker.NDX, Ticker.SPX),
    (Ticker.NQ, Ticker.ES),
    (Ticker.QQQ, Ticker.NDX),
    (Ticker.SPY, Ticker.SPX),
)

ETF_FUTURE_PAIRS = _both_ways(
    (Ticker.QQQ, Ticker.NQ),
    (Ticker.SPY, Ticker.ES),
)

INDEX_FUTURE = {Ticker.NDX: Ticker.NQ, Ticker.SPX: Ticker.ES}
ETF_INDEX = {Ticker.QQQ: Ticker.NDX, Ticker.SPY: Ticker.SPX}
FUTURE_CLASS = {Ticker.NQ: InstrumentClass.NQ, Ticker.ES: InstrumentClass.ES, Ticker.GC: InstrumentClass.GC}


def future_carry_multiplier(future: Ticker, params: CarryParams) -> float:
    """Carry multiplier from the underlying index to a futures contract."""
    return carry_multiplier(
        params.risk_free_rate,
        params.dividend_yield(FUTURE_CLASS[future]),
        params.days_to_exp,
    )


def resolve_rule(from_ticker: Ticker, to_ticker: Ticker,
                 policy: ConversionPolicy = ConversionPolicy.LIVE_RATIO) -> str:
    """Name of the conversion rule that applies to a ticker pair."""
    pair = (from_ticker, to_ticker)

    if from_ticker == to_ticker:
        return "identity"
    if pair in ETF_FUTURE_PAIRS:
        return "carry_chained" if policy == ConversionPolicy.CARRY_CHAINED else "live_ratio"
    if pair in RATIO_PAIRS:
        return "live_ratio"
    if INDEX_FUTURE.get(from_ticker) == to_ticker:
        return "carry_forward"
    if INDEX_FUTURE.get(to_ticker) == from_ticker:
        return "carry_inverse"
    return "identity_fallback"


def _identity(value: float, from_ticker: Ticker, to_ticker: Ticker,
              snapshot: PriceSnapshot, params: CarryParams) -> float:
    return value


def _live_ratio(value: float, from_ticker: Ticker, to_ticker: Ticker,
                snapshot: PriceSnapshot, params: CarryParams) -> float:
    return value * (snapshot.price(to_ticker) / snapshot.price(from_ticker))


def _carry_forward(value: float, from_ticker: Ticker, to_ticker: Ticker,
                   snapshot: PriceSnapshot, params: CarryParams) -> float:
    return value * future_carry_multiplier(to_ticker, params)


def _carry_inverse(value: float, from_ticker: Ticker, to_ticker: Ticker,
                   snapshot: PriceSnapshot, params: CarryParams) -> float:
    return value / future_carry_multiplier(from_ticker, params)


def _carry_chained(value: float, from_ticker: Ticker, to_ticker: Ticker,
                   snapshot: PriceSnapshot, params: CarryParams) -> float:
    if from_ticker in ETF_INDEX:
        # ETF -> index by live ratio, then index -> future by carry
        index = ETF_INDEX[from_ticker]
        index_value = _live_ratio(value, from_ticker, index, snapshot, params)
        return _carry_forward(index_value, index, to_ticker, snapshot, params)

    # future -> index by inverse carry, then index -> ETF by live ratio
    index = ETF_INDEX[to_ticker]
    index_value = _carry_inverse(value, from_ticker, index, snapshot, params)
    return _live_ratio(index_value, index, to_ticker, snapshot, params)


_RULES: dict[str, Callable[[float, Ticker, Ticker, PriceSnapshot, CarryParams], float]] = {
    "identity": _identity,
    "identity_fallback": _identity,
    "live_ratio": _live_ratio,
    "carry_forward": _carry_forward,
    "carry_inverse": _carry_inverse,
    "carry_chained": _carry_chained,
}


def convert(value: float, from_ticker: Ticker, to_ticker: Ticker,
            snapshot: PriceSnapshot, params: CarryParams,
            policy: Union[ConversionPolicy, str] = ConversionPolicy.LIVE_RATIO) -> float:
    """
    Convert a price level from one ticker to another.

    Args:
        value: Price level on the source ticker
        from_ticker: Source ticker
        to_ticker: Target ticker
        snapshot: Live prices used for ratio legs
        params: Carry parameters used for index/futures legs
        policy: ETF <-> future pricing policy; unknown names price as LIVE_RATIO

    Returns:
        Converted price level; unsupported pairs return the input unchanged
    """
    rule = resolve_rule(from_ticker, to_ticker, ConversionPolicy.parse(policy))
    result = _RULES[rule](value, from_ticker, to_ticker, snapshot, params)

    log_conversion(logger, rule, from_ticker.value, to_ticker.value, value, result)
    return result


def convert_input(raw_value: Union[str, float], from_ticker: Union[str, Ticker],
                  to_ticker: Union[str, Ticker], snapshot: PriceSnapshot,
                  params: CarryParams,
                  policy: Union[ConversionPolicy, str] = ConversionPolicy.LIVE_RATIO) -> Optional[float]:
    """
    Convert a raw user-entered value.

    Returns None when the value does not parse as a finite number. Unknown
    ticker symbols raise UnknownTickerError.
    """
    source = Ticker.parse(from_ticker)
    target = Ticker.parse(to_ticker)

    try:
        value = parse_numeric_input(raw_value)
    except InvalidNumericInputError as e:
        logger.debug("Rejected numeric input", raw_value=e.raw_value)
        return None

    return convert(value, source, target, snapshot, params, policy)


def conversion_ratio(from_ticker: Ticker, to_ticker: Ticker, snapshot: PriceSnapshot,
                     params: CarryParams,
                     policy: Union[ConversionPolicy, str] = ConversionPolicy.LIVE_RATIO) -> float:
    """Multiplier applied by convert for a pair (every rule is linear in value)."""
    return convert(1.0, from_ticker, to_ticker, snapshot, params, policy)


def ratio_table(snapshot: PriceSnapshot, family: InstrumentClass) -> dict[str, float]:
    """Live futures-per-unit ratios for a family's ETF and index."""
    if family == InstrumentClass.NQ:
        pairs = [(Ticker.QQQ, Ticker.NQ), (Ticker.NDX, Ticker.NQ)]
    elif family == InstrumentClass.ES:
        pairs = [(Ticker.SPY, Ticker.ES), (Ticker.SPX, Ticker.ES)]
    else:
        pairs = [(Ticker.GLD, Ticker.GC)]

    return {
        f"{src.value} → {dst.value}": snapshot.price(dst) / snapshot.price(src)
        for src, dst in pairs
    }


def family_variance_points(snapshot: PriceSnapshot, family: InstrumentClass,
                           base_points: float = 10.0) -> float:
    """
    Variance band width for a futures family.

    The base is expressed in NQ points; ES uses the NQ-equivalent width scaled
    by the live ES/NQ ratio.
    """
    if family == InstrumentClass.ES:
        return base_points * (snapshot.price(Ticker.ES) / snapshot.price(Ticker.NQ))
    return base_points


def variance_range(result: float, points: float) -> tuple[float, float]:
    """Range of +/- points around a converted value."""
    return result - points, result + points
