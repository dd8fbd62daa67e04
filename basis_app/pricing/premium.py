"""Theoretical vs actual futures premium"""

import math
from typing import Optional

from ..config.defaults import ContractParams
from ..data.models import CarryParams, InstrumentClass, PremiumInfo
from .carry import carry_price


def round_half_up(value: float, places: int) -> float:
    """Round halves toward positive infinity."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def contract_multiplier(instrument_class: InstrumentClass,
                        contracts: Optional[ContractParams] = None) -> float:
    """Dollars per point for a futures family."""
    contracts = contracts or ContractParams()
    if instrument_class == InstrumentClass.NQ:
        return contracts.nq_multiplier
    if instrument_class == InstrumentClass.ES:
        return contracts.es_multiplier
    return contracts.gc_multiplier


def premium_info(spot: float, futures_actual: float, instrument_class: InstrumentClass,
                 params: CarryParams, contracts: Optional[ContractParams] = None) -> PremiumInfo:
    """
    Compute the carry-implied futures premium over spot

    Args:
        spot: Spot value of the underlying (index level or commodity proxy)
        futures_actual: Live futures price, reported alongside for comparison
        instrument_class: Futures family selecting dividend yield and multiplier
        params: Carry parameters
        contracts: Contract multipliers, defaults to NQ=20, ES=50, GC=100

    Returns:
        PremiumInfo with price fields rounded to 2 decimals and percent to 4
    """
    theoretical = carry_price(
        spot,
        params.risk_free_rate,
        params.dividend_yield(instrument_class),
        params.days_to_exp,
    )

    premium = theoretical - spot
    premium_pct = premium / spot * 100
    premium_dollars = premium * contract_multiplier(instrument_class, contracts)

    return PremiumInfo(
        points=round_half_up(premium, 2),
        percent=round_half_up(premium_pct, 4),
        dollars=round_half_up(premium_dollars, 2),
        theoretical=round_half_up(theoretical, 2),
        actual=round_half_up(futures_actual, 2),
    )
