"""
Cross-index conversion (beta).

Converts between the Nasdaq and S&P families through a single NDX/SPX ratio,
treating NQ as NDX and ES as SPX. The futures' own carry premiums are ignored,
so results are approximate and must be presented as such. This path is kept
separate from the carry-aware converter on purpose.
"""

from ..data.models import PriceSnapshot, Ticker

# S&P-family tickers are scaled by the NDX/SPX ratio; Nasdaq-family tickers are already NDX points
_SP_SIDE = frozenset({Ticker.SPX, Ticker.ES})

CROSS_INDEX_TICKERS = (Ticker.NDX, Ticker.NQ, Ticker.SPX, Ticker.ES)


def to_ndx_equivalent(ticker: Ticker, value: float, ndx_spx_ratio: float) -> float:
    """Scale a value on the given ticker into NDX-equivalent points."""
    if ticker in _SP_SIDE:
        return value * ndx_spx_ratio
    return value


def from_ndx_equivalent(ticker: Ticker, ndx_value: float, ndx_spx_ratio: float) -> float:
    """Scale NDX-equivalent points back onto the given ticker."""
    if ticker in _SP_SIDE:
        return ndx_value / ndx_spx_ratio
    return ndx_value


def convert_cross_index(value: float, from_ticker: Ticker, to_ticker: Ticker,
                        snapshot: PriceSnapshot) -> float:
    """
    Convert between NDX, NQ, SPX and ES via NDX-equivalent space.

    Tickers outside the two index families pass through unchanged on their leg.
    """
    if from_ticker == to_ticker:
        return value

    ratio = snapshot.ndx_spx_ratio
    ndx_value = to_ndx_equivalent(from_ticker, value, ratio)
    return from_ndx_equivalent(to_ticker, ndx_value, ratio)
