"""
Basis App - Futures/ETF Cross-Instrument Dashboard Engine

Converts prices between related index, futures and ETF instruments
(QQQ/NQ/NDX, SPY/ES/SPX, GLD/GC) using live ratios and cost of carry, and
derives order-flow, volume-profile and market-regime analytics from OHLCV bars.
"""

__version__ = "0.1.0"
__author__ = "Basis Team"
