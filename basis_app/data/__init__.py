"""
Data models, boundary parsing and collaborator fallbacks.

Defines the immutable snapshot, carry and OHLCV models consumed by the pricing
and analytics core, plus the parsing and fallback rules applied to provider
responses before they reach it.
"""
