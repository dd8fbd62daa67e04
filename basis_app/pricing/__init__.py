"""Pricing engine for cross-instrument conversion and futures premiums"""

from .carry import carry_multiplier, carry_price
from .converter import ConversionPolicy, convert, convert_input, conversion_ratio
from .cross_index import convert_cross_index
from .premium import premium_info

__all__ = [
    "ConversionPolicy",
    "carry_multiplier",
    "carry_price",
    "convert",
    "convert_input",
    "conversion_ratio",
    "convert_cross_index",
    "premium_info",
]
