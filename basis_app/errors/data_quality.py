"""
Data quality error classifications for boundary input.

These exceptions categorize invalid user input, unknown instrument symbols and
malformed provider payloads before they reach the pricing core.
"""

from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format or violates an invariant."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InvalidNumericInputError(DataQualityError):
    """A user-entered value could not be parsed as a finite number."""

    def __init__(self, message: str, raw_value: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_value = raw_value


class UnknownTickerError(DataQualityError):
    """Ticker symbol is not part of the supported instrument set."""

    def __init__(self, message: str, ticker: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.ticker = ticker
