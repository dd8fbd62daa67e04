"""
Error classification for the dashboard engine.

Core pricing and analytics functions never raise; these exceptions are used
at the boundaries where raw input, external payloads and persisted state
enter the system.
"""

from .data_quality import (
    DataQualityError,
    InvalidNumericInputError,
    MalformedDataError,
    MissingDataError,
    UnknownTickerError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InvalidNumericInputError",
    "MalformedDataError",
    "MissingDataError",
    "UnknownTickerError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
]
