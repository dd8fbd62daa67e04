"""
Logging configuration and utilities for the dashboard engine.
"""
from .config import configure_logging, get_logger, get_pricing_logger, log_conversion

__all__ = ["configure_logging", "get_logger", "get_pricing_logger", "log_conversion"]
