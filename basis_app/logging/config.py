"""
Centralized logging configuration for the dashboard engine.

This module provides standardized logging configuration using structlog
for all components. Pricing, analytics and persistence modules obtain their
loggers here so output is consistently structured.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_pricing_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the pricing subsystem.

    Conversion and premium decisions are logged through this logger so they
    can be filtered separately from analytics output.
    """
    return get_logger(name).bind(subsystem="pricing")


def log_conversion(
    logger: FilteringBoundLogger,
    rule: str,
    from_ticker: str,
    to_ticker: str,
    value: float,
    result: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a conversion decision with standardized format.

    Args:
        logger: Structlog logger instance
        rule: Name of the conversion rule that was applied
        from_ticker: Source ticker symbol
        to_ticker: Target ticker symbol
        value: Input value
        result: Converted value
        context: Additional context data
    """
    bound_logger = logger.bind(
        rule=rule,
        from_ticker=from_ticker,
        to_ticker=to_ticker,
        value=value,
        result=result,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if rule == "identity_fallback":
        bound_logger.debug("Unsupported ticker pair, returning value unchanged")
    else:
        bound_logger.debug("Conversion applied")
