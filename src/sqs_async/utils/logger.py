"""
Module: logger.py
Description: Structured logging for the SQS client.

Importing the package leaves the process-wide structlog configuration
alone. Module loggers follow whatever the application configured;
a client built with its own threshold and destination gets a logger
from build_logger() that renders JSON without touching global state.

Key Components:
- JSON output with timestamp and log level processors
- build_logger() for a per-client threshold and destination
- configure_logging() for applications that opt into this format globally
- get_logger() helper function

Dependencies: structlog, logging, datetime
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, TextIO

import structlog

DEFAULT_LOG_LEVEL = "WARNING"

_log_file: Optional[TextIO] = None


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """Add log level to event dictionary."""
    event_dict["level"] = method_name.upper()
    return event_dict


def _processors() -> List[Any]:
    return [
        _add_timestamp,
        _add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(default=str),
    ]


def _level_number(level: str) -> int:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    return numeric_level


def build_logger(level: str = DEFAULT_LOG_LEVEL, file: Optional[TextIO] = None) -> Any:
    """
    Build a standalone JSON logger with its own threshold and destination.

    The logger carries its processors with it, so the global structlog
    configuration is neither read nor changed.

    Args:
        level: Minimum severity to emit (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        file: Open text stream to write to; stdout when omitted

    Raises:
        ValueError: If level is not a known logging level
    """
    return structlog.wrap_logger(
        structlog.WriteLogger(file),
        processors=_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL, log_path: Optional[str] = None) -> None:
    """
    Configure structlog process-wide with the client's JSON format.

    Only for applications that want every structlog logger to use this
    format; the package never calls it itself.

    Args:
        level: Minimum severity to emit (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_path: Append log lines to this file instead of stdout

    Raises:
        ValueError: If level is not a known logging level
    """
    global _log_file

    numeric_level = _level_number(level)

    if _log_file is not None:
        _log_file.close()
        _log_file = None

    if log_path:
        _log_file = open(log_path, "a", encoding="utf-8")
        logger_factory = structlog.WriteLoggerFactory(file=_log_file)
    else:
        logger_factory = structlog.WriteLoggerFactory()

    structlog.configure(
        processors=_processors(),
        logger_factory=logger_factory,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        # Loggers stay reconfigurable after first use
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structlog logger that follows the application's configuration.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Lazy structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.error("SERVICE ERROR", action="ListQueues")
    """
    return structlog.get_logger(name)
