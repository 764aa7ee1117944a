"""
Package: utils
Description: Logging helpers.
"""

from .logger import build_logger, configure_logging, get_logger

__all__ = ["build_logger", "configure_logging", "get_logger"]
