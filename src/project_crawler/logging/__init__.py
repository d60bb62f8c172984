"""
Logging system for the project crawler.
"""

from .logger_config import setup_logging, close_logging, LoggerConfig
from .log_formatter import StructuredFormatter, ColoredFormatter

__all__ = [
    "setup_logging",
    "close_logging",
    "LoggerConfig",
    "StructuredFormatter",
    "ColoredFormatter"
]
