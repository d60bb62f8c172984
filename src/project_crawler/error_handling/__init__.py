"""
Error types for the project crawler.
"""

from .exceptions import (
    CrawlerError, TransportError, UnexpectedStatusError,
    MalformedRecordError, ConfigurationError
)

__all__ = [
    "CrawlerError",
    "TransportError",
    "UnexpectedStatusError",
    "MalformedRecordError",
    "ConfigurationError"
]
