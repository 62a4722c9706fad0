"""Logging setup for subselect.

Provides configurable logging with JSON format support and file rotation.
"""

from subselect.logging.config import configure_logging
from subselect.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
