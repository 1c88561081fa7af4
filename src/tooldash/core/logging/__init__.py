"""Logging module with structured logging and request tracking."""

from tooldash.core.logging.config import configure_logging
from tooldash.core.logging.middleware import RequestLoggingMiddleware


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]
