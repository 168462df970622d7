"""
Observability module.

Provides logging configuration, structured logging helpers and
request logging middleware.
"""

from voicecraft.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
