"""
Logging utilities for structured context.

Context values are flattened to short strings before they reach a
handler, so a job list or a response body never floods the log. Tokens,
authorization codes and credentials must go through mask_secret first.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value as a bounded string.

    Sequences and mappings are summarised by size rather than dumped.

    Args:
        value: Any value passed as log context
        max_length: Characters kept before truncating

    Returns:
        str: Loggable representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        try:
            text = value if isinstance(value, str) else str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Hide all but the last ``visible`` characters of a secret."""
    if not value:
        return "None"
    if len(value) <= visible:
        return "*" * len(value)
    return f"***{value[-visible:]}"


def _context(values: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in values.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log ``message`` at ``level`` with every context value made safe."""
    logger.log(level, message, extra=_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with its type, message and traceback.

    Must be called from inside the ``except`` block handling ``exc``.
    """
    extra = _context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
