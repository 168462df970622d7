"""
Logger configuration.

Console logging for the local front end. Module loggers pass structured
context through ``extra=``; the formatter appends that context to the
line as key=value pairs so it is not lost on a plain stream handler.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}

NOISY_LOGGERS = ("urllib3", "botocore", "boto3", "s3transfer", "httpx", "httpcore")


class ContextFormatter(logging.Formatter):
    """Formatter that renders extra= context after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Safe to call more than once; earlier handlers are replaced.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ContextFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
