"""Logging setup for Polycalc.

All package loggers live under the ``polycalc`` logger. Records may carry a
``code`` attribute (the code of a ``ValidationError``), which is appended to
the formatted line so rejected input can be traced by code.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from . import config

ROOT_LOGGER_NAME = "polycalc"


class StructuredFormatter(logging.Formatter):
    """Format records as ``<iso timestamp> [LEVEL] name: message [code=...]``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        code = getattr(record, "code", None)
        if code:
            message = f"{message} [code={code}]"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def _make_handler(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(StructuredFormatter())
    return handler


def setup_logging(
    level: Optional[str] = None, log_file: Optional[str] = None
) -> logging.Logger:
    """Configure the ``polycalc`` logger.

    Handlers from an earlier call are closed and replaced, so the CLI can be
    run more than once in a process.

    Args:
        level: Level name (default: config.LOG_LEVEL, i.e. POLYCALC_LOG_LEVEL)
        log_file: Also append log lines to this file

    Returns:
        The ``polycalc`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level_name = (level or config.LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr)))
    if log_file:
        logger.addHandler(_make_handler(logging.FileHandler(log_file)))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``polycalc.<name>`` logger for a package module."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
