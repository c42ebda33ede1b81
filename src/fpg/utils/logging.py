"""Structured logging configuration.

Loggers are created through :func:`get_logger` so every module shares
the same stdout handler setup.  Context passed with ``extra=`` (for
example the uploaded file name or the number of rows) is merged into
the JSON document instead of being dropped.
"""

import logging
import json
import sys
from typing import Any, Dict, Optional

from ..config.settings import settings

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                log_data[key] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def _level(name: Optional[str]) -> int:
    return getattr(logging, (name or settings.log_level).upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_format == "json":
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(_level(None))
    return logger


def set_level(level: str) -> None:
    """Change the level of every ``fpg`` logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("fpg") and isinstance(logger, logging.Logger):
            logger.setLevel(_level(level))
