"""Logging setup, JSON formatting, and boot-phase timing."""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, TextIO

__all__ = ["JsonFormatter", "Stopwatch", "configure_logging"]

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}

_HANDLER_FLAG = "_routecore_handler"


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message and extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "info", format: str = "text", stream: TextIO | None = None) -> logging.Logger:
    """Install a single handler on the ``routecore`` logger.

    Calling it again replaces the previously installed handler, so the CLI
    and tests can reconfigure freely.
    """
    root = logging.getLogger("routecore")
    root.setLevel(_LEVELS.get(level.lower(), logging.INFO))

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    setattr(handler, _HANDLER_FLAG, True)
    root.addHandler(handler)
    return root


class Stopwatch:
    """Elapsed wall time in milliseconds since construction."""

    def __init__(self) -> None:
        self._start = time.perf_counter()

    def duration(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 3)
