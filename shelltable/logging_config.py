"""
Structured logging configuration.

Provides JSON-formatted logs with a trace_id field. Library modules log
with the table identity as trace_id, so every record about one table can be
correlated.

Usage:
    from shelltable.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id=str(table.identity))
    logger.info("Loaded table")
"""

import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger.json import JsonFormatter

from .config import Settings


def setup_logging(settings: Optional[Settings] = None, stream: Optional[TextIO] = None) -> None:
    """
    Configure the root logger.

    Uses SHELLTABLE_LOG_LEVEL / SHELLTABLE_LOG_FORMAT unless explicit
    settings are given. Logs go to stdout unless another stream is given.
    """
    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.addFilter(TraceIDFilter())

    if settings.log_format == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID, typically a table identity
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})


class TraceIDFilter(logging.Filter):
    """Ensures every record has a trace_id, even when logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True

