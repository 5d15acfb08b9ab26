"""
Structured logging configuration for optimist.

Provides JSON-formatted logs with trace_id support; transaction transitions
pass the transaction id as trace_id through extra=.

Environment Variables:
    OPTIMIST_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    OPTIMIST_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from optimist.logging_config import setup_logging

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.debug("Reverting transaction", extra={"trace_id": "42"})
"""

import logging
import os
import sys
from pythonjsonlogger.json import JsonFormatter


def setup_logging() -> None:
    """
    Configure root logger with structured logging.

    Reads configuration from environment variables:
    - OPTIMIST_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - OPTIMIST_LOG_FORMAT: json, text (default: json)
    """
    log_level = os.getenv("OPTIMIST_LOG_LEVEL", "INFO").upper()
    log_format = os.getenv("OPTIMIST_LOG_FORMAT", "json").lower()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    level = level_map.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr keeps stdout clean for --json output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(TraceIDFilter())

    if log_format == "json":
        formatter = JsonFormatter(
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


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True
