"""
Structured logging setup.
"""
import logging
import sys
from typing import Optional

import structlog

from config.settings import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None):
    """
    Configure structlog for the whole process.

    Args:
        level: Log level name, defaults to LOG_LEVEL setting
        fmt: "json" or "console", defaults to LOG_FORMAT setting
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    fmt = (fmt or settings.LOG_FORMAT).lower()

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    """Get a bound logger, tagged with the component name if given."""
    if name:
        return structlog.get_logger().bind(component=name)
    return structlog.get_logger()
