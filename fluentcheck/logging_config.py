"""Structured logging setup.

The library itself only calls ``structlog.get_logger()``; applications that
want the library's default rendering call ``configure_logging()`` once at
startup.
"""

import logging
from typing import Optional

import structlog

from fluentcheck.config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        level: Level name ("debug", "info", ...). Defaults to settings.LOG_LEVEL.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        min_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
    )
