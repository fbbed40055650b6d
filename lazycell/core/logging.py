"""
lazycell Structured Logging

structlog setup for applications that want lazycell's log events rendered
consistently. The library only obtains loggers; it never configures logging
on import, so host applications keep control of their own pipeline.
"""

import logging
from typing import Optional

import structlog

from .config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog on top of the standard library logging module.

    Args:
        settings: Settings to read LOG_LEVEL, LOG_JSON and ENVIRONMENT from
            (defaults to the cached global settings). Production always
            renders JSON.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger("lazycell").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON or settings.is_production
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
