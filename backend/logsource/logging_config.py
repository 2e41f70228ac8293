"""Structured logging setup."""

import logging

import structlog

from logsource.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog rendering and level from settings."""

    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    renderer = structlog.processors.JSONRenderer() if settings.log_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
