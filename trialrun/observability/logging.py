"""Structured logging setup."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from trialrun.settings import Settings


def setup_logging(settings: Settings) -> None:
    """Configure structlog on top of the standard library logging module.

    In normal mode:
    - JSON formatted logs
    - Standard library logging bridged to structlog

    In debug mode:
    - Console formatted logs with colors

    Logs go to stderr so that report output on stdout stays machine-readable.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.dict_tracebacks,
    ]

    final_renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if settings.debug
        else structlog.processors.JSONRenderer()
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    structlog.configure(
        processors=[
            *shared_processors,
            final_renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Logging configured",
        log_level=settings.log_level,
        debug_mode=settings.debug,
    )
