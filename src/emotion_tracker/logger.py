"""Structured logging configuration using *structlog*."""

from __future__ import annotations

import logging
import sys

import structlog

SERVICE_NAME = "emotion-tracker"


def setup_logging(
    level: str = "INFO",
    *,
    json_logs: bool | None = None,
    service: str = SERVICE_NAME,
) -> None:
    """Configure *structlog* for the tracker and tag every event with ``service``.

    Call once at application startup.  Events go to stderr so commands that
    print JSON on stdout stay machine-readable.  ``json_logs`` forces the
    renderer; by default a TTY gets the console renderer and anything else
    gets JSON lines.
    """
    if json_logs is None:
        json_logs = not sys.stderr.isatty()
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
