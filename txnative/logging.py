"""Structured logging for the translation client.

Applications call :func:`configure_logging` once at startup. Every record
emitted through :data:`logger` carries ``component="txnative"`` so client
events can be told apart from the host application's.
"""

from __future__ import annotations

import logging

import structlog

COMPONENT = "txnative"


def configure_logging(level: int = logging.INFO, *, json: bool = True) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(COMPONENT, component=COMPONENT)

__all__ = ["COMPONENT", "configure_logging", "logger"]
