"""Structured logging utilities using structlog for pipeline context and tracing."""

import logging
import sys
import uuid
from typing import Optional

import structlog
from structlog.processors import JSONRenderer
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

from claim_verifier.config.settings import settings

IS_TTY = sys.stderr.isatty()


def configure_structured_logging() -> None:
    """
    Configure structured logging with appropriate processors and renderers.

    Uses:
    - Console renderer for development (colorized, human-readable)
    - JSON renderer for production (structured, machine-readable)
    - Context variables for the per-request correlation_id
    """
    processors = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if IS_TTY and settings.log_format.lower() == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer())

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_correlation_id() -> str:
    """Generate a correlation ID for tracing a single verification request."""
    return str(uuid.uuid4())


def bind_request_context(correlation_id: Optional[str] = None) -> str:
    """
    Bind a correlation ID to the current context for all subsequent log lines.

    Args:
        correlation_id: Existing ID to reuse; a new one is generated if omitted

    Returns:
        The correlation ID now bound to the context
    """
    correlation_id = correlation_id or get_correlation_id()
    clear_contextvars()
    bind_contextvars(correlation_id=correlation_id)
    return correlation_id


configure_structured_logging()


__all__ = [
    "get_correlation_id",
    "bind_request_context",
    "configure_structured_logging",
]
