"""Structured logging configuration for Bindery.

This module provides structlog-based logging with:
- JSON output for production (when env var BINDERY_LOG_FORMAT=json)
- Pretty console output for development (default)
- Scoped context through structlog contextvars (bound_context)

The resolution engine itself only emits debug events, plus a warning when the
recursion guard trips, so hosts that never call configure_logging() get
structlog's defaults.

Usage:
    from bindery.logging import bound_context, configure_logging, get_logger

    # Configure logging once at application startup
    configure_logging()

    log = get_logger(__name__)
    with bound_context(surface_id="main"):
        log.debug("binding_resolved", path="/user/name")
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bound_context",
]

# Environment variable for log format
LOG_FORMAT_ENV_VAR = "BINDERY_LOG_FORMAT"

# Environment variable for log level
LOG_LEVEL_ENV_VAR = "BINDERY_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the log level from environment or default.

    Returns:
        Logging level constant (e.g., logging.INFO).
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    """Get processors shared between stdlib and structlog.

    Returns:
        List of common processors for log processing.
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog for the host application.

    Both structlog loggers and stdlib loggers end up on one stderr handler
    with the same renderer. Calling it again replaces the previous setup.

    Args:
        force_json: Force JSON output regardless of environment variable.
        level: Override log level. If None, reads from BINDERY_LOG_LEVEL env var.

    Example:
        # Surface engine debug events
        configure_logging(level=logging.DEBUG)
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()
    exception_processor: Processor = (
        structlog.processors.dict_tracebacks
        if use_json
        else structlog.processors.format_exc_info
    )

    structlog.configure(
        processors=[
            *_get_shared_processors(),
            exception_processor,
            _renderer(use_json),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json),
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name, normally ``__name__``.

    Returns:
        A bound structlog logger.
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


@contextmanager
def bound_context(**context: Any) -> Iterator[None]:
    """Attach context to every log event emitted inside the block.

    Values bound by an enclosing block are restored on exit, so nested
    surfaces and components log with the innermost ids.

    Example:
        with bound_context(surface_id="main", source_component_id="submit"):
            resolver.resolve_mapping(raw_context)  # logs carry both ids
    """
    with structlog.contextvars.bound_contextvars(**context):
        yield
