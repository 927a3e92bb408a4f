"""Structured logging configuration -- structlog + stdlib integration.

Provides a single :func:`setup_logging` entry-point that configures
**structlog** and Python's built-in :mod:`logging` so that events emitted by
the grammar, the term store and the calculus engine flow through one
processor pipeline and renderer.

Processors added to every log event:

* **timestamp** -- UTC ISO-8601
* **log level** -- ``debug`` / ``info`` / ``warning`` / ``error``
* **logger name** -- the ``__name__`` of the calling module

Library modules only *emit* events (``logger = get_logger(__name__)``);
nothing is printed until an application calls :func:`setup_logging`.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def setup_logging(
    level: str = "info",
    json_output: bool = False,
) -> None:
    """Configure structlog with stdlib logging integration.

    Args:
        level: Log level string (``debug``, ``info``, ``warning``, ``error``,
            ``critical``).
        json_output: If ``True``, output JSON lines; otherwise human-readable
            console output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            pad_event=30,
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    structlog.get_logger(__name__).debug(
        "logging_configured",
        level=level,
        json_output=json_output,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog bound logger.

    Thin convenience wrapper so that callers do not need to import
    structlog directly::

        from src.core.log import get_logger
        logger = get_logger(__name__)
    """
    return structlog.get_logger(name)


__all__ = ["setup_logging", "get_logger"]
