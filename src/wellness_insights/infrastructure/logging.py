"""Structured logging for scoring and insight runs, built on structlog.

JSON lines by default so log collectors can parse them; a console renderer
for local runs. Events carry counts, levels and identifiers only. Raw answers
are never logged.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator

    from wellness_insights.config import LoggingSettings

_CALLSITE = [
    structlog.processors.CallsiteParameter.FILENAME,
    structlog.processors.CallsiteParameter.LINENO,
    structlog.processors.CallsiteParameter.FUNC_NAME,
]


def _shared_processors(settings: LoggingSettings) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if settings.include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors.append(structlog.processors.StackInfoRenderer())
    if settings.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(_CALLSITE))
    return processors


def _renderers(settings: LoggingSettings) -> list[structlog.types.Processor]:
    if settings.format == "console":
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging(settings: LoggingSettings | None = None, stream: TextIO | None = None) -> None:
    """Route structlog events through the stdlib root logger.

    Args:
        settings: Logging settings. If None, the configured ``LOG_*`` values
            are used.
        stream: Target stream (defaults to stdout). The CLI passes stderr so
            stdout carries only JSON results.
    """
    if settings is None:
        from wellness_insights.config import get_settings  # noqa: PLC0415

        settings = get_settings().logging

    structlog.configure(
        processors=_shared_processors(settings) + _renderers(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, settings.level),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger for a module (pass ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


@contextmanager
def log_context(**values: str | int | float | bool) -> Iterator[None]:
    """Attach ``values`` to every event logged inside the block.

    Keys bound before entering are restored on exit, so nested runs for
    different students do not leak ids into each other.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
