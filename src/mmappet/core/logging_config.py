"""Structured logging configuration.

This module configures structlog once for the whole package.
Library modules call get_logger(__name__) and emit snake_case events with
keyword fields; the CLI picks the level and renderer from MmappetSettings.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from .constants import LOG_FORMAT, LOG_LEVEL
from .errors import MmappetConfigError

__all__ = ["configure_logging", "get_logger", "resolve_level"]

_FORMATS = ("console", "json")


def resolve_level(level: str | int) -> int:
    """Translate a level name ("info", "WARNING") or number into a stdlib level int.

    Raises:
        MmappetConfigError: If the name is not a stdlib logging level.
    """
    if isinstance(level, int):
        return level
    mapping = logging.getLevelNamesMapping()
    value = mapping.get(level.strip().upper())
    if value is None:
        raise MmappetConfigError(f"unknown log level {level!r}; expected one of {sorted(mapping)}")
    return value


def configure_logging(level: str | int = LOG_LEVEL, fmt: str = LOG_FORMAT) -> None:
    """Configure structlog processors, level filtering, and output stream.

    Args:
        level: Minimum level to emit.
        fmt: "console" for human-readable lines, "json" for one JSON object per event.

    Raises:
        MmappetConfigError: If level or fmt is not recognized.
    """
    if fmt not in _FORMATS:
        raise MmappetConfigError(f"unknown log format {fmt!r}; expected one of {_FORMATS}")
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger, applying the default configuration on first use.

    Args:
        name: Logger name, usually __name__.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
