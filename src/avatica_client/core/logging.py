"""Logging configuration using structlog.

The library only emits events; the embedding application decides whether
to call setup_logging(). Output goes to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

_LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class _LazyStderrFactory:
    """Look up sys.stderr per logger instead of once at configure() time.

    pytest swaps stderr between tests, so a handle captured up front goes
    stale.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=sys.stderr)


def setup_logging(
    verbose: bool = False,
    *,
    level: str | None = None,
    json_output: bool = False,
) -> None:
    """Configure structlog for the Avatica client.

    Args:
        verbose: Shorthand for level="debug".
        level: Explicit level name; overrides verbose.
        json_output: Render one JSON object per line instead of console text.
    """
    log_level = level or ("debug" if verbose else "info")
    if log_level not in _LOG_LEVELS:
        msg = f"Unknown log level: '{log_level}'"
        raise ValueError(msg)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LOG_LEVELS[log_level]),
        context_class=dict,
        logger_factory=_LazyStderrFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, optionally bound with a name.

    Never call this at module level; call it inside functions or __init__()
    so a later setup_logging() still applies.
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger


def connection_context(connection_id: str) -> AbstractContextManager[Any]:
    """Bind connection_id to every event logged inside the block."""
    return structlog.contextvars.bound_contextvars(connection_id=connection_id)
