"""Structured logging configuration."""

import logging
import sys

import structlog


def logging_configure(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog processors and level filtering for the process.

    Args:
        log_level: Minimum level name, e.g. `INFO`.
        json_output: Render JSON lines when True, console output otherwise.

    Returns:
        None: Configures the global structlog state as side effect.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    level_value = logging.getLevelName(log_level.upper())
    if not isinstance(level_value, int):
        raise ValueError(f"unknown log level: {log_level}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
