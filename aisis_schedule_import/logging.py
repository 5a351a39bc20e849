"""Structured logging configuration using structlog.

JSON output for machine consumption, human-readable console output otherwise.
Modules obtain loggers through get_logger() instead of printing.

Until setup_logging() is called, events go through stdlib logging with its
defaults (WARNING and above, to stderr), so library callers see no output on
stdout.
"""

import logging
import sys

import structlog


def _configure_library_default() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog processors and output format.

    Args:
        json_output: If True, render JSON lines. If False, console format.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # Rendered lines are handed to stdlib logging, which writes to stderr;
    # stdout is reserved for exported data.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger bound with the module name."""
    return structlog.get_logger(name)


if not structlog.is_configured():
    _configure_library_default()
