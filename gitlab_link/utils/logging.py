"""
Structured logging utilities for the gitlab-link preprocessor.

Standard output carries the book JSON back to mdBook, so log lines are routed
through the standard library root logger to standard error, never printed.
"""

import logging
import sys
from typing import Any

import structlog

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_structlog(structured: bool = False) -> None:
    """
    Route structlog through the standard library loggers.

    Args:
        structured: Whether to render log lines as JSON instead of console text.
    """
    if structured:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(level: str = "INFO", structured: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        structured: Whether to render log lines as JSON instead of console text.

    Raises:
        ValueError: If the log level is invalid.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    configure_structlog(structured)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name.

    Returns:
        Logger instance.
    """
    return structlog.get_logger(name)


# Library callers that never call setup_logging still must not get log
# lines on stdout.
if not structlog.is_configured():
    configure_structlog()
