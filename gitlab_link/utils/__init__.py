"""
Utilities module for the gitlab-link preprocessor.

This module provides logging helpers shared by the other modules.
"""

from gitlab_link.utils.logging import (
    VALID_LEVELS,
    configure_structlog,
    get_logger,
    setup_logging,
)

__all__ = [
    "VALID_LEVELS",
    "configure_structlog",
    "get_logger",
    "setup_logging",
]
