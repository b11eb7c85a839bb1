"""
Configuration module for the gitlab-link preprocessor.

This module provides configuration models and utilities for loading and validating configuration.
"""

from gitlab_link.config.loader import (
    ENV_OVERRIDES,
    PREPROCESSOR_NAME,
    apply_env_overrides,
    load_book_config,
    load_config,
    preprocessor_settings,
    read_environment,
)
from gitlab_link.config.models import GitlabLinkConfig, LoggingConfig

__all__ = [
    "ENV_OVERRIDES",
    "PREPROCESSOR_NAME",
    "GitlabLinkConfig",
    "LoggingConfig",
    "apply_env_overrides",
    "load_book_config",
    "load_config",
    "preprocessor_settings",
    "read_environment",
]
