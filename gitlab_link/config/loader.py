"""
Configuration loader module for the gitlab-link preprocessor.

Settings come from the ``[preprocessor.gitlab-link]`` table of the book
configuration. GitLab CI exports the server and project coordinates as
environment variables; those override the book settings field by field.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import ValidationError

from gitlab_link.config.models import GitlabLinkConfig
from gitlab_link.exceptions import ConfigurationError, InvalidConfigurationError
from gitlab_link.utils.logging import get_logger

logger = get_logger(__name__)

PREPROCESSOR_NAME = "gitlab-link"

# Environment variable -> book setting it overrides
ENV_OVERRIDES = {
    "CI_SERVER_URL": "gitlab-server-url",
    "CI_PROJECT_NAMESPACE": "gitlab-project-namespace",
    "CI_PROJECT_NAME": "gitlab-project-name",
}


def preprocessor_settings(book_config: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Extract the gitlab-link table from a parsed book configuration.

    Args:
        book_config: The whole book configuration (``book.toml`` contents, or
            the ``config`` member of the mdBook preprocessor context).

    Returns:
        The preprocessor settings, or an empty dictionary if absent.
    """
    preprocessors = book_config.get("preprocessor") or {}
    settings = preprocessors.get(PREPROCESSOR_NAME) or {}
    if not isinstance(settings, Mapping):
        raise ConfigurationError(
            f"[preprocessor.{PREPROCESSOR_NAME}] must be a table, got {type(settings).__name__}"
        )
    return dict(settings)


def load_book_config(config_path: str) -> Dict[str, Any]:
    """
    Load the gitlab-link settings from a ``book.toml`` file.

    Args:
        config_path: Path to the book configuration file.

    Returns:
        The preprocessor settings.

    Raises:
        ConfigurationError: If the configuration file doesn't exist or is invalid.
    """
    config_file = Path(config_path).resolve()
    if not config_file.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}", config_file=str(config_file)
        )

    try:
        with open(config_file, "rb") as f:
            config_dict = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error("Error parsing configuration file", error=str(e))
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_file=str(config_file)
        ) from e

    return preprocessor_settings(config_dict)


def read_environment(env_file: Optional[str] = None) -> Dict[str, str]:
    """
    Collect environment variables, optionally seeded from a dotenv file.

    Variables set in the process environment win over the file.

    Args:
        env_file: Optional path to a ``.env`` file.

    Returns:
        Mapping of variable names to values.
    """
    environ: Dict[str, str] = {}
    if env_file:
        if not Path(env_file).exists():
            raise ConfigurationError(f"Environment file not found: {env_file}")
        environ.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    environ.update(os.environ)
    return environ


def apply_env_overrides(
    settings: Mapping[str, Any], environ: Mapping[str, str]
) -> Dict[str, Any]:
    """
    Overlay CI environment variables on top of the book settings.

    Only variables that are present and non-empty replace the matching
    setting; everything else keeps its book value.

    Args:
        settings: The book-level settings.
        environ: Environment variables.

    Returns:
        The merged settings.
    """
    merged = dict(settings)
    for variable, key in ENV_OVERRIDES.items():
        value = environ.get(variable)
        if value:
            if key in merged and merged[key] != value:
                logger.debug("Environment overrides book setting", key=key, variable=variable)
            merged[key] = value
    return merged


def load_config(
    settings: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> GitlabLinkConfig:
    """
    Merge and validate the preprocessor configuration.

    Args:
        settings: The book-level settings.
        environ: Environment variables. If None, ``os.environ`` is used.

    Returns:
        Validated configuration object.

    Raises:
        InvalidConfigurationError: If the server URL is missing or malformed,
            or another setting has the wrong type.
    """
    if environ is None:
        environ = os.environ
    merged = apply_env_overrides(settings, environ)

    if not merged.get("gitlab-server-url"):
        raise InvalidConfigurationError(
            "No GitLab server URL configured: set gitlab-server-url in "
            f"[preprocessor.{PREPROCESSOR_NAME}] or the CI_SERVER_URL environment variable"
        )

    try:
        config = GitlabLinkConfig.model_validate(merged)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid configuration: {e}") from e

    logger.debug(
        "Loaded configuration",
        server_url=config.server_url,
        namespace=config.namespace,
        project=config.project,
    )
    return config
