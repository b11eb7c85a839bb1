"""
Configuration models for the gitlab-link preprocessor.

This module defines Pydantic models for configuration validation.
"""

from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gitlab_link.utils.logging import VALID_LEVELS


class GitlabLinkConfig(BaseModel):
    """Pydantic model for the ``[preprocessor.gitlab-link]`` settings.

    Field aliases are the keys used in ``book.toml``. The model is frozen so a
    single instance can be shared by every chapter of a build.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    server_url: str = Field(alias="gitlab-server-url")
    namespace: Optional[str] = Field(default=None, alias="gitlab-project-namespace")
    project: Optional[str] = Field(default=None, alias="gitlab-project-name")
    skip_headings: bool = Field(default=True, alias="skip-headings")
    # Without it, plain slashed words such as and/or or 10/12/2024 read as projects
    require_project_marker: bool = Field(default=False, alias="require-project-marker")

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Validate that the server URL is an absolute http(s) URL."""
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Server URL must be an absolute http(s) URL, got {v!r}")
        if parsed.query or parsed.fragment:
            raise ValueError("Server URL must not contain a query or fragment")
        return v.rstrip("/")

    @field_validator("namespace", "project")
    @classmethod
    def validate_path(cls, v: Optional[str]) -> Optional[str]:
        """Normalize empty values to ``None`` and strip surrounding slashes."""
        if v is None:
            return None
        v = v.strip().strip("/")
        return v or None


class LoggingConfig(BaseModel):
    """Pydantic model for logging configuration."""

    level: str = Field(default="INFO")
    structured: bool = False

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is valid."""
        if v.upper() not in VALID_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LEVELS}")
        return v.upper()
