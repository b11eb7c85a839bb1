"""
Unit tests for the configuration models.

This module tests the Pydantic models for configuration validation.
"""

import pytest
from pydantic import ValidationError

from gitlab_link.config.models import GitlabLinkConfig, LoggingConfig


class TestGitlabLinkConfig:
    """Tests for the GitlabLinkConfig model."""

    def test_valid_config(self):
        """Test that a valid configuration is accepted."""
        config = GitlabLinkConfig(
            server_url="https://gitlab.example.com", namespace="team", project="app"
        )
        assert config.server_url == "https://gitlab.example.com"
        assert config.namespace == "team"
        assert config.project == "app"
        assert config.skip_headings is True
        assert config.require_project_marker is False

    def test_book_keys(self):
        """Test that book.toml keys populate the model."""
        config = GitlabLinkConfig.model_validate(
            {
                "command": "gitlab-link",
                "gitlab-server-url": "https://gitlab.example.com",
                "gitlab-project-namespace": "group/sub",
                "gitlab-project-name": "app",
                "skip-headings": False,
                "require-project-marker": True,
            }
        )
        assert config.namespace == "group/sub"
        assert config.skip_headings is False
        assert config.require_project_marker is True

    def test_trailing_slash_removed(self):
        """Test that the server URL loses its trailing slash."""
        config = GitlabLinkConfig(server_url="https://gitlab.example.com/ ")
        assert config.server_url == "https://gitlab.example.com"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "gitlab.example.com",
            "/relative/path",
            "ftp://gitlab.example.com",
            "https://",
            "https://gitlab.example.com/?a=b",
        ],
    )
    def test_invalid_server_url(self, url):
        """Test that non-absolute or non-http URLs are rejected."""
        with pytest.raises(ValidationError):
            GitlabLinkConfig(server_url=url)

    def test_empty_defaults_are_absent(self):
        """Test that empty namespace and project mean no default."""
        config = GitlabLinkConfig(server_url="https://g.example", namespace=" ", project="")
        assert config.namespace is None
        assert config.project is None

    def test_namespace_slashes_stripped(self):
        """Test that surrounding slashes are dropped from the namespace."""
        config = GitlabLinkConfig(server_url="https://g.example", namespace="/group/sub/")
        assert config.namespace == "group/sub"

    def test_frozen(self):
        """Test that the configuration cannot be changed after construction."""
        config = GitlabLinkConfig(server_url="https://g.example")
        with pytest.raises(ValidationError):
            config.project = "other"


class TestLoggingConfig:
    """Tests for the LoggingConfig model."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.structured is False

    def test_valid_log_levels(self):
        """Test that valid log levels are accepted."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            config = LoggingConfig(level=level)
            assert config.level == level

        # Test case insensitivity
        config = LoggingConfig(level="debug")
        assert config.level == "DEBUG"

    def test_invalid_log_level(self):
        """Test that invalid log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")
