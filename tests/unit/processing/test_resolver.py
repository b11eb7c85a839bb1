"""
Unit tests for reference resolution.
"""

import pytest

from gitlab_link.config import GitlabLinkConfig
from gitlab_link.exceptions import MissingProjectContextError
from gitlab_link.processing.resolver import resolve
from gitlab_link.processing.tokenizer import scan


def resolve_text(text, config):
    (span,) = scan(text)
    return resolve(span, config)


class TestResolve:
    """Tests for the resolve function."""

    def test_issue_in_default_project(self, config):
        """Test an issue resolved against the configured project."""
        link = resolve_text("#42", config)
        assert link.href == "https://g.example/team/app/-/issues/42"
        assert link.label == "#42"

    def test_merge_request_in_explicit_project(self, config):
        """Test that an explicit project wins over the defaults."""
        link = resolve_text("other/repo!7", config)
        assert link.href == "https://g.example/other/repo/-/merge_requests/7"
        assert link.label == "other/repo!7"

    def test_project_in_default_namespace(self, config):
        """Test a project-qualified issue without namespace."""
        link = resolve_text("lib#3", config)
        assert link.href == "https://g.example/team/lib/-/issues/3"

    def test_subgroup_namespace(self, bare_config):
        """Test that nested namespaces need no configuration."""
        link = resolve_text("group/sub/proj#3", bare_config)
        assert link.href == "https://g.example/group/sub/proj/-/issues/3"

    def test_project_reference(self, bare_config):
        """Test a project link."""
        link = resolve_text("group/project>", bare_config)
        assert link.href == "https://g.example/group/project"
        assert link.label == "group/project>"

    def test_configured_subgroup(self):
        """Test a default namespace containing a subgroup."""
        config = GitlabLinkConfig(
            server_url="https://g.example/gitlab/", namespace="group/sub", project="app"
        )
        link = resolve_text("!1", config)
        assert link.href == "https://g.example/gitlab/group/sub/app/-/merge_requests/1"

    def test_configured_values_are_quoted(self):
        """Test that configuration values are URL-quoted."""
        config = GitlabLinkConfig(
            server_url="https://g.example", namespace="my group", project="app"
        )
        assert resolve_text("#1", config).href == "https://g.example/my%20group/app/-/issues/1"

    def test_markdown(self, config):
        """Test the Markdown rendering of a link."""
        link = resolve_text("#42", config)
        assert link.markdown == "[#42](https://g.example/team/app/-/issues/42)"

    def test_missing_namespace(self, bare_config):
        """Test that a reference without any namespace cannot be resolved."""
        with pytest.raises(MissingProjectContextError) as excinfo:
            resolve_text("#5", bare_config)
        assert excinfo.value.missing == "namespace"
        assert excinfo.value.reference == "#5"

    def test_missing_project(self):
        """Test a configured namespace without a project."""
        config = GitlabLinkConfig(server_url="https://g.example", namespace="team")
        with pytest.raises(MissingProjectContextError) as excinfo:
            resolve_text("!5", config)
        assert excinfo.value.missing == "project"
        # A project-qualified reference still works
        assert resolve_text("app!5", config).href == (
            "https://g.example/team/app/-/merge_requests/5"
        )
