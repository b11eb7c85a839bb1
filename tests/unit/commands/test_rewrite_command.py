"""
Unit tests for the rewrite command.
"""

import pytest

from gitlab_link.commands.rewrite import rewrite_file_command
from gitlab_link.exceptions import GitlabLinkError, InvalidConfigurationError


@pytest.fixture
def chapter(tmp_path):
    path = tmp_path / "chapter.md"
    path.write_text("Closes #42.\n\n```\n#42\n```\n", encoding="utf-8")
    return path


class TestRewriteFileCommand:
    """Tests for the rewrite_file_command function."""

    def test_command_line_settings(self, chapter):
        """Test settings given as arguments."""
        result = rewrite_file_command(
            str(chapter), server_url="https://g.example", namespace="team", project="app"
        )
        assert result == (
            "Closes [#42](https://g.example/team/app/-/issues/42).\n\n```\n#42\n```\n"
        )

    def test_book_settings(self, chapter, tmp_path):
        """Test settings read from book.toml, overridden by arguments."""
        book_toml = tmp_path / "book.toml"
        book_toml.write_text(
            "[preprocessor.gitlab-link]\n"
            'gitlab-server-url = "https://g.example"\n'
            'gitlab-project-namespace = "team"\n'
            'gitlab-project-name = "app"\n'
        )
        result = rewrite_file_command(str(chapter), book_config_path=str(book_toml), project="lib")
        assert "https://g.example/team/lib/-/issues/42" in result

    def test_missing_server_url(self, chapter):
        """Test that a server URL is required."""
        with pytest.raises(InvalidConfigurationError):
            rewrite_file_command(str(chapter))

    def test_missing_file(self, tmp_path):
        """Test a Markdown file that does not exist."""
        with pytest.raises(GitlabLinkError):
            rewrite_file_command(str(tmp_path / "missing.md"), server_url="https://g.example")
