"""
Rewrite command handler.

Rewrites a single Markdown file outside of an mdBook build, which is handy
for checking how references in a chapter will come out.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from gitlab_link.config import load_book_config, load_config, read_environment
from gitlab_link.exceptions import GitlabLinkError
from gitlab_link.processing.rewriter import Rewriter
from gitlab_link.utils import get_logger

logger = get_logger(__name__)


def rewrite_file_command(
    markdown_path: str,
    book_config_path: Optional[str] = None,
    server_url: Optional[str] = None,
    namespace: Optional[str] = None,
    project: Optional[str] = None,
    env_file: Optional[str] = None,
) -> str:
    """
    Rewrite the references of one Markdown file.

    Command-line values take precedence over the book configuration; CI
    environment variables take precedence over both.

    Args:
        markdown_path: File to rewrite.
        book_config_path: Optional ``book.toml`` to read settings from.
        server_url: GitLab server URL.
        namespace: Default project namespace.
        project: Default project name.
        env_file: Optional dotenv file with CI variables.

    Returns:
        The rewritten Markdown.

    Raises:
        GitlabLinkError: If the file cannot be read.
        ConfigurationError: If the configuration is invalid.
    """
    settings: Dict[str, Any] = {}
    if book_config_path:
        settings.update(load_book_config(book_config_path))

    overrides = {
        "gitlab-server-url": server_url,
        "gitlab-project-namespace": namespace,
        "gitlab-project-name": project,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})

    config = load_config(settings, read_environment(env_file))

    path = Path(markdown_path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GitlabLinkError(f"Cannot read {path}: {e}") from e

    logger.info("Rewriting file", path=str(path))
    return Rewriter(config).rewrite(content)
