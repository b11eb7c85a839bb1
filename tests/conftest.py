"""Test fixtures for gitlab-link."""

import json
import logging
from collections.abc import Generator
from typing import Any, Dict

import pytest

from gitlab_link.config import ENV_OVERRIDES, GitlabLinkConfig
from gitlab_link.utils import configure_structlog

SERVER_URL = "https://g.example"


@pytest.fixture(autouse=True)
def clean_ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests may run inside GitLab CI; hide its variables."""
    for variable in ENV_OVERRIDES:
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.delenv("GITLAB_LINK_LOG", raising=False)


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    configure_structlog()


@pytest.fixture
def config() -> GitlabLinkConfig:
    """Configuration with a default namespace and project."""
    return GitlabLinkConfig(server_url=SERVER_URL, namespace="team", project="app")


@pytest.fixture
def bare_config() -> GitlabLinkConfig:
    """Configuration with only a server URL."""
    return GitlabLinkConfig(server_url=SERVER_URL)


def make_chapter(name: str, content: str, sub_items: Any = None) -> Dict[str, Any]:
    """Build a chapter item the way mdBook serializes it."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": f"{name.lower()}.md",
            "source_path": f"{name.lower()}.md",
            "parent_names": [],
        }
    }


@pytest.fixture
def book() -> Dict[str, Any]:
    """A small book with a nested chapter, a separator and a part title."""
    return {
        "sections": [
            make_chapter("Intro", "Fixed in #1.", [make_chapter("Details", "See !2")]),
            "Separator",
            {"PartTitle": "Reference"},
            make_chapter("Other", "`#3` stays"),
        ],
        "__non_exhaustive": None,
    }


@pytest.fixture
def context() -> Dict[str, Any]:
    """Preprocessor context carrying the gitlab-link settings."""
    return {
        "root": "/book",
        "config": {
            "book": {"title": "Test"},
            "preprocessor": {
                "gitlab-link": {
                    "command": "gitlab-link",
                    "gitlab-server-url": SERVER_URL,
                    "gitlab-project-namespace": "team",
                    "gitlab-project-name": "app",
                }
            },
        },
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }


@pytest.fixture
def payload(context: Dict[str, Any], book: Dict[str, Any]) -> str:
    """The JSON mdBook writes to the preprocessor's standard input."""
    return json.dumps([context, book])
