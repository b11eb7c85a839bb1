"""
Preprocess command handler.

This module runs gitlab-link as an mdBook preprocessor: it reads the
``[context, book]`` payload, rewrites every chapter and writes the book back.
"""

import json
from typing import Optional, TextIO

from gitlab_link.book import check_mdbook_version, parse_payload, rewrite_book
from gitlab_link.config import load_config, preprocessor_settings, read_environment
from gitlab_link.exceptions import BookFormatError
from gitlab_link.processing.rewriter import Rewriter
from gitlab_link.utils import get_logger

logger = get_logger(__name__)


def preprocess_command(
    stdin: TextIO, stdout: TextIO, env_file: Optional[str] = None
) -> None:
    """
    Rewrite the book received from mdBook.

    Args:
        stdin: Stream carrying the preprocessor payload.
        stdout: Stream the rewritten book is written to.
        env_file: Optional dotenv file with CI variables.

    Raises:
        BookFormatError: If the payload is malformed.
        ConfigurationError: If the configuration is invalid.
    """
    context, book = parse_payload(stdin.read())
    check_mdbook_version(context)

    book_config = context.get("config") or {}
    if not isinstance(book_config, dict):
        raise BookFormatError("Preprocessor context has no book configuration")

    config = load_config(preprocessor_settings(book_config), read_environment(env_file))
    logger.info(
        "Rewriting GitLab references",
        renderer=context.get("renderer"),
        server_url=config.server_url,
    )

    rewrite_book(book, Rewriter(config))
    json.dump(book, stdout)
    stdout.flush()
