"""
mdBook preprocessor payload handling.

mdBook sends ``[context, book]`` as JSON on standard input and expects the
book back on standard output. Book items are ``{"Chapter": {...}}``,
``"Separator"`` or ``{"PartTitle": "..."}``; chapters nest through
``sub_items``.
"""

import json
from typing import Any, Dict, Iterator, List, Tuple

from gitlab_link.exceptions import BookFormatError
from gitlab_link.processing.rewriter import Rewriter
from gitlab_link.utils.logging import get_logger

logger = get_logger(__name__)

# mdBook release series the payload format is known for
SUPPORTED_MDBOOK_VERSIONS = ("0.4", "0.5")
SUPPORTED_RENDERERS = ("html",)

# mdBook 0.5 renamed the top-level ``sections`` list to ``items``
BOOK_ITEM_KEYS = ("items", "sections")


def parse_payload(raw: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Split the preprocessor input into context and book.

    Args:
        raw: JSON text read from standard input.

    Returns:
        The preprocessor context and the book.

    Raises:
        BookFormatError: If the input is not a ``[context, book]`` pair.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BookFormatError(f"Preprocessor input is not valid JSON: {e}") from e

    if (
        not isinstance(payload, list)
        or len(payload) != 2
        or not all(isinstance(part, dict) for part in payload)
    ):
        raise BookFormatError("Preprocessor input must be a JSON array [context, book]")

    context, book = payload
    return context, book


def check_mdbook_version(context: Dict[str, Any]) -> bool:
    """
    Warn when the book was built by an mdBook release we were not written for.

    Returns:
        Whether the version is supported.
    """
    version = str(context.get("mdbook_version", ""))
    if any(version == v or version.startswith(v + ".") for v in SUPPORTED_MDBOOK_VERSIONS):
        return True
    logger.warning(
        "gitlab-link was written for a different mdBook version",
        mdbook_version=version or None,
        supported=list(SUPPORTED_MDBOOK_VERSIONS),
    )
    return False


def supports_renderer(renderer: str) -> bool:
    """Whether references should be rewritten for ``renderer``."""
    return renderer in SUPPORTED_RENDERERS


def _top_level_items(book: Dict[str, Any]) -> List[Any]:
    for key in BOOK_ITEM_KEYS:
        items = book.get(key)
        if isinstance(items, list):
            return items
    raise BookFormatError(f"Book has no item list (expected one of {list(BOOK_ITEM_KEYS)})")


def iter_chapters(items: List[Any]) -> Iterator[Dict[str, Any]]:
    """Yield every chapter of ``items`` depth first, sub-chapters included."""
    for item in items:
        if not isinstance(item, dict) or "Chapter" not in item:
            continue
        chapter = item["Chapter"]
        yield chapter
        yield from iter_chapters(chapter.get("sub_items") or [])


def rewrite_book(book: Dict[str, Any], rewriter: Rewriter) -> Dict[str, Any]:
    """
    Rewrite the content of every chapter in place.

    Args:
        book: The book as sent by mdBook.
        rewriter: Rewriter bound to the active configuration.

    Returns:
        The same book object, modified.
    """
    count = 0
    for chapter in iter_chapters(_top_level_items(book)):
        content = chapter.get("content")
        if not isinstance(content, str):
            continue
        chapter["content"] = rewriter.rewrite(content)
        count += 1
        logger.debug("Processed chapter", name=chapter.get("name"), path=chapter.get("path"))

    logger.info("Processed book", chapters=count)
    return book
