"""
Rewrite GitLab shorthand references in Markdown text as links.

Text outside the rewritten references is copied through unchanged.
"""

from typing import Iterator, List, Optional

from gitlab_link.config.models import GitlabLinkConfig
from gitlab_link.exceptions import MissingProjectContextError
from gitlab_link.processing.regions import scan_regions
from gitlab_link.processing.resolver import resolve
from gitlab_link.processing.tokenizer import scan
from gitlab_link.processing.types import MatchSpan, Region
from gitlab_link.utils.logging import get_logger

logger = get_logger(__name__)


class Rewriter:
    """Rewrites references using a fixed configuration."""

    def __init__(self, config: GitlabLinkConfig):
        """Initialize the rewriter.

        Args:
            config: Configuration shared by every call
        """
        self.config = config

    def _unprotected(self, text: str) -> Iterator[MatchSpan]:
        """Matches that do not touch a protected region."""
        regions = scan_regions(text, skip_headings=self.config.skip_headings)
        region: Optional[Region] = next(regions, None)

        for span in scan(text, require_project_marker=self.config.require_project_marker):
            while region is not None and region.end <= span.start:
                region = next(regions, None)
            if region is not None and region.overlaps(span.start, span.end):
                logger.debug("Skipping protected reference", reference=span.text, region=region.kind.value)
                continue
            yield span

    def rewrite(self, text: str) -> str:
        """Rewrite every resolvable reference in ``text``.

        Args:
            text: Markdown source

        Returns:
            The text with references replaced by ``[label](href)`` links
        """
        parts: List[str] = []
        cursor = 0
        rewritten = 0

        for span in self._unprotected(text):
            try:
                link = resolve(span, self.config)
            except MissingProjectContextError as e:
                logger.debug("Leaving reference unresolved", reference=span.text, missing=e.missing)
                continue
            parts.append(text[cursor:span.start])
            parts.append(link.markdown)
            cursor = span.end
            rewritten += 1

        if not rewritten:
            return text

        parts.append(text[cursor:])
        logger.debug("Rewrote references", count=rewritten)
        return "".join(parts)


def rewrite(text: str, config: GitlabLinkConfig) -> str:
    """Rewrite ``text`` with ``config``; see :meth:`Rewriter.rewrite`."""
    return Rewriter(config).rewrite(text)
