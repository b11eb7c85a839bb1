from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ReferenceKind(str, Enum):
    """Kinds of GitLab shorthand reference."""

    PROJECT = "project"
    ISSUE = "issue"
    MERGE_REQUEST = "merge_request"


# Marker character -> reference kind
MARKERS = {
    "#": ReferenceKind.ISSUE,
    "!": ReferenceKind.MERGE_REQUEST,
}


@dataclass(frozen=True)
class ReferenceToken:
    """A parsed reference.

    An empty ``namespace`` or a ``None`` project means the configured default
    applies. ``number`` is set for issues and merge requests only.
    """
    kind: ReferenceKind
    namespace: Tuple[str, ...] = ()
    project: Optional[str] = None
    number: Optional[int] = None


@dataclass(frozen=True)
class MatchSpan:
    """A reference found in the source text."""
    token: ReferenceToken
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class ResolvedLink:
    """Link target and display text for a reference."""
    href: str
    label: str

    @property
    def markdown(self) -> str:
        return f"[{self.label}]({self.href})"


class RegionKind(str, Enum):
    """Kinds of text where references are never rewritten."""

    CODE_BLOCK = "code_block"
    CODE_SPAN = "code_span"
    HEADING = "heading"
    LINK = "link"
    AUTOLINK = "autolink"
    URL = "url"
    HTML_COMMENT = "html_comment"
    HTML_BLOCK = "html_block"
    HTML_TAG = "html_tag"
    ESCAPE = "escape"


@dataclass(frozen=True)
class Region:
    """A protected span ``[start, end)`` of the source text."""
    start: int
    end: int
    kind: RegionKind

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end
