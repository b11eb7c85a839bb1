"""Reference scanning, resolution and rewriting."""

from gitlab_link.processing.regions import scan_regions
from gitlab_link.processing.resolver import resolve
from gitlab_link.processing.rewriter import Rewriter, rewrite
from gitlab_link.processing.tokenizer import scan
from gitlab_link.processing.types import (
    MatchSpan,
    ReferenceKind,
    ReferenceToken,
    Region,
    RegionKind,
    ResolvedLink,
)

__all__ = [
    "MatchSpan",
    "ReferenceKind",
    "ReferenceToken",
    "Region",
    "RegionKind",
    "ResolvedLink",
    "Rewriter",
    "resolve",
    "rewrite",
    "scan",
    "scan_regions",
]
