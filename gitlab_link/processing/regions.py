"""
Locate the parts of a Markdown document where references must not be rewritten.

The scan has two layers. The block layer parses the document with
markdown-it and marks code blocks, HTML blocks and, optionally, headings by
their line ranges. The inline layer runs over the text between block regions
and marks code spans, escapes, HTML, autolinks, existing links and raw URLs.
"""

import re
import string
from typing import Dict, Iterator, List, Optional, Set

from markdown_it import MarkdownIt

from gitlab_link.processing.types import Region, RegionKind

LINK_DEFINITION_INDENT = 3

# markdown-it splits lines on the same terminators
NEWLINE_RE = re.compile(r"\r\n?|\n")

AUTOLINK_RE = re.compile(
    r"<(?:"
    r"[A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*"
    r"|[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*"
    r")>"
)
HTML_TAG_RE = re.compile(r"</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>")
URL_RE = re.compile(r"(?:[A-Za-z][A-Za-z0-9+.-]*://|www\.)[^\s<>]*")

SCHEME_CHARS = frozenset(string.ascii_letters + string.digits + "+.-")
URL_TRAILING_PUNCTUATION = ".,;:!?*_~'\")"
ESCAPABLE = frozenset(string.punctuation)
BRACKETS = {"]": "[", ")": "("}

BLOCK_TOKENS = {
    "fence": RegionKind.CODE_BLOCK,
    "code_block": RegionKind.CODE_BLOCK,
    "html_block": RegionKind.HTML_BLOCK,
}

# Only block structure is needed; inline parsing stays with the scanner below
_parser = MarkdownIt("commonmark").disable("inline")


def _line_starts(text: str) -> List[int]:
    """Offset of every line start, plus ``len(text)`` as a sentinel."""
    starts = [0]
    starts.extend(match.end() for match in NEWLINE_RE.finditer(text))
    starts.append(len(text))
    return starts


def _block_regions(text: str, skip_headings: bool) -> Iterator[Region]:
    """Code blocks, HTML blocks and, optionally, headings."""
    starts = _line_starts(text)
    last = len(starts) - 1

    for token in _parser.parse(text):
        if token.map is None:
            continue
        if token.type in BLOCK_TOKENS:
            kind = BLOCK_TOKENS[token.type]
        elif token.type == "heading_open" and skip_headings:
            kind = RegionKind.HEADING
        else:
            continue

        first, stop = token.map
        start = starts[min(first, last)]
        end = starts[min(stop, last)]
        if kind is RegionKind.HEADING:
            # The line break after a heading is not part of it
            while end > start and text[end - 1] in "\r\n":
                end -= 1
        if end > start:
            yield Region(start, end, kind)


def _is_blank_line_after(text: str, newline: int, end: int) -> bool:
    pos = newline + 1
    while pos < end and text[pos] in " \t\r":
        pos += 1
    return pos >= end or text[pos] == "\n"


def _bracket_pairs(text: str, start: int, end: int) -> Dict[int, int]:
    """Map each ``[`` and ``(`` of ``text[start:end]`` to its closing bracket.

    Each bracket kind nests on its own; backslash escapes are honored and a
    blank line drops every open bracket, since brackets never pair across
    paragraphs.
    """
    pairs: Dict[int, int] = {}
    open_brackets: Dict[str, List[int]] = {"[": [], "(": []}
    pos = start
    while pos < end:
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char in open_brackets:
            open_brackets[char].append(pos)
        elif char in BRACKETS:
            stack = open_brackets[BRACKETS[char]]
            if stack:
                pairs[stack.pop()] = pos
        elif char == "\n" and _is_blank_line_after(text, pos, end):
            for stack in open_brackets.values():
                stack.clear()
        pos += 1
    return pairs


def _find_backtick_run(text: str, pos: int, end: int, run_len: int) -> Optional[int]:
    """End offset of the next backtick run of exactly ``run_len``, or None."""
    ticks = "`" * run_len
    while True:
        found = text.find(ticks, pos, end)
        if found == -1:
            return None
        run_end = found + run_len
        while run_end < end and text[run_end] == "`":
            run_end += 1
        if run_end - found == run_len:
            return run_end
        pos = run_end


def _starts_definition(text: str, pos: int, lower: int) -> bool:
    """Whether the ``[`` at ``pos`` opens a line, up to three spaces in."""
    back = pos
    while back > lower and text[back - 1] == " " and pos - back < LINK_DEFINITION_INDENT:
        back -= 1
    return back == 0 or text[back - 1] in "\r\n"


def _match_link(text: str, pos: int, end: int, lower: int, pairs: Dict[int, int]) -> Optional[int]:
    """End offset of a link, image or link definition starting at ``pos``."""
    label_start = pos + 1 if text[pos] == "!" else pos
    label_end = pairs.get(label_start)
    if label_end is None:
        return None
    after = label_end + 1
    if after < end and text[after] in "([":
        close = pairs.get(after)
        return None if close is None else close + 1
    # Footnote definitions are ordinary text
    is_footnote = text.startswith("[^", pos)
    if after < end and text[after] == ":" and label_start == pos and not is_footnote:
        if _starts_definition(text, pos, lower):
            newline = text.find("\n", after, end)
            return end if newline == -1 else newline
    return None


def _match_url(text: str, pos: int, end: int) -> Optional[int]:
    if pos > 0 and text[pos - 1] in SCHEME_CHARS:
        return None
    match = URL_RE.match(text, pos, end)
    if match is None:
        return None
    url_end = match.end()
    while url_end > pos and text[url_end - 1] in URL_TRAILING_PUNCTUATION:
        url_end -= 1
    return url_end


def _inline_regions(text: str, start: int, end: int) -> Iterator[Region]:
    """Inline regions of ``text[start:end]``."""
    # Backtick run lengths with no closer left before ``end``
    unmatched_runs: Set[int] = set()
    pairs = _bracket_pairs(text, start, end)
    pos = start

    while pos < end:
        char = text[pos]

        if char == "\\" and pos + 1 < end and text[pos + 1] in ESCAPABLE:
            yield Region(pos, pos + 2, RegionKind.ESCAPE)
            pos += 2
            continue

        if char == "`":
            run_end = pos
            while run_end < end and text[run_end] == "`":
                run_end += 1
            run_len = run_end - pos
            close = None
            if run_len not in unmatched_runs:
                close = _find_backtick_run(text, run_end, end, run_len)
                if close is None:
                    unmatched_runs.add(run_len)
            if close is not None:
                yield Region(pos, close, RegionKind.CODE_SPAN)
                pos = close
            else:
                pos = run_end
            continue

        if char == "<":
            if text.startswith("<!--", pos):
                close = text.find("-->", pos + 4, end)
                if close != -1:
                    yield Region(pos, close + 3, RegionKind.HTML_COMMENT)
                    pos = close + 3
                    continue
            match = AUTOLINK_RE.match(text, pos, end)
            if match:
                yield Region(pos, match.end(), RegionKind.AUTOLINK)
                pos = match.end()
                continue
            match = HTML_TAG_RE.match(text, pos, end)
            if match:
                yield Region(pos, match.end(), RegionKind.HTML_TAG)
                pos = match.end()
                continue

        if char == "[" or (char == "!" and text.startswith("[", pos + 1)):
            link_end = _match_link(text, pos, end, start, pairs)
            if link_end is not None:
                yield Region(pos, link_end, RegionKind.LINK)
                pos = link_end
                continue

        if char.isalpha():
            url_end = _match_url(text, pos, end)
            if url_end is not None and url_end > pos:
                yield Region(pos, url_end, RegionKind.URL)
                pos = url_end
                continue

        pos += 1


def scan_regions(text: str, skip_headings: bool = True) -> Iterator[Region]:
    """
    Find the protected regions of a Markdown document.

    Args:
        text: Markdown source.
        skip_headings: Also protect ATX and setext headings.

    Yields:
        Non-overlapping regions in order of their start offset.
    """
    pos = 0
    for block in _block_regions(text, skip_headings):
        yield from _inline_regions(text, pos, block.start)
        yield block
        pos = block.end
    yield from _inline_regions(text, pos, len(text))
