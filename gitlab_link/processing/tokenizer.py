"""
Scanner for GitLab shorthand references.

Recognized forms::

    #42                 issue in the default project
    !42                 merge request in the default project
    project#42          issue in another project of the default namespace
    group/sub/project!42
    group/project       project
    group/project>      project, GitLab's canonical form

Path segments are runs of ``[A-Za-z0-9_.-]`` separated by ``/``; the last
segment names the project and the ones before it the namespace.
"""

import string
from typing import Iterator, List, Optional, Tuple

from gitlab_link.processing.types import MARKERS, MatchSpan, ReferenceKind, ReferenceToken

PATH_CHARS = frozenset(string.ascii_letters + string.digits + "_.-")
SEGMENT_START_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)

# A reference may not start right after one of these
NON_BOUNDARY_CHARS = PATH_CHARS | frozenset("/#!&@")

PROJECT_MARKER = ">"
MAX_NUMBER = 2**63 - 1
MAX_DIGITS = len(str(MAX_NUMBER))


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _at_boundary(text: str, pos: int) -> bool:
    if pos == 0:
        return True
    prev = text[pos - 1]
    if prev == "\\":
        # Escaped unless the backslash is itself escaped
        run = 0
        while run < pos and text[pos - 1 - run] == "\\":
            run += 1
        return run % 2 == 0
    return prev not in NON_BOUNDARY_CHARS and not prev.isalnum()


def _read_path(text: str, pos: int) -> Optional[Tuple[List[str], int]]:
    """Read ``segment(/segment)*`` starting at ``pos``.

    Returns the segments and the offset just past the path, or None when a
    segment is empty or starts with a character GitLab does not allow there.
    """
    segments: List[str] = []
    length = len(text)
    while True:
        end = pos
        while end < length and text[end] in PATH_CHARS:
            end += 1
        segment = text[pos:end]
        if not segment or segment[0] not in SEGMENT_START_CHARS:
            return None
        segments.append(segment)
        if end < length and text[end] == "/":
            pos = end + 1
            continue
        return segments, end


def _read_number(text: str, pos: int) -> Optional[Tuple[int, int]]:
    """Read the digits following a marker; None if absent or out of range."""
    length = len(text)
    end = pos
    while end < length and text[end] in DIGITS:
        end += 1
    digits = text[pos:end]
    if not digits or len(digits) > MAX_DIGITS:
        return None
    if len(digits) > 1 and digits[0] == "0":
        return None
    number = int(digits)
    if number == 0 or number > MAX_NUMBER:
        return None
    if end < length and _is_word_char(text[end]):
        return None
    return number, end


def _match_at(text: str, start: int, require_project_marker: bool) -> Optional[MatchSpan]:
    """Try to read one reference starting exactly at ``start``."""
    length = len(text)
    segments: List[str] = []
    pos = start

    if text[start] not in MARKERS:
        path = _read_path(text, start)
        if path is None:
            return None
        segments, pos = path

    if pos < length and text[pos] in MARKERS:
        kind = MARKERS[text[pos]]
        number = _read_number(text, pos + 1)
        if number is None:
            return None
        value, end = number
        token = ReferenceToken(
            kind=kind,
            namespace=tuple(segments[:-1]),
            project=segments[-1] if segments else None,
            number=value,
        )
        return MatchSpan(token=token, start=start, end=end, text=text[start:end])

    # Marker-less project reference: needs an explicit namespace
    if len(segments) < 2:
        return None

    if pos < length and text[pos] == PROJECT_MARKER:
        end = pos + 1
    elif require_project_marker:
        return None
    else:
        # Trailing dots end the sentence, not the project name
        end = pos
        while text[end - 1] == ".":
            end -= 1
        segments[-1] = segments[-1].rstrip(".")

    token = ReferenceToken(
        kind=ReferenceKind.PROJECT,
        namespace=tuple(segments[:-1]),
        project=segments[-1],
    )
    return MatchSpan(token=token, start=start, end=end, text=text[start:end])


def scan(text: str, require_project_marker: bool = False) -> Iterator[MatchSpan]:
    """
    Find the shorthand references in ``text``.

    Matches are yielded left to right and never overlap. Candidates that fail
    the grammar are skipped; characters inside a failed candidate are not at a
    word boundary, so the same broken candidate is never tried twice.

    Args:
        text: Text to scan.
        require_project_marker: Only accept ``namespace/project>`` as a
            project reference.

    Yields:
        Match spans in order of their start offset.
    """
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if (char in PATH_CHARS or char in MARKERS) and _at_boundary(text, pos):
            span = _match_at(text, pos, require_project_marker)
            if span is not None:
                yield span
                pos = span.end
                continue
        pos += 1
