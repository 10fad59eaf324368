"""
Finds the most recent comment in a document to use as an implicit prompt.
"""

import re
from typing import Iterable, Optional, Sequence, Tuple


COMMENT_MARKERS: Tuple[str, ...] = ("//", "#")

_LEADING_MARKER_RE = re.compile(r"^[/#]+")


def find_last_comment(lines: Iterable[str]) -> Optional[str]:
    """
    Scan lines bottom-up and return the text of the last comment line.

    Only ``//`` and ``#`` line comments are recognized, whatever the
    document's language.

    Args:
        lines: Document lines in order, or the whole document as one string

    Returns:
        The comment text without its markers and surrounding whitespace,
        or None if no line is a comment
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    elif not isinstance(lines, Sequence):
        lines = list(lines)

    for line in reversed(lines):
        stripped = line.strip()
        if stripped.startswith(COMMENT_MARKERS):
            return _LEADING_MARKER_RE.sub("", stripped).strip()

    return None
