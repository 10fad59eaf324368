"""
Strips commentary from raw model responses, keeping only code lines.

This is a line filter, not a parser: it knows nothing about fenced blocks,
multi-line strings or the language of the response. A code line that starts
with ``*`` (e.g. a multiplication continuation) is dropped along with
JSDoc-style comment bodies.
"""

from typing import Tuple


NON_CODE_MARKERS: Tuple[str, ...] = (
    "#",    # Python / shell comments
    "//",   # C-family line comments
    "/*",   # block comment openers
    "*",    # block comment bodies
    "'''",  # docstring delimiters
    '"""',
)


def is_non_code_line(line: str) -> bool:
    """Return True if the line is blank or starts with a commentary marker."""
    stripped = line.strip()
    return not stripped or stripped.startswith(NON_CODE_MARKERS)


def extract_only_code(response: str) -> str:
    """
    Remove explanations and comments from a model response.

    Args:
        response: Raw response text

    Returns:
        Remaining lines joined with newlines and trimmed; empty when the
        response held no code
    """
    code_lines = [line for line in response.split("\n") if not is_non_code_line(line)]
    return "\n".join(code_lines).strip()
