"""
Prompt value type shared by every completion trigger.
"""

from dataclasses import dataclass
from enum import Enum


class PromptSource(Enum):
    """Where a prompt came from."""

    EXPLICIT_INPUT = "explicit-input"
    DETECTED_COMMENT = "detected-comment"
    PRE_CURSOR_TEXT = "pre-cursor-text"


class EmptyPromptError(ValueError):
    """Raised when a prompt has no content after trimming."""

    pass


@dataclass(frozen=True)
class Prompt:
    """Text instructing the remote model what to generate."""

    text: str
    source: PromptSource

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise EmptyPromptError(f"Empty prompt from {self.source.value}")

    def __str__(self) -> str:
        return self.text
