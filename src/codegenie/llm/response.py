"""
Completion result data model.

Distinguishes a usable completion from an empty one and from a failed round
trip, while letting callers read the text uniformly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResultKind(Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class FailureReason(Enum):
    ENDPOINT_UNREACHABLE = "endpoint_unreachable"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class CompletionResult:
    """
    Outcome of one completion request.

    ``text`` is always a string: the sanitized code for SUCCESS and ``""``
    otherwise.
    """

    kind: ResultKind
    text: str = ""
    raw: str = ""
    reason: Optional[FailureReason] = None
    detail: str = ""

    @property
    def is_empty(self) -> bool:
        """True for EMPTY and FAILURE, which callers handle the same way"""
        return self.kind is not ResultKind.SUCCESS

    @classmethod
    def success(cls, text: str, raw: str = "") -> "CompletionResult":
        return cls(kind=ResultKind.SUCCESS, text=text, raw=raw)

    @classmethod
    def empty(cls, raw: str = "") -> "CompletionResult":
        return cls(kind=ResultKind.EMPTY, raw=raw)

    @classmethod
    def failure(cls, reason: FailureReason, detail: str = "") -> "CompletionResult":
        return cls(kind=ResultKind.FAILURE, reason=reason, detail=detail)
