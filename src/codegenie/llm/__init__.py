"""
Completion endpoint client and result types.
"""

from codegenie.llm.base import (
    CompletionError,
    EndpointUnreachableError,
    MalformedResponseError,
)
from codegenie.llm.client import CompletionClient
from codegenie.llm.response import CompletionResult, FailureReason, ResultKind

__all__ = [
    "CompletionClient",
    "CompletionError",
    "CompletionResult",
    "EndpointUnreachableError",
    "FailureReason",
    "MalformedResponseError",
    "ResultKind",
]
