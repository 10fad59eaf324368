"""
Completion endpoint errors.

The client raises these internally to classify a failed round trip, then
collapses them into a failed CompletionResult. They never reach callers of
CompletionClient.
"""


class CompletionError(Exception):
    """Base exception for completion endpoint errors"""

    pass


class EndpointUnreachableError(CompletionError):
    """Raised when the endpoint cannot be reached (connection, DNS, timeout)"""

    pass


class MalformedResponseError(CompletionError):
    """Raised when the endpoint answers with an unexpected status or body"""

    pass
