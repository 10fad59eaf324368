"""
HTTP client for the remote completion endpoint.

Sends a prompt, sanitizes the answer down to code and reduces every
failure to an empty result.
"""

from typing import Any, Dict, Optional, Union

import requests

from codegenie.autocomplete.code_extractor import extract_only_code
from codegenie.autocomplete.prompt import Prompt
from codegenie.config import Config
from codegenie.llm.base import (
    CompletionError,
    EndpointUnreachableError,
    MalformedResponseError,
)
from codegenie.llm.response import CompletionResult, FailureReason
from codegenie.utils.logger import logger


class CompletionClient:
    """
    Stateless adapter around ``POST <endpoint>``.

    Request body: ``{"prompt": str, "max_tokens": int}``.
    Expected response body: ``{"response": str}``.
    """

    def __init__(self, config: Optional[Config] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Endpoint settings (default: read from environment)
            session: Optional requests session, mainly for connection reuse
        """
        self.config = config or Config()
        self.session = session

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    def complete(self, prompt: Union[Prompt, str]) -> CompletionResult:
        """
        Request a completion for a prompt.

        Never raises: transport and parse failures come back as a FAILURE
        result, a response without code as EMPTY.

        Args:
            prompt: Prompt (or plain prompt text) to send

        Returns:
            CompletionResult
        """
        text = prompt.text if isinstance(prompt, Prompt) else prompt
        logger.request_sent(self.endpoint, text, self.config.max_tokens)

        try:
            raw = self._post(text)
        except EndpointUnreachableError as e:
            logger.completion_failed(FailureReason.ENDPOINT_UNREACHABLE.value, str(e))
            return CompletionResult.failure(FailureReason.ENDPOINT_UNREACHABLE, str(e))
        except MalformedResponseError as e:
            logger.completion_failed(FailureReason.MALFORMED_RESPONSE.value, str(e))
            return CompletionResult.failure(FailureReason.MALFORMED_RESPONSE, str(e))

        code = extract_only_code(raw)
        logger.response_received(raw, code)

        if not code:
            logger.completion_empty(len(raw))
            return CompletionResult.empty(raw=raw)

        return CompletionResult.success(code, raw=raw)

    def fetch_completion(self, prompt: Union[Prompt, str]) -> str:
        """Return sanitized code for a prompt, or ``""`` when there is none."""
        return self.complete(prompt).text

    def _post(self, prompt: str) -> str:
        """
        Perform the round trip and return the raw ``response`` text.

        Raises:
            EndpointUnreachableError: Connection, DNS or timeout failure
            MalformedResponseError: Non-2xx status or unexpected body
        """
        payload = {"prompt": prompt, "max_tokens": self.config.max_tokens}
        post = self.session.post if self.session is not None else requests.post

        try:
            response = post(self.endpoint, json=payload, timeout=self.config.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise EndpointUnreachableError(f"Cannot reach {self.endpoint}: {e}") from e
        except requests.RequestException as e:
            raise EndpointUnreachableError(f"Request to {self.endpoint} failed: {e}") from e

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise MalformedResponseError(f"Endpoint returned HTTP {response.status_code}") from e

        try:
            data: Any = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response body is not JSON: {e}") from e

        return self._parse_body(data)

    @staticmethod
    def _parse_body(data: Any) -> str:
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        body: Dict[str, Any] = data
        if "response" not in body:
            raise MalformedResponseError("Response body has no 'response' field")

        raw = body["response"]
        if raw is None:
            raise MalformedResponseError("'response' field is null")
        if not isinstance(raw, str):
            raise MalformedResponseError(
                f"'response' field is {type(raw).__name__}, expected string"
            )
        return raw


__all__ = ["CompletionClient", "CompletionError"]
