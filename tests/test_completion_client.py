"""
Tests for the completion endpoint client.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codegenie.autocomplete.prompt import Prompt, PromptSource
from codegenie.config import Config
from codegenie.llm.client import CompletionClient
from codegenie.llm.response import FailureReason, ResultKind


ENDPOINT = "http://127.0.0.1:8000/generate"


def make_response(body=None, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def client():
    return CompletionClient(Config(endpoint=ENDPOINT, max_tokens=500))


class TestRequest:
    def test_posts_prompt_and_budget(self, client):
        with patch("codegenie.llm.client.requests.post") as post:
            post.return_value = make_response({"response": "x = 1"})
            client.fetch_completion(Prompt("write x", PromptSource.EXPLICIT_INPUT))

        post.assert_called_once_with(
            ENDPOINT,
            json={"prompt": "write x", "max_tokens": 500},
            timeout=None,
        )

    def test_prompt_text_sent_untrimmed(self, client):
        with patch("codegenie.llm.client.requests.post") as post:
            post.return_value = make_response({"response": "pass"})
            client.fetch_completion("    for i in ")

        assert post.call_args.kwargs["json"]["prompt"] == "    for i in "

    def test_uses_session_when_given(self):
        session = MagicMock()
        session.post.return_value = make_response({"response": "y = 2"})
        client = CompletionClient(Config(endpoint=ENDPOINT), session=session)

        assert client.fetch_completion("y") == "y = 2"
        session.post.assert_called_once()


class TestResults:
    def test_success_is_sanitized(self, client):
        with patch("codegenie.llm.client.requests.post") as post:
            post.return_value = make_response({"response": "// loop\nfor i in range(10): pass"})
            result = client.complete("write a loop")

        assert result.kind is ResultKind.SUCCESS
        assert result.text == "for i in range(10): pass"
        assert result.raw == "// loop\nfor i in range(10): pass"
        assert not result.is_empty

    def test_commentary_only_is_empty(self, client):
        with patch("codegenie.llm.client.requests.post") as post:
            post.return_value = make_response({"response": "# Sure! Here is nothing."})
            result = client.complete("anything")

        assert result.kind is ResultKind.EMPTY
        assert result.text == ""
        assert result.is_empty

    def test_empty_response_field_is_empty(self, client):
        with patch("codegenie.llm.client.requests.post") as post:
            post.return_value = make_response({"response": ""})
            assert client.complete("p").kind is ResultKind.EMPTY


class TestFailures:
    """Every failure resolves to an empty string and never raises."""

    @pytest.mark.parametrize("error", [
        requests.ConnectionError("refused"),
        requests.Timeout("timed out"),
        requests.exceptions.InvalidURL("bad url"),
    ])
    def test_transport_errors(self, client, error):
        with patch("codegenie.llm.client.requests.post", side_effect=error):
            result = client.complete("p")
            text = client.fetch_completion("p")

        assert text == ""
        assert result.kind is ResultKind.FAILURE
        assert result.reason is FailureReason.ENDPOINT_UNREACHABLE

    @pytest.mark.parametrize("response", [
        make_response(status_code=500),
        make_response(json_error=ValueError("Expecting value")),
        make_response(["not", "an", "object"]),
        make_response({"text": "x = 1"}),
        make_response({"response": None}),
        make_response({"response": 42}),
    ])
    def test_malformed_responses(self, client, response):
        with patch("codegenie.llm.client.requests.post", return_value=response):
            result = client.complete("p")

        assert result.kind is ResultKind.FAILURE
        assert result.reason is FailureReason.MALFORMED_RESPONSE
        assert result.text == ""
        assert result.detail

    def test_unreachable_real_port(self):
        # Nothing listens on port 9 (discard) on a test machine
        client = CompletionClient(Config(endpoint="http://127.0.0.1:9/generate", timeout=2))
        assert client.fetch_completion("p") == ""
