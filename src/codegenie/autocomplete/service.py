"""
Completion service that communicates with the editor via stdio.

This service runs as a background process; the editor shell sends one
JSON-RPC request per line and receives one response per line. Status
changes are pushed as ``codegenie/status`` notifications.
"""

import json
import logging
import os
import sys
import tempfile
from typing import Any, Callable, Dict, Optional

from codegenie.autocomplete.orchestrator import (
    CompletionOrchestrator,
    EditorContext,
    EditorSurface,
)
from codegenie.autocomplete.protocol import (
    CommandResult,
    EditorMessage,
    JSONRPCMessage,
    Position,
    Range,
    TextDocument,
    TextEdit,
)
from codegenie.autocomplete.status import AssistantStatus, StatusController
from codegenie.config import Config
from codegenie.llm.client import CompletionClient


LOG_FILE = os.path.join(tempfile.gettempdir(), 'codegenie-autocomplete.log')

STATUS_NOTIFICATION = 'codegenie/status'

logger = logging.getLogger(__name__)


class InvalidParamsError(ValueError):
    """Raised when request params are missing or malformed."""

    pass


class RpcEditorSurface(EditorSurface):
    """
    Editor surface backed by the params of a single JSON-RPC request.

    The editor shell has already collected the document, cursor and prompt
    input; edits and messages are collected and returned in the response.
    """

    def __init__(
        self,
        document: Optional[TextDocument] = None,
        position: Optional[Position] = None,
        prompt: Optional[str] = None,
    ):
        self.document = document
        self.position = position
        self.prompt = prompt
        self.result = CommandResult()

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> 'RpcEditorSurface':
        document_data = params.get('document')
        if document_data is None:
            return cls(prompt=params.get('prompt'))

        if not isinstance(document_data, dict):
            raise InvalidParamsError("'document' must be an object")
        for key in ('uri', 'text', 'languageId'):
            if key in document_data and not isinstance(document_data[key], str):
                raise InvalidParamsError(f"'document.{key}' must be a string")

        position_data = params.get('position', {})
        if not isinstance(position_data, dict):
            raise InvalidParamsError("'position' must be an object")

        prompt = params.get('prompt')
        if prompt is not None and not isinstance(prompt, str):
            raise InvalidParamsError("'prompt' must be a string")

        try:
            position = Position.from_dict(position_data)
        except (TypeError, ValueError) as e:
            raise InvalidParamsError(f"Invalid position: {e}") from e

        return cls(
            document=TextDocument.from_dict(document_data),
            position=position,
            prompt=prompt,
        )

    def active_editor(self) -> Optional[EditorContext]:
        if self.document is None:
            return None
        return EditorContext(document=self.document, position=self.position or Position(0, 0))

    def ask_for_prompt(self) -> Optional[str]:
        return self.prompt

    def insert_text(self, context: EditorContext, text: str) -> None:
        self.result.edits.append(TextEdit(range=Range.at(context.position), new_text=text))
        self.result.inserted = text

    def show_information(self, message: str) -> None:
        self.result.messages.append(EditorMessage('info', message))

    def show_warning(self, message: str) -> None:
        self.result.messages.append(EditorMessage('warning', message))

    def show_error(self, message: str) -> None:
        self.result.messages.append(EditorMessage('error', message))


class AutocompleteService:
    """
    Completion service that handles requests via JSON-RPC over stdio.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        client: Optional[CompletionClient] = None,
        status: Optional[StatusController] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize completion service.

        Args:
            config: Settings (default: read from environment)
            client: Completion client (default: built from config)
            status: Shared assistant state (default: new controller)
            notify: Writer for outgoing notifications (default: stdout)
        """
        self.config = config or Config()
        self.client = client or CompletionClient(self.config)
        self.status = status or StatusController(enabled=self.config.enabled)
        self._notify = notify or self._write_line
        self.status.subscribe(self._publish_status)

        self._handlers: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
            'codegenie.getCode': self._handle_get_code,
            'codegenie.generateFromComment': self._handle_generate_from_comment,
            'codegenie.enableAutocomplete': self._handle_enable,
            'codegenie.disableAutocomplete': self._handle_disable,
            'textDocument/inlineCompletion': self._handle_inline_completion,
            'codegenie.getStatus': self._handle_get_status,
            'ping': lambda params: {'status': 'ok'},
        }

        logger.info(f"Completion service initialized for endpoint: {self.config.endpoint}")

    def handle_request(self, request_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle a JSON-RPC request.

        Args:
            request_data: Parsed JSON-RPC request

        Returns:
            Response dictionary
        """
        method = request_data.get('method')
        params = request_data.get('params') or {}
        request_id = request_data.get('id')

        logger.debug(f"Handling request: method={method}, id={request_id}")

        handler = self._handlers.get(method)
        if handler is None:
            return json.loads(JSONRPCMessage.error(
                code=JSONRPCMessage.METHOD_NOT_FOUND,
                message=f"Method not found: {method}",
                id=request_id
            ))

        try:
            if not isinstance(params, dict):
                raise InvalidParamsError("params must be an object")
            result = handler(params)
            return json.loads(JSONRPCMessage.response(result, request_id))

        except InvalidParamsError as e:
            logger.warning(f"Invalid params for {method}: {e}")
            return json.loads(JSONRPCMessage.error(
                code=JSONRPCMessage.INVALID_PARAMS,
                message=str(e),
                id=request_id
            ))
        except Exception as e:
            logger.error(f"Error handling request: {e}", exc_info=True)
            return json.loads(JSONRPCMessage.error(
                code=JSONRPCMessage.INTERNAL_ERROR,
                message=str(e),
                id=request_id
            ))

    def _orchestrator(self, surface: EditorSurface) -> CompletionOrchestrator:
        return CompletionOrchestrator(self.client, self.status, surface)

    def _handle_get_code(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Explicit prompt: insert code generated for ``params['prompt']``."""
        surface = RpcEditorSurface.from_params(params)
        self._orchestrator(surface).generate_from_prompt()
        return surface.result.to_dict()

    def _handle_generate_from_comment(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Use the document's last comment as the prompt."""
        surface = RpcEditorSurface.from_params(params)
        self._orchestrator(surface).generate_from_comment()
        return surface.result.to_dict()

    def _handle_enable(self, params: Dict[str, Any]) -> Dict[str, Any]:
        surface = RpcEditorSurface()
        self._orchestrator(surface).enable()
        return {
            'status': self.status.status.to_dict(),
            'messages': [m.to_dict() for m in surface.result.messages],
        }

    def _handle_disable(self, params: Dict[str, Any]) -> Dict[str, Any]:
        surface = RpcEditorSurface()
        self._orchestrator(surface).disable()
        return {
            'status': self.status.status.to_dict(),
            'messages': [m.to_dict() for m in surface.result.messages],
        }

    def _handle_inline_completion(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Return zero or one inline suggestion for the cursor."""
        surface = RpcEditorSurface.from_params(params)
        context = surface.active_editor()
        if context is None:
            return {'items': []}

        items = self._orchestrator(surface).provide_inline_completions(
            context.document, context.position
        )
        logger.debug(f"Inline completion items: {len(items)}")
        return {'items': [item.to_dict() for item in items]}

    def _handle_get_status(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self.status.status.to_dict()

    def _publish_status(self, status: AssistantStatus):
        self._notify(JSONRPCMessage.notification(STATUS_NOTIFICATION, status.to_dict()))

    @staticmethod
    def _write_line(line: str):
        print(line, flush=True)

    def run(self, stdin=None):
        """
        Run the service loop, reading from stdin and writing to stdout.
        """
        stdin = stdin or sys.stdin
        logger.info("Starting completion service loop")

        try:
            while True:
                line = stdin.readline()

                if not line:
                    logger.info("EOF received, shutting down")
                    break

                line = line.strip()
                if not line:
                    continue

                logger.debug(f"Received: {line[:100]}...")

                try:
                    request_data = JSONRPCMessage.parse(line)
                except json.JSONDecodeError as e:
                    logger.error(f"Invalid JSON: {e}")
                    self._notify(JSONRPCMessage.error(
                        code=JSONRPCMessage.PARSE_ERROR,
                        message="Parse error",
                        id=None
                    ))
                    continue

                if not isinstance(request_data, dict):
                    self._notify(JSONRPCMessage.error(
                        code=JSONRPCMessage.INVALID_REQUEST,
                        message="Request must be a JSON object",
                        id=None
                    ))
                    continue

                response = self.handle_request(request_data)

                # Notifications (no id) get no response
                if 'id' not in request_data:
                    continue

                response_str = json.dumps(response)
                self._notify(response_str)
                logger.debug(f"Sent: {response_str[:100]}...")

        except KeyboardInterrupt:
            logger.info("Service interrupted by user")
        finally:
            logger.info("Completion service shutting down")


def configure_logging(level: str = "DEBUG", log_file: str = LOG_FILE):
    """Log to a file: stdout carries the protocol."""
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper(), logging.DEBUG),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def main():
    """Main entry point for the completion service."""
    import argparse
    from dotenv import load_dotenv

    load_dotenv()
    config = Config()

    parser = argparse.ArgumentParser(description='CodeGenie Completion Service')
    parser.add_argument(
        '--endpoint',
        default=config.endpoint,
        help=f'Completion endpoint URL (default: {config.endpoint})'
    )
    parser.add_argument(
        '--max-tokens',
        type=int,
        default=config.max_tokens,
        help=f'Generation budget per request (default: {config.max_tokens})'
    )
    args = parser.parse_args()

    config.endpoint = args.endpoint
    config.max_tokens = args.max_tokens

    configure_logging(config.log_level)
    logger.info(f"Starting CodeGenie completion service against {config.endpoint}")

    service = AutocompleteService(config=config)
    service.run()


if __name__ == '__main__':
    main()
