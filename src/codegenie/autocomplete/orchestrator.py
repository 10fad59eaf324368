"""
Completion orchestration for the editor triggers.

Ties prompt acquisition, the completion client and the status controller
together for three triggers: an explicit prompt, the last comment in the
document, and inline suggestions at the cursor.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from codegenie.autocomplete.comment_locator import find_last_comment
from codegenie.autocomplete.prompt import EmptyPromptError, Prompt, PromptSource
from codegenie.autocomplete.protocol import (
    InlineCompletionItem,
    Position,
    Range,
    TextDocument,
)
from codegenie.autocomplete.status import StatusController
from codegenie.utils.logger import logger

if TYPE_CHECKING:
    from codegenie.llm.client import CompletionClient


DISABLED_MESSAGE = "Autocomplete is disabled. Enable it from the command palette."
NO_EDITOR_MESSAGE = "Open a file to use CodeGenie."
NO_COMMENT_MESSAGE = "No comment found to use as a prompt."
NO_RESPONSE_MESSAGE = "No response received from AI."
GENERATION_ERROR_MESSAGE = "Error generating code."
INSERTED_MESSAGE = "Code inserted successfully!"
ENABLED_MESSAGE = "CodeGenie Autocomplete Enabled"
DISABLED_NOTICE = "CodeGenie Autocomplete Disabled"


@dataclass
class EditorContext:
    """The active editor: its document and cursor."""
    document: TextDocument
    position: Position


class EditorSurface(ABC):
    """
    What the orchestrator needs from the host editor.

    Implementations bridge to a real editor (over JSON-RPC) or to a
    terminal.
    """

    @abstractmethod
    def active_editor(self) -> Optional[EditorContext]:
        """Return the focused document and cursor, or None if nothing is open."""
        pass

    @abstractmethod
    def ask_for_prompt(self) -> Optional[str]:
        """Ask the user for a prompt; None when cancelled."""
        pass

    @abstractmethod
    def insert_text(self, context: EditorContext, text: str) -> None:
        """Insert text at the context's cursor."""
        pass

    @abstractmethod
    def show_information(self, message: str) -> None:
        pass

    @abstractmethod
    def show_warning(self, message: str) -> None:
        pass

    @abstractmethod
    def show_error(self, message: str) -> None:
        pass


class CompletionOrchestrator:
    """Runs the completion flows and decides where returned code goes."""

    def __init__(
        self,
        client: "CompletionClient",
        status: StatusController,
        surface: EditorSurface,
    ):
        """
        Initialize orchestrator.

        Args:
            client: Completion client for the remote endpoint
            status: Shared assistant state
            surface: Host editor bridge
        """
        self.client = client
        self.status = status
        self.surface = surface

    # === COMMANDS ===

    def enable(self):
        self.status.enable()
        self.surface.show_information(ENABLED_MESSAGE)

    def disable(self):
        self.status.disable()
        self.surface.show_warning(DISABLED_NOTICE)

    def generate_from_prompt(self) -> Optional[str]:
        """
        Ask for a prompt and insert the generated code at the cursor.

        Returns:
            The inserted text, or None if nothing was inserted
        """
        context = self._require_editor('generate-from-prompt')
        if context is None:
            return None

        text = self.surface.ask_for_prompt()
        try:
            prompt = Prompt(text or '', PromptSource.EXPLICIT_INPUT)
        except EmptyPromptError:
            logger.prompt_rejected('generate-from-prompt', 'empty or cancelled input')
            return None

        return self._generate_and_insert(context, prompt)

    def generate_from_comment(self) -> Optional[str]:
        """
        Use the last comment in the document as the prompt.

        Returns:
            The inserted text, or None if nothing was inserted
        """
        context = self._require_editor('generate-from-comment')
        if context is None:
            return None

        comment = find_last_comment(context.document.lines)
        try:
            prompt = Prompt(comment or '', PromptSource.DETECTED_COMMENT)
        except EmptyPromptError:
            logger.prompt_rejected('generate-from-comment', 'no usable comment')
            self.surface.show_error(NO_COMMENT_MESSAGE)
            return None

        return self._generate_and_insert(context, prompt)

    # === INLINE SUGGESTIONS ===

    def provide_inline_completions(
        self,
        document: TextDocument,
        position: Position
    ) -> List[InlineCompletionItem]:
        """
        Offer at most one ghost-text suggestion at the cursor.

        Empty context short-circuits without a request. Errors are never
        raised to the editor.
        """
        if not self.status.enabled:
            return []

        try:
            text_before_cursor = document.text_before(position)
            if not text_before_cursor.strip():
                return []

            prompt = Prompt(text_before_cursor, PromptSource.PRE_CURSOR_TEXT)
            self.status.begin_request()

            code = self.client.fetch_completion(prompt)
            if not code.strip():
                self.status.finish_request(result_empty=True)
                return []

            self.status.finish_request(result_empty=False)
            return [InlineCompletionItem(insert_text=code, range=Range.at(position))]

        except Exception as e:
            logger.error('ORCHESTRATOR', "Inline completion failed", e)
            self.status.fail_request()
            return []

    # === SHARED PATH ===

    def _require_editor(self, flow: str) -> Optional[EditorContext]:
        if not self.status.enabled:
            logger.prompt_rejected(flow, 'assistant disabled')
            self.surface.show_error(DISABLED_MESSAGE)
            return None

        context = self.surface.active_editor()
        if context is None:
            logger.prompt_rejected(flow, 'no active editor')
            self.surface.show_error(NO_EDITOR_MESSAGE)
            return None

        return context

    def _generate_and_insert(self, context: EditorContext, prompt: Prompt) -> Optional[str]:
        self.surface.show_information(f'Generating code for: "{prompt.text}"')

        try:
            self.status.begin_request()

            code = self.client.fetch_completion(prompt)
            if not code.strip():
                self.surface.show_error(NO_RESPONSE_MESSAGE)
                self.status.finish_request(result_empty=True)
                return None

            inserted = f"\n{code.strip()}\n"
            self.surface.insert_text(context, inserted)

            self.surface.show_information(INSERTED_MESSAGE)
            self.status.finish_request(result_empty=False)
            return inserted

        except Exception as e:
            logger.error('ORCHESTRATOR', "Code generation failed", e)
            self.surface.show_error(GENERATION_ERROR_MESSAGE)
            self.status.fail_request()
            return None
