"""
CodeGenie Autocomplete Module

Prompt acquisition, response sanitization, status tracking and the
editor-facing completion flows.
"""

from .code_extractor import extract_only_code
from .comment_locator import find_last_comment
from .prompt import EmptyPromptError, Prompt, PromptSource
from .status import Activity, AssistantStatus, StatusController
from .orchestrator import CompletionOrchestrator, EditorContext, EditorSurface
from .service import AutocompleteService

__all__ = [
    'Activity',
    'AssistantStatus',
    'AutocompleteService',
    'CompletionOrchestrator',
    'EditorContext',
    'EditorSurface',
    'EmptyPromptError',
    'Prompt',
    'PromptSource',
    'StatusController',
    'extract_only_code',
    'find_last_comment',
]
