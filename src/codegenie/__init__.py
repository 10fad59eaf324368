"""
CodeGenie - AI code completion assistant for editors

Turns prompts, trailing comments or the text before the cursor into code
fetched from a remote generation endpoint.
"""

__version__ = "0.1.0"
__author__ = "CodeGenie Team"

from codegenie.autocomplete.orchestrator import CompletionOrchestrator
from codegenie.autocomplete.status import StatusController
from codegenie.config import Config
from codegenie.llm.client import CompletionClient

__all__ = [
    "CompletionClient",
    "CompletionOrchestrator",
    "Config",
    "StatusController",
    "__version__",
]
