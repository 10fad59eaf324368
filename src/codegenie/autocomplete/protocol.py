"""
Protocol definitions for editor <-> CodeGenie communication.

Uses JSON-RPC 2.0 over stdio. Positions are 0-based, as in the editor.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Position:
    """A cursor position in a document."""
    line: int
    character: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Position':
        return cls(
            line=int(data.get('line', 0)),
            character=int(data.get('character', 0))
        )

    def to_dict(self) -> Dict[str, int]:
        return {'line': self.line, 'character': self.character}


@dataclass(frozen=True)
class Range:
    """A span between two positions; empty when start == end."""
    start: Position
    end: Position

    @classmethod
    def at(cls, position: Position) -> 'Range':
        """Empty range at a position."""
        return cls(start=position, end=position)

    def to_dict(self) -> Dict[str, Any]:
        return {'start': self.start.to_dict(), 'end': self.end.to_dict()}


@dataclass
class TextDocument:
    """Snapshot of an open document."""
    uri: str
    text: str
    language_id: str = 'plaintext'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TextDocument':
        """Create document from dictionary."""
        return cls(
            uri=data.get('uri', ''),
            text=data.get('text', ''),
            language_id=data.get('languageId', 'plaintext')
        )

    @property
    def lines(self) -> List[str]:
        return self.text.split('\n')

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, line: int) -> str:
        lines = self.lines
        if line < 0 or line >= len(lines):
            return ''
        return lines[line]

    def text_before(self, position: Position) -> str:
        """Text of the cursor's line from column 0 up to the cursor."""
        line = self.line_at(position.line)
        return line[:max(0, position.character)]

    def insert(self, position: Position, new_text: str) -> None:
        """Insert text at a position, clamping it to the document bounds."""
        lines = self.lines
        line_index = min(max(0, position.line), len(lines) - 1)
        prefix = '\n'.join(lines[:line_index])
        if line_index > 0:
            prefix += '\n'
        current = lines[line_index]
        column = min(max(0, position.character), len(current))
        suffix = '\n'.join(lines[line_index + 1:])
        if line_index < len(lines) - 1:
            suffix = '\n' + suffix
        self.text = prefix + current[:column] + new_text + current[column:] + suffix


@dataclass(frozen=True)
class TextEdit:
    """An insertion or replacement to apply to a document."""
    range: Range
    new_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {'range': self.range.to_dict(), 'newText': self.new_text}


@dataclass(frozen=True)
class InlineCompletionItem:
    """Ghost-text suggestion offered at the cursor."""
    insert_text: str
    range: Range

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {'insertText': self.insert_text, 'range': self.range.to_dict()}


@dataclass(frozen=True)
class EditorMessage:
    """User-visible notice (info, warning or error)."""
    type: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {'type': self.type, 'message': self.message}


@dataclass
class CommandResult:
    """What a command produced for the editor to apply and show."""
    inserted: Optional[str] = None
    edits: List[TextEdit] = field(default_factory=list)
    messages: List[EditorMessage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'inserted': self.inserted,
            'edits': [edit.to_dict() for edit in self.edits],
            'messages': [message.to_dict() for message in self.messages],
        }


class JSONRPCMessage:
    """JSON-RPC 2.0 message format."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    INVALID_PARAMS = -32602
    METHOD_NOT_FOUND = -32601
    INTERNAL_ERROR = -32603

    @staticmethod
    def notification(method: str, params: Dict[str, Any]) -> str:
        """Create a JSON-RPC notification (no id, no response expected)."""
        return json.dumps({
            'jsonrpc': '2.0',
            'method': method,
            'params': params
        })

    @staticmethod
    def response(result: Any, id: Optional[int]) -> str:
        """Create a JSON-RPC response."""
        return json.dumps({
            'jsonrpc': '2.0',
            'result': result,
            'id': id
        })

    @staticmethod
    def error(code: int, message: str, id: Optional[int]) -> str:
        """Create a JSON-RPC error response."""
        return json.dumps({
            'jsonrpc': '2.0',
            'error': {
                'code': code,
                'message': message
            },
            'id': id
        })

    @staticmethod
    def parse(message: str) -> Dict[str, Any]:
        """Parse a JSON-RPC message."""
        return json.loads(message)
