"""
Terminal UI utilities using Rich.

Provides:
- Colored console messages
- Generated code display
- A file-backed editor surface for running the completion flows
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from codegenie.autocomplete.orchestrator import EditorContext, EditorSurface
from codegenie.autocomplete.protocol import Position, TextDocument
from codegenie.autocomplete.status import Activity, AssistantStatus

# Global console instance
console = Console()

_LEXERS = {
    '.py': 'python',
    '.js': 'javascript',
    '.ts': 'typescript',
    '.java': 'java',
    '.go': 'go',
    '.rs': 'rust',
    '.c': 'c',
    '.cpp': 'cpp',
    '.rb': 'ruby',
    '.sh': 'bash',
}

_STATUS_STYLES = {
    Activity.READY: "green",
    Activity.DISABLED: "dim",
    Activity.GENERATING: "cyan",
    Activity.NO_RESPONSE: "yellow",
    Activity.ERROR: "red",
}


def lexer_for(path: Optional[str]) -> str:
    if not path:
        return 'python'
    return _LEXERS.get(Path(path).suffix.lower(), 'text')


def print_info(message: str):
    console.print(f"[cyan]i[/cyan] {message}")


def print_warning(message: str):
    console.print(f"[yellow]![/yellow] {message}")


def print_error(message: str):
    console.print(f"[red]x[/red] {message}")


def print_status(status: AssistantStatus):
    style = _STATUS_STYLES[status.activity]
    # Strip the editor icon prefix, e.g. "$(check) "
    label = status.text.split(') ', 1)[-1]
    console.print(f"[{style}]{label}[/{style}]")


def show_code(code: str, lexer: str = "python", title: str = "Generated code"):
    """Display code with syntax highlighting."""
    syntax = Syntax(code, lexer, theme="monokai", line_numbers=False)
    console.print(Panel(syntax, title=title, border_style="green"))


class ConsoleSurface(EditorSurface):
    """
    Editor surface over a file on disk, reporting to the terminal.

    The cursor sits at the end of ``line`` (default: the last line).
    Inserted text is written back to the file only when ``write`` is set.
    """

    def __init__(
        self,
        path: Path,
        line: Optional[int] = None,
        prompt: Optional[str] = None,
        write: bool = False,
    ):
        self.path = Path(path)
        self.prompt = prompt
        self.write = write
        self.document = TextDocument(
            uri=self.path.resolve().as_uri(),
            text=self.path.read_text(encoding='utf-8'),
            language_id=lexer_for(str(self.path)),
        )
        line_index = self.document.line_count - 1 if line is None else line
        line_index = min(max(0, line_index), self.document.line_count - 1)
        self.position = Position(
            line=line_index,
            character=len(self.document.line_at(line_index)),
        )
        self.inserted: Optional[str] = None

    def active_editor(self) -> Optional[EditorContext]:
        return EditorContext(document=self.document, position=self.position)

    def ask_for_prompt(self) -> Optional[str]:
        return self.prompt

    def insert_text(self, context: EditorContext, text: str) -> None:
        self.inserted = text
        show_code(text.strip(), lexer_for(str(self.path)))
        if self.write:
            context.document.insert(context.position, text)
            self.path.write_text(context.document.text, encoding='utf-8')

    def show_information(self, message: str) -> None:
        print_info(message)

    def show_warning(self, message: str) -> None:
        print_warning(message)

    def show_error(self, message: str) -> None:
        print_error(message)
