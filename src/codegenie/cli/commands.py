"""
CLI commands for CodeGenie.

Main entry point: `codegenie serve` for editors, `codegenie generate "prompt"`
for one-shot use from a terminal.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from codegenie import __version__
from codegenie.autocomplete.orchestrator import CompletionOrchestrator
from codegenie.autocomplete.prompt import EmptyPromptError, Prompt, PromptSource
from codegenie.autocomplete.service import AutocompleteService, configure_logging
from codegenie.autocomplete.status import StatusController
from codegenie.cli import ui
from codegenie.config import Config
from codegenie.llm.client import CompletionClient
from codegenie.utils.logger import logger


def _build_config(endpoint: Optional[str], max_tokens: Optional[int], timeout: Optional[float]) -> Config:
    config = Config(endpoint=endpoint, max_tokens=max_tokens, timeout=timeout)
    if config.max_tokens <= 0:
        raise click.BadParameter("must be positive", param_hint="--max-tokens")
    return config


@click.group()
@click.version_option(__version__, prog_name="codegenie")
@click.option(
    "--endpoint",
    "-e",
    default=None,
    help="Completion endpoint URL (default: $CODEGENIE_ENDPOINT or http://127.0.0.1:8000/generate)",
)
@click.option(
    "--max-tokens",
    default=None,
    type=int,
    help="Generation budget per request (default: 500)",
)
@click.option(
    "--timeout",
    default=None,
    type=float,
    help="Request timeout in seconds (default: wait for the endpoint)",
)
@click.option(
    "--log-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Write pipeline logs to this directory",
)
@click.pass_context
def main(ctx, endpoint: str, max_tokens: int, timeout: float, log_dir: str):
    """
    CodeGenie - AI code completion from your editor or terminal

    Usage:
        codegenie serve                               # JSON-RPC over stdio for editors
        codegenie generate "write a loop"             # Print generated code
        codegenie from-comment app.py --write         # Complete the last comment in a file
    """
    load_dotenv()

    ctx.ensure_object(dict)
    config = _build_config(endpoint, max_tokens, timeout)
    ctx.obj["config"] = config

    if log_dir:
        logger.configure(level=config.log_level, log_dir=log_dir)


@main.command()
@click.pass_context
def serve(ctx):
    """Run the completion service on stdin/stdout."""
    config: Config = ctx.obj["config"]
    configure_logging(config.log_level)
    AutocompleteService(config=config).run()


@main.command()
@click.argument("prompt")
@click.option("--language", "-l", default="python", help="Syntax highlighting for the output")
@click.pass_context
def generate(ctx, prompt: str, language: str):
    """Send PROMPT to the endpoint and print the code that comes back."""
    config: Config = ctx.obj["config"]

    try:
        prompt_obj = Prompt(prompt, PromptSource.EXPLICIT_INPUT)
    except EmptyPromptError:
        ui.print_error("Prompt is empty.")
        sys.exit(2)

    client = CompletionClient(config)
    with ui.console.status("Generating..."):
        result = client.complete(prompt_obj)

    if result.is_empty:
        ui.print_error("No response received from AI.")
        sys.exit(1)

    ui.show_code(result.text, language)


@main.command(name="from-comment")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--line", "-n", default=None, type=int, help="Cursor line, 1-based (default: last line)")
@click.option("--write", is_flag=True, help="Insert the generated code into FILE")
@click.pass_context
def from_comment(ctx, file: Path, line: Optional[int], write: bool):
    """Use the last comment in FILE as the prompt."""
    config: Config = ctx.obj["config"]

    status = StatusController(enabled=config.enabled)
    try:
        surface = ui.ConsoleSurface(
            file,
            line=line - 1 if line is not None else None,
            write=write,
        )
    except UnicodeDecodeError:
        ui.print_error(f"{file} is not a UTF-8 text file.")
        sys.exit(2)

    orchestrator = CompletionOrchestrator(CompletionClient(config), status, surface)

    inserted = orchestrator.generate_from_comment()
    ui.print_status(status.status)
    sys.exit(0 if inserted else 1)


if __name__ == "__main__":
    main()
