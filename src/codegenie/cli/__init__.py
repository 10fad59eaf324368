"""
CLI module - command-line interface for CodeGenie.
"""

from codegenie.cli.commands import main

__all__ = ["main"]
