"""Command-line interface."""

from tui_styling.cli.main import main

__all__ = ["main"]
