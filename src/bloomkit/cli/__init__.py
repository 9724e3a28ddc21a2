"""Command-line interface for bloomkit."""

from bloomkit.cli.main import app, main

__all__ = ["app", "main"]
