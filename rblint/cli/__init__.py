"""Command-line interface for rblint."""

from rblint.cli.main import app, main

__all__ = ["app", "main"]
