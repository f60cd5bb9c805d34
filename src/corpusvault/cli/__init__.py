# src/corpusvault/cli/__init__.py
"""CLI package for corpusvault.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the commands layer.
"""

from corpusvault.cli.app import app, console

__all__ = ["app", "console"]
