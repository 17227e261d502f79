"""
CLI Layer - Command-line interface components.

This module contains the Typer-based CLI application and command implementations
that provide the user-facing interface for NovelPlux functionality.
"""

from novelplux.cli.main import app

__all__ = ["app"]
