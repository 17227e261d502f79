"""
CLI Commands - Individual command implementations.

This module contains the command implementations for searching, showing
novels, reading chapters and source management.
"""

from novelplux.cli.commands import novel, read, search, sources

__all__ = ["search", "novel", "read", "sources"]
