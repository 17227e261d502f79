"""
Common utilities for plugin development.

This package contains shared utilities and helper functions
used across multiple plugins.
"""

from .utils import (
    HTMLParser,
    URLHelper,
    TextCleaner,
    first_present,
    create_search_result,
    create_chapter_ref,
)

__all__ = [
    "HTMLParser",
    "URLHelper",
    "TextCleaner",
    "first_present",
    "create_search_result",
    "create_chapter_ref",
]
