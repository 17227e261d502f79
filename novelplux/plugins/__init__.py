"""
Plugin Layer - Extensible novel source implementations.

This module contains the plugin architecture and individual source implementations
that provide novel search, detail loading and chapter rendering for various websites.
"""

from novelplux.plugins.base import BasePlugin, PluginMetadata
from novelplux.plugins.common import (
    HTMLParser,
    URLHelper,
    TextCleaner,
    first_present,
    create_search_result,
    create_chapter_ref,
)

__all__ = [
    # Base Plugin Architecture
    "BasePlugin",
    "PluginMetadata",
    # Plugin Development Utilities
    "HTMLParser",
    "URLHelper",
    "TextCleaner",
    "first_present",
    "create_search_result",
    "create_chapter_ref",
]
