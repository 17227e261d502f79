"""
Core Layer - Business logic and application services.

This module contains the data models, configuration handling, exceptions
and plugin management that power the NovelPlux application.
"""

from novelplux.core.config_manager import ConfigManager
from novelplux.core.config_schemas import AppSettings, SourcesConfig, SourceConfig
from novelplux.core.config_defaults import (
    create_default_config_files,
    get_default_settings,
    get_default_sources,
)
from novelplux.core.exceptions import (
    NovelPluxError,
    ConfigurationError,
    NetworkError,
    ParseError,
    PluginError,
    SearchError,
)
from novelplux.core.models import ChapterRef, NovelDetail, NovelStatus, SearchResult
from novelplux.core.plugin_manager import PluginManager

__all__ = [
    # Data Models
    "SearchResult",
    "ChapterRef",
    "NovelDetail",
    "NovelStatus",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "SourcesConfig",
    "SourceConfig",
    # Configuration Utilities
    "create_default_config_files",
    "get_default_settings",
    "get_default_sources",
    # Plugin Management
    "PluginManager",
    # Exceptions
    "NovelPluxError",
    "ConfigurationError",
    "NetworkError",
    "ParseError",
    "PluginError",
    "SearchError",
]
