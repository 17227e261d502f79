"""
Core Exceptions - Custom exception classes for NovelPlux.

This module defines custom exception classes used throughout the
NovelPlux application for better error handling and user feedback.
"""

from typing import Optional, Any


class NovelPluxError(Exception):
    """Base exception class for all NovelPlux-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize NovelPlux error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(NovelPluxError):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class PluginError(NovelPluxError):
    """Raised when plugin-related errors occur."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize plugin error.

        Args:
            message: Error description
            plugin_name: Name of the problematic plugin
            details: Additional error context
        """
        super().__init__(message, details)
        self.plugin_name = plugin_name


class ParseError(PluginError):
    """Raised when a source response cannot be decoded."""

    def __init__(self, message: str, url: Optional[str] = None, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, plugin_name, details)
        self.url = url


class NetworkError(NovelPluxError):
    """Raised when network-related errors occur."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class SearchError(NovelPluxError):
    """Raised when search-related errors occur."""

    def __init__(self, message: str, query: Optional[str] = None, source: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize search error.

        Args:
            message: Error description
            query: Search query that caused the error
            source: Source plugin that failed
            details: Additional error context
        """
        super().__init__(message, details)
        self.query = query
        self.source = source


# Export all exception classes
__all__ = [
    "NovelPluxError",
    "ConfigurationError",
    "PluginError",
    "ParseError",
    "NetworkError",
    "SearchError",
]
