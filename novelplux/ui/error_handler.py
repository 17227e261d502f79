"""
Error Handler - Error displays with context and suggestions.

This module provides consistent error handling and display across
the application with helpful context and actionable suggestions.
"""

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from novelplux.core.exceptions import (
    NovelPluxError,
    ConfigurationError,
    PluginError,
    ParseError,
    NetworkError,
    SearchError,
)
from novelplux.ui.console import get_console
from novelplux.ui.themes import ColorPalette, get_palette


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    @property
    def console(self) -> Console:
        return get_console()

    @property
    def palette(self) -> ColorPalette:
        return get_palette()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, NovelPluxError):
            self._handle_novelplux_error(error, context, show_traceback)
        else:
            self._handle_generic_error(error, context, show_traceback)

    def _handle_novelplux_error(
        self,
        error: NovelPluxError,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """Pick title, extra lines and suggestions for NovelPlux errors."""
        extra_lines: List[str] = []

        if isinstance(error, ConfigurationError):
            title = "⚙️  Configuration Error"
            if error.config_path:
                extra_lines.append(f"[dim]Configuration file:[/dim] [cyan]{error.config_path}[/cyan]")
            suggestions = [
                "Check configuration file syntax and format",
                "Delete the file to regenerate defaults",
            ]
        elif isinstance(error, ParseError):
            title = "🧩 Unexpected Response"
            if error.url:
                extra_lines.append(f"[dim]URL:[/dim] [blue]{error.url}[/blue]")
            suggestions = [
                "The source may have changed its API or be temporarily broken",
                "Try again later or use another source",
            ]
        elif isinstance(error, PluginError):
            title = "🔌 Plugin Error"
            if error.plugin_name:
                extra_lines.append(f"[dim]Plugin:[/dim] [cyan]{error.plugin_name}[/cyan]")
            suggestions = [
                "Check plugin configuration and settings",
                "Verify the source is enabled with [cyan]novelplux sources list[/cyan]",
            ]
        elif isinstance(error, NetworkError):
            title = "🌐 Network Error"
            if error.url:
                extra_lines.append(f"[dim]URL:[/dim] [blue]{error.url}[/blue]")
            if error.status_code:
                extra_lines.append(f"[dim]Status Code:[/dim] {error.status_code}")
            suggestions = [
                "Check your internet connection",
                "Verify the source website is accessible",
                "Try again in a few moments",
            ]
            if error.status_code == 404:
                suggestions.insert(0, "The requested content may no longer be available")
            elif error.status_code and error.status_code >= 500:
                suggestions.insert(0, "The source server is experiencing issues")
        elif isinstance(error, SearchError):
            title = "🔍 Search Error"
            if error.query:
                extra_lines.append(f"[dim]Query:[/dim] {error.query}")
            suggestions = ["Try different search terms"]
        else:
            title = "❌ Error"
            suggestions = []

        self._display_panel(title, error.message, extra_lines, suggestions, context,
                            error.details if show_traceback else None)

    def _handle_generic_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """Handle generic Python exceptions."""
        self._display_panel(
            "💥 Unexpected Error",
            f"{error.__class__.__name__}: {error}",
            [],
            ["Try running the command again with --debug", "Report this issue if it persists"],
            context,
            traceback.format_exc() if show_traceback else None,
        )

    def _display_panel(
        self,
        title: str,
        message: str,
        extra_lines: List[str],
        suggestions: List[str],
        context: Optional[str],
        details: Optional[object],
    ) -> None:
        content_parts = [f"[{self.palette.error}]{message}[/{self.palette.error}]"]
        content_parts.extend(f"\n{line}" for line in extra_lines)

        if context:
            content_parts.append(f"\n[dim]Context:[/dim] {context}")

        if suggestions:
            content_parts.append(f"\n\n[{self.palette.info}]💡 Suggestions:[/{self.palette.info}]")
            content_parts.extend(f"• {suggestion}" for suggestion in suggestions)

        if details:
            content_parts.append(f"\n\n[dim]Details:[/dim]\n{details}")

        self.console.print(Panel(
            "\n".join(content_parts),
            title=title,
            border_style=self.palette.error,
            padding=(1, 2)
        ))

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        self.console.print(Panel(
            f"[{self.palette.warning}]{message}[/{self.palette.warning}]",
            title=f"[{self.palette.warning}]{title}[/{self.palette.warning}]",
            border_style=self.palette.warning,
            padding=(1, 2)
        ))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        self.console.print(Panel(
            f"[{self.palette.info}]{message}[/{self.palette.info}]",
            title=f"[{self.palette.info}]{title}[/{self.palette.info}]",
            border_style=self.palette.info,
            padding=(1, 2)
        ))


# Global error handler instance
_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Handle and display an error using the global error handler."""
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message using the global error handler."""
    _error_handler.display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message using the global error handler."""
    _error_handler.display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
