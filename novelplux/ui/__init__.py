"""
UI Layer - Visual design system and Rich components.

This module contains the theme management, console setup and Rich UI
components shared by all CLI commands.
"""

from novelplux.ui.components import UIComponents, format_rating
from novelplux.ui.themes import ThemeManager, ThemeName, get_theme, set_theme
from novelplux.ui.error_handler import ErrorHandler, handle_error, display_warning, display_info
from novelplux.ui.progress import status_spinner
from novelplux.ui.console import get_console, setup_console

__all__ = [
    # Core UI Components
    "UIComponents",
    "format_rating",
    # Theme System
    "ThemeManager",
    "ThemeName",
    "get_theme",
    "set_theme",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
    # Progress Management
    "status_spinner",
    # Console Management
    "get_console",
    "setup_console",
]
