"""
Theme System - Color palettes and styling configuration.

This module provides theme management with multiple color schemes
and consistent styling across all UI components.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from rich.theme import Theme


class ThemeName(str, Enum):
    """Available theme names."""
    DEFAULT = "default"
    DARK = "dark"
    LIGHT = "light"


@dataclass
class ColorPalette:
    """Color palette definition for a theme."""

    primary: str
    secondary: str
    accent: str

    success: str
    warning: str
    error: str
    info: str

    text_secondary: str
    text_muted: str

    border_primary: str
    border_secondary: str


_PALETTES: Dict[ThemeName, ColorPalette] = {
    ThemeName.DEFAULT: ColorPalette(
        primary="blue",
        secondary="cyan",
        accent="magenta",
        success="green",
        warning="yellow",
        error="red",
        info="blue",
        text_secondary="bright_white",
        text_muted="dim white",
        border_primary="blue",
        border_secondary="dim blue"
    ),
    ThemeName.DARK: ColorPalette(
        primary="bright_blue",
        secondary="bright_cyan",
        accent="bright_magenta",
        success="bright_green",
        warning="bright_yellow",
        error="bright_red",
        info="bright_blue",
        text_secondary="white",
        text_muted="bright_black",
        border_primary="bright_blue",
        border_secondary="grey37"
    ),
    ThemeName.LIGHT: ColorPalette(
        primary="blue",
        secondary="dark_cyan",
        accent="dark_magenta",
        success="dark_green",
        warning="dark_orange",
        error="dark_red",
        info="blue",
        text_secondary="grey19",
        text_muted="grey37",
        border_primary="blue",
        border_secondary="grey70"
    ),
}


class ThemeManager:
    """Manages theme selection and color palette configuration."""

    def __init__(self):
        self._current_theme = ThemeName.DEFAULT

    def get_palette(self, theme_name: Optional[ThemeName] = None) -> ColorPalette:
        """Get color palette for a theme (defaults to current theme)."""
        return _PALETTES.get(theme_name or self._current_theme, _PALETTES[ThemeName.DEFAULT])

    def set_theme(self, theme_name: ThemeName) -> None:
        if theme_name not in _PALETTES:
            raise ValueError(f"Unknown theme: {theme_name}")
        self._current_theme = theme_name

    def create_rich_theme(self, theme_name: Optional[ThemeName] = None) -> Theme:
        """
        Create a Rich Theme object from a color palette.

        Args:
            theme_name: Theme to create Rich theme for

        Returns:
            Rich Theme object
        """
        palette = self.get_palette(theme_name)

        return Theme({
            "panel.border": palette.border_primary,
            "table.header": f"bold {palette.secondary}",
            "success": palette.success,
            "warning": palette.warning,
            "error": palette.error,
            "info": palette.info,
            "primary": palette.primary,
            "secondary": palette.secondary,
            "accent": palette.accent,
            "muted": palette.text_muted,
            "title": f"bold {palette.primary}",
            "link": f"underline {palette.primary}",
        })


# Global theme manager instance
_theme_manager = ThemeManager()


def get_theme(theme_name: Optional[ThemeName] = None) -> Theme:
    """Get a Rich Theme object (defaults to current theme)."""
    return _theme_manager.create_rich_theme(theme_name)


def get_palette(theme_name: Optional[ThemeName] = None) -> ColorPalette:
    """Get color palette for a theme (defaults to current theme)."""
    return _theme_manager.get_palette(theme_name)


def set_theme(theme_name: ThemeName) -> None:
    """Set the global theme."""
    _theme_manager.set_theme(theme_name)


# Export theme system components
__all__ = [
    "ThemeName",
    "ColorPalette",
    "ThemeManager",
    "get_theme",
    "get_palette",
    "set_theme",
]
