"""
UI Components - Standardized Rich components for consistent interface.

This module provides reusable UI components with consistent styling
and behavior across all CLI commands.
"""

from typing import Any, Dict, List, Optional

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from novelplux.core.models import ChapterRef, NovelDetail, NovelStatus, SearchResult
from novelplux.ui.themes import ColorPalette, get_palette


TABLE_BOXES = {
    "rounded": box.ROUNDED,
    "simple": box.SIMPLE,
    "grid": box.SQUARE,
    "minimal": box.MINIMAL,
}


def format_rating(rating: int) -> str:
    """Format a 0-1000 rating as a five star score."""
    if not rating:
        return "-"
    return f"{rating / 200:.1f}★"


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def __init__(self, table_style: str = "rounded", palette: Optional[ColorPalette] = None):
        self.palette = palette or get_palette()
        self.table_box = TABLE_BOXES.get(table_style, box.ROUNDED)

    def create_panel(
        self,
        content: Any,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
        border_style: Optional[str] = None,
        padding: tuple = (1, 2),
        expand: bool = True
    ) -> Panel:
        """
        Create a styled panel with consistent theming.

        Args:
            content: Panel content
            title: Panel title
            subtitle: Panel subtitle
            border_style: Border style override
            padding: Panel padding (vertical, horizontal)
            expand: Whether panel should expand to full width

        Returns:
            Styled Panel object
        """
        return Panel(
            content,
            title=title,
            subtitle=subtitle,
            border_style=border_style or self.palette.border_primary,
            padding=padding,
            expand=expand
        )

    def create_success_panel(self, content: Any, title: str = "✅ Success") -> Panel:
        """Create a success panel with success styling."""
        return self.create_panel(
            content,
            title=f"[{self.palette.success}]{title}[/{self.palette.success}]",
            border_style=self.palette.success
        )

    def create_search_results_table(self, results: List[SearchResult]) -> Table:
        """
        Create a table displaying novel search results.

        Args:
            results: List of novel search results

        Returns:
            Formatted table with novel results
        """
        table = Table(
            title="🔍 Search Results",
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_primary,
            box=self.table_box,
            expand=True
        )

        table.add_column("#", style="dim", width=4)
        table.add_column("Title", style=self.palette.primary, min_width=30)
        table.add_column("Rating", style=self.palette.accent, width=7)
        table.add_column("Latest", style=self.palette.text_secondary, width=16)
        table.add_column("Source", style=self.palette.text_muted, width=12)
        table.add_column("URL", style=self.palette.text_muted, overflow="fold")

        for i, result in enumerate(results, 1):
            table.add_row(
                str(i),
                result.title,
                format_rating(result.rating),
                result.latest_chapter or "-",
                result.source,
                result.url
            )

        return table

    def create_novel_panel(self, novel: NovelDetail) -> Panel:
        """
        Create a panel describing a novel.

        Args:
            novel: Novel details

        Returns:
            Panel with metadata and synopsis
        """
        status_colors: Dict[NovelStatus, str] = {
            NovelStatus.ONGOING: self.palette.info,
            NovelStatus.COMPLETED: self.palette.success,
            NovelStatus.PAUSED: self.palette.warning,
            NovelStatus.DROPPED: self.palette.error,
        }
        status_color = status_colors.get(novel.status, self.palette.text_muted)

        content = Text()
        content.append("Author: ", style="dim")
        content.append(f"{novel.author or 'Unknown'}\n")
        content.append("Status: ", style="dim")
        content.append(f"{novel.status.value.title()}\n", style=status_color)
        content.append("Rating: ", style="dim")
        content.append(f"{format_rating(novel.rating)}\n", style=self.palette.accent)
        content.append("Chapters: ", style="dim")
        content.append(f"{novel.chapter_count}\n")

        if novel.tags:
            content.append("Tags: ", style="dim")
            content.append(", ".join(novel.tags) + "\n", style=self.palette.secondary)

        content.append("URL: ", style="dim")
        content.append(novel.url, style=f"underline {self.palette.primary}")

        if novel.synopsis:
            content.append("\n\n")
            content.append(novel.synopsis)

        return self.create_panel(
            content,
            title=f"📖 [bold {self.palette.primary}]{novel.title}[/bold {self.palette.primary}]",
            subtitle=novel.source or None,
        )

    def create_chapters_table(self, chapters: List[ChapterRef]) -> Table:
        """Create a table listing a novel's chapters."""
        table = Table(
            title="📑 Chapters",
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_primary,
            box=self.table_box,
            expand=True
        )

        table.add_column("#", style="dim", width=6)
        table.add_column("Name", style=self.palette.primary, min_width=25)
        table.add_column("Date", style=self.palette.text_secondary, width=12)
        table.add_column("URL", style=self.palette.text_muted, overflow="fold")

        for chapter in chapters:
            table.add_row(
                str(chapter.order),
                chapter.name,
                (chapter.release_date or "-")[:10],
                chapter.url
            )

        return table

    def create_sources_table(self, sources: List[Dict[str, Any]]) -> Table:
        """
        Create a table showing configured sources.

        Args:
            sources: Rows with name, enabled, priority, loaded and error keys

        Returns:
            Formatted table with source status
        """
        table = Table(
            title="🔌 Sources",
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_primary,
            box=self.table_box,
            expand=True
        )

        table.add_column("Source", style=self.palette.primary, min_width=14)
        table.add_column("Status", width=10)
        table.add_column("Priority", style=self.palette.text_secondary, width=8)
        table.add_column("Description", style=self.palette.text_muted)

        for source in sources:
            if source.get("error"):
                status = f"[{self.palette.error}]Error[/{self.palette.error}]"
            elif source.get("enabled"):
                status = f"[{self.palette.success}]Enabled[/{self.palette.success}]"
            else:
                status = f"[{self.palette.text_muted}]Disabled[/{self.palette.text_muted}]"

            table.add_row(
                source["name"],
                status,
                str(source.get("priority", "-")),
                source.get("description") or ""
            )

        return table


# Export components
__all__ = ["UIComponents", "format_rating"]
