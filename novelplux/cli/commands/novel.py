"""
Novel Command - Show a novel's details and table of contents.
"""

import asyncio
from typing import Optional

import typer

from novelplux.cli.context import create_plugin_manager, get_config_manager
from novelplux.cli.source_resolver import resolve_source
from novelplux.core.models import NovelDetail
from novelplux.ui import (
    UIComponents,
    get_console,
    handle_error,
    display_warning,
    status_spinner,
)


def novel_command(
    url: str = typer.Argument(..., help="Novel page URL"),
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Source plugin to use (default: detect from URL)"
    ),
    chapters: Optional[bool] = typer.Option(
        None,
        "--chapters/--no-chapters",
        help="Show the chapter list (default from reader settings)"
    ),
) -> None:
    """
    📖 Show novel details and its chapter list.

    Examples:

        novelplux novel https://www.skynovels.net/novelas/123/some-novel

        novelplux novel https://www.skynovels.net/novelas/123/some-novel --no-chapters
    """
    config_manager = get_config_manager()
    show_chapters = config_manager.settings.reader.show_chapter_list if chapters is None else chapters

    try:
        novel = asyncio.run(_load_novel(url, source))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, f"While loading {url}")
        raise typer.Exit(1)

    if novel is None:
        display_warning(f"No novel found at {url}", "📖 Novel Not Found")
        raise typer.Exit(1)

    console = get_console()
    components = UIComponents(config_manager.settings.ui.table_style)

    console.print(components.create_novel_panel(novel))

    if show_chapters:
        if novel.chapters:
            console.print(components.create_chapters_table(novel.chapters))
        else:
            display_warning("The source returned no chapters for this novel.", "📑 No Chapters")


async def _load_novel(url: str, source_name: Optional[str]) -> Optional[NovelDetail]:
    plugin_manager = create_plugin_manager()

    try:
        name = await resolve_source(plugin_manager, url, source_name)
        with status_spinner("Loading novel..."):
            return await plugin_manager.load_novel(name, url)
    finally:
        await plugin_manager.cleanup()


__all__ = ["novel_command"]
