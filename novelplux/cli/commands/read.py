"""
Read Command - Print a chapter as plain text or normalized HTML.
"""

import asyncio
from typing import Optional

import typer

from novelplux.cli.context import create_plugin_manager, get_config_manager
from novelplux.cli.source_resolver import resolve_source
from novelplux.plugins.common import TextCleaner
from novelplux.ui import (
    get_console,
    handle_error,
    display_warning,
    status_spinner,
)


def read_command(
    url: str = typer.Argument(..., help="Chapter page URL"),
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Source plugin to use (default: detect from URL)"
    ),
    raw_html: bool = typer.Option(
        False,
        "--html",
        help="Print the normalized chapter HTML instead of text",
        is_flag=True,
    ),
) -> None:
    """
    📄 Read a chapter.

    Examples:

        novelplux read https://www.skynovels.net/novelas/123/some-novel/456/capitulo-1

        novelplux read https://www.skynovels.net/novelas/123/some-novel/456/capitulo-1 --html
    """
    config_manager = get_config_manager()

    try:
        html = asyncio.run(_load_chapter(url, source))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, f"While reading {url}")
        raise typer.Exit(1)

    if html is None:
        display_warning(
            f"No chapter content could be extracted from {url}.\n\n"
            "The page may render its text in the browser only.",
            "📄 No Content"
        )
        raise typer.Exit(1)

    console = get_console()
    if raw_html:
        console.print(html, markup=False, highlight=False, soft_wrap=True)
        return

    text = TextCleaner.html_to_text(html) or ""
    console.print(
        text,
        markup=False,
        highlight=False,
        width=min(console.width, config_manager.settings.reader.wrap_width),
    )


async def _load_chapter(url: str, source_name: Optional[str]) -> Optional[str]:
    plugin_manager = create_plugin_manager()

    try:
        name = await resolve_source(plugin_manager, url, source_name)
        with status_spinner("Fetching chapter..."):
            return await plugin_manager.load_chapter_html(name, url)
    finally:
        await plugin_manager.cleanup()


__all__ = ["read_command"]
