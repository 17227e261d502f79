"""
Search Command - Novel search functionality.

This module implements the search command for finding novels across
the enabled sources with a results table.
"""

import asyncio
import logging
from typing import Dict, List, Optional

import typer

from novelplux.cli.context import create_plugin_manager, get_config_manager
from novelplux.core.config_manager import ConfigManager
from novelplux.core.exceptions import SearchError
from novelplux.core.models import SearchResult
from novelplux.ui import (
    UIComponents,
    get_console,
    handle_error,
    display_warning,
    status_spinner,
)


logger = logging.getLogger(__name__)


def search_command(
    query: str = typer.Argument(..., help="Novel title to search for"),
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Search specific source only"
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum number of results to display (default: show all)",
        min=1,
        max=500
    ),
) -> None:
    """
    🔍 Search for novels by title.

    Search across all enabled sources for novels matching the given query.

    Examples:

        novelplux search "mushoku tensei"

        novelplux search "overlord" --source skynovels --limit 10
    """
    config_manager = get_config_manager()
    min_query_length = config_manager.settings.search.min_query_length

    if len(query.strip()) < min_query_length:
        display_warning(
            f"Search query must be at least {min_query_length} characters long.",
            "⚠️  Query Too Short"
        )
        raise typer.Exit(1)

    try:
        results = asyncio.run(_perform_search(query.strip(), source, config_manager))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Search cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, "During novel search")
        raise typer.Exit(1)

    if not results:
        display_warning(
            f"No results found for '{query.strip()}'.\n\n"
            "Try:\n"
            "• Different search terms or keywords\n"
            "• Enabling more sources with 'novelplux sources enable'",
            "🔍 No Results Found"
        )
        return

    if limit:
        results = results[:limit]

    components = UIComponents(config_manager.settings.ui.table_style)
    get_console().print(components.create_search_results_table(results))


async def _perform_search(
    query: str,
    source_filter: Optional[str],
    config_manager: ConfigManager
) -> List[SearchResult]:
    """
    Run the search against one source or all enabled sources.

    Returns:
        Results grouped by source priority, each source capped at the
        configured maximum
    """
    plugin_manager = create_plugin_manager()
    per_source_limit = config_manager.settings.search.max_results_per_source

    try:
        with status_spinner(f"Searching for '{query}'..."):
            if source_filter:
                plugin = await plugin_manager.get_plugin(source_filter)
                results_by_source: Dict[str, List[SearchResult]] = {
                    source_filter: await plugin.search(query)
                }
            else:
                results_by_source = await plugin_manager.search_all(query)
    finally:
        await plugin_manager.cleanup()

    if not results_by_source:
        raise SearchError("No enabled sources to search", query=query)

    results: List[SearchResult] = []
    for name, source_results in results_by_source.items():
        logger.debug(f"{name}: {len(source_results)} results")
        results.extend(source_results[:per_source_limit])

    return results


__all__ = ["search_command"]
