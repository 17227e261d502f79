"""
Sources Command - Plugin management functionality.

This module implements source plugin management commands for listing,
enabling and disabling novel source plugins.
"""

from typing import Any, Dict, List

import typer

from novelplux.cli.context import create_plugin_manager, get_config_manager
from novelplux.core.exceptions import PluginError
from novelplux.ui import (
    UIComponents,
    get_console,
    handle_error,
    display_info,
)

# Create sources command group
app = typer.Typer(
    name="sources",
    help="🔌 Manage novel source plugins",
    no_args_is_help=True,
)


def _collect_sources(enabled_only: bool = False) -> List[Dict[str, Any]]:
    """Merge configured sources with the plugins found on disk."""
    config_manager = get_config_manager()
    plugin_manager = create_plugin_manager()
    plugin_manager.discover_plugins()
    status = plugin_manager.get_plugin_status()["plugins"]

    rows = []
    names = list(config_manager.sources.sources.keys())
    names.extend(name for name in status if name not in names)

    for name in names:
        source_config = config_manager.sources.get_source(name)
        plugin_status = status.get(name)

        enabled = bool(source_config and source_config.enabled)
        if enabled_only and not enabled:
            continue

        error = None
        if plugin_status is None:
            error = "plugin not installed"
        elif plugin_status["error"]:
            error = plugin_status["error"]

        rows.append({
            "name": name,
            "enabled": enabled,
            "priority": source_config.priority if source_config else "-",
            "description": (source_config.description if source_config else None) or error,
            "error": error,
        })

    return sorted(rows, key=lambda row: (not row["enabled"], str(row["priority"])))


@app.command(name="list")
def list_sources(
    enabled_only: bool = typer.Option(
        False,
        "--enabled",
        "-e",
        help="Show only enabled sources"
    ),
) -> None:
    """
    📋 List available source plugins.

    Examples:

        novelplux sources list

        novelplux sources list --enabled
    """
    try:
        rows = _collect_sources(enabled_only)
    except Exception as e:
        handle_error(e, "Failed to list sources")
        raise typer.Exit(1)

    if not rows:
        display_info("No sources configured.", "🔌 Sources")
        return

    components = UIComponents(get_config_manager().settings.ui.table_style)
    get_console().print(components.create_sources_table(rows))


def _require_known_source(source_name: str) -> None:
    config_manager = get_config_manager()
    if config_manager.sources.get_source(source_name) is not None:
        return

    plugin_manager = create_plugin_manager()
    plugin_manager.discover_plugins()
    if source_name not in plugin_manager.available_plugins:
        raise PluginError(f"Unknown source: {source_name}", plugin_name=source_name)


@app.command(name="enable")
def enable_source(
    source_name: str = typer.Argument(..., help="Source plugin name to enable"),
) -> None:
    """
    ✅ Enable a source plugin.

    Examples:

        novelplux sources enable skynovels
    """
    try:
        _require_known_source(source_name)
        get_config_manager().enable_source(source_name)
    except Exception as e:
        handle_error(e, f"Failed to enable source '{source_name}'")
        raise typer.Exit(1)

    get_console().print(UIComponents().create_success_panel(f"Source '{source_name}' enabled."))


@app.command(name="disable")
def disable_source(
    source_name: str = typer.Argument(..., help="Source plugin name to disable"),
) -> None:
    """
    ❌ Disable a source plugin.

    Examples:

        novelplux sources disable skynovels
    """
    try:
        _require_known_source(source_name)
        get_config_manager().disable_source(source_name)
    except Exception as e:
        handle_error(e, f"Failed to disable source '{source_name}'")
        raise typer.Exit(1)

    get_console().print(UIComponents().create_success_panel(f"Source '{source_name}' disabled."))


__all__ = ["app"]
