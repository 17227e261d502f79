"""
CLI Main Application - Typer app entry point.

This module provides the main CLI application entry point with
configuration loading, logging and theme setup, and command registration.
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.rule import Rule
from rich.traceback import install as install_rich_traceback

from novelplux import __version__
from novelplux.core import ConfigManager, create_default_config_files
from novelplux.core.exceptions import NovelPluxError, ConfigurationError
from novelplux.ui import (
    setup_console,
    get_console,
    ThemeName,
    set_theme,
    handle_error,
)
from novelplux.cli.context import get_config_manager, set_config_manager


# Create main Typer application
app = typer.Typer(
    name="novelplux",
    help="📚 Search, browse and read web novels from the command line",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        get_console().print(f"[bold blue]NovelPlux[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        is_flag=True,
        is_eager=True,
        callback=_version_callback,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        exists=False,
        file_okay=False,
        dir_okay=True,
    ),
    theme: Optional[ThemeName] = typer.Option(
        None,
        "--theme",
        help="UI color theme",
        case_sensitive=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
        is_flag=True,
    ),
    no_banner: bool = typer.Option(
        False,
        "--no-banner",
        help="Disable startup banner",
        is_flag=True,
    ),
) -> None:
    """
    📚 NovelPlux - Novel reader with pluggable content sources.
    """
    try:
        _initialize_application(
            config_dir=config_dir,
            theme=theme,
            debug=debug,
            show_banner=not no_banner,
        )
    except NovelPluxError as e:
        handle_error(e, "During application initialization")
        raise typer.Exit(1)
    except Exception as e:
        handle_error(e, "Unexpected error during startup", show_traceback=debug)
        raise typer.Exit(1)


def _initialize_application(
    config_dir: Optional[Path] = None,
    theme: Optional[ThemeName] = None,
    debug: bool = False,
    show_banner: bool = True,
) -> None:
    """
    Initialize the application with configuration and UI setup.

    Args:
        config_dir: Configuration directory override
        theme: Theme override
        debug: Enable debug mode
        show_banner: Whether to show startup banner
    """
    install_rich_traceback(show_locals=debug)

    if config_dir is None:
        config_dir = Path("config")

    if not config_dir.exists():
        create_default_config_files(config_dir)

    try:
        config_manager = ConfigManager(config_dir)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", str(config_dir))

    set_config_manager(config_manager)

    _setup_logging(debug, config_manager.settings.logging.level)
    _setup_ui(theme)

    if show_banner and config_manager.settings.ui.show_banner:
        get_console().print(Rule(f"[bold blue]📚 NovelPlux[/bold blue] [dim]v{__version__}[/dim]"))


def _setup_logging(debug: bool = False, level_name: str = "WARNING") -> None:
    """
    Set up application logging.

    Args:
        debug: Enable debug logging
        level_name: Configured level used when debug is off
    """
    level = logging.DEBUG if debug else getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )
    logging.getLogger().setLevel(level)

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _setup_ui(theme: Optional[ThemeName] = None) -> None:
    """Set the global theme and rebuild the console with it."""
    theme = theme or ThemeName.DEFAULT

    set_theme(theme)
    setup_console(theme_name=theme)


def _register_commands() -> None:
    """Register commands and command groups with the main app."""
    # Import commands here to avoid circular imports
    from novelplux.cli.commands import novel, read, search, sources

    app.command(name="search")(search.search_command)
    app.command(name="novel")(novel.novel_command)
    app.command(name="read")(read.read_command)
    app.add_typer(sources.app, name="sources", help="🔌 Manage source plugins")


# Register commands at module level to ensure they're available for help
_register_commands()


def cli_main() -> None:
    """
    Main CLI entry point for the novelplux command.
    """
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = [
    "app",
    "cli_main",
    "get_config_manager",
]
