"""
Plugin Manager - Dynamic plugin discovery and management system.

This module handles the discovery, loading, and management of novel source plugins,
providing a unified interface for plugin operations with error handling and graceful degradation.
"""

import asyncio
import importlib
import inspect
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type, Any

from novelplux.core.config_manager import ConfigManager
from novelplux.core.models import NovelDetail, SearchResult
from novelplux.core.exceptions import NovelPluxError, PluginError, SearchError
from novelplux.plugins.base import BasePlugin
from novelplux.plugins.common import URLHelper


logger = logging.getLogger(__name__)


PLUGIN_MODULE_SUFFIX = "_plugin"


class PluginManager:
    """
    Manages novel source plugins with dynamic discovery and loading.

    Plugins are entry modules named ``<source>_plugin.py`` inside the plugins
    package; the source name is the module name without the suffix and keys
    the plugin's entry in the sources configuration.
    """

    def __init__(self, config_manager: ConfigManager, plugins_dir: Optional[Path] = None):
        """
        Initialize plugin manager.

        Args:
            config_manager: Configuration manager instance
            plugins_dir: Directory containing plugin modules (defaults to the
                novelplux.plugins package)
        """
        self.config_manager = config_manager
        self.plugins_dir = plugins_dir or Path(__file__).parent.parent / "plugins"

        self._available_plugins: Dict[str, Type[BasePlugin]] = {}
        self._loaded_plugins: Dict[str, BasePlugin] = {}
        self._plugin_errors: Dict[str, Exception] = {}

        self._discovery_complete = False

    @property
    def available_plugins(self) -> Dict[str, Type[BasePlugin]]:
        return dict(self._available_plugins)

    def discover_plugins(self) -> None:
        """
        Discover available plugins in the plugins directory.

        Imports every ``*_plugin.py`` module and registers the first concrete
        BasePlugin subclass found in it.
        """
        if not self.plugins_dir.exists():
            logger.warning(f"Plugins directory does not exist: {self.plugins_dir}")
            return

        logger.debug(f"Discovering plugins in {self.plugins_dir}")

        self._available_plugins.clear()
        self._plugin_errors.clear()

        for plugin_file in sorted(self.plugins_dir.glob(f"*{PLUGIN_MODULE_SUFFIX}.py")):
            plugin_name = plugin_file.stem[:-len(PLUGIN_MODULE_SUFFIX)]
            try:
                self._discover_plugin_module(plugin_name, plugin_file)
            except PluginError as e:
                self._plugin_errors[plugin_name] = e
                logger.error(f"Failed to discover plugin {plugin_name}: {e}")

        self._discovery_complete = True
        logger.debug(f"Plugin discovery complete: {len(self._available_plugins)} plugins found")

    def _discover_plugin_module(self, plugin_name: str, plugin_file: Path) -> None:
        """
        Discover the plugin class in a specific module file.

        Args:
            plugin_name: Source name derived from the module file
            plugin_file: Path to the plugin module file
        """
        module_name = f"novelplux.plugins.{plugin_file.stem}"

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise PluginError(f"Failed to import plugin module {plugin_file}: {e}", plugin_name=plugin_name)

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, BasePlugin) and
                obj is not BasePlugin and
                not inspect.isabstract(obj)):

                self._available_plugins[plugin_name] = obj
                logger.debug(f"Discovered plugin: {plugin_name} ({obj.__name__})")
                return

        logger.warning(f"No valid plugin class found in {plugin_file}")

    def register_plugin(self, plugin_name: str, plugin_class: Type[BasePlugin]) -> None:
        """Register a plugin class without scanning the plugins directory."""
        self._available_plugins[plugin_name] = plugin_class

    async def load_plugin(self, plugin_name: str, validate: bool = False) -> Optional[BasePlugin]:
        """
        Load a specific plugin by name.

        Args:
            plugin_name: Name of the plugin to load
            validate: Check the connection to the source after loading

        Returns:
            Loaded plugin instance or None if loading failed
        """
        if plugin_name in self._loaded_plugins:
            return self._loaded_plugins[plugin_name]

        if plugin_name not in self._available_plugins:
            if not self._discovery_complete:
                self.discover_plugins()

            if plugin_name not in self._available_plugins:
                logger.error(f"Plugin not found: {plugin_name}")
                return None

        source_config = self.config_manager.sources.get_source(plugin_name)
        if source_config is None:
            logger.warning(f"No configuration found for plugin {plugin_name}")
            config_dict: Dict[str, Any] = {}
        else:
            config_dict = source_config.config

        try:
            plugin_instance = self._available_plugins[plugin_name](config=config_dict)
        except (NovelPluxError, ValueError, TypeError) as e:
            self._plugin_errors[plugin_name] = e
            logger.error(f"Failed to load plugin {plugin_name}: {e}")
            return None

        if validate and not await plugin_instance.validate_connection():
            logger.warning(f"Plugin {plugin_name} failed connection validation")

        self._loaded_plugins[plugin_name] = plugin_instance
        logger.debug(f"Successfully loaded plugin: {plugin_name}")

        return plugin_instance

    async def get_plugin(self, plugin_name: str) -> BasePlugin:
        """
        Load a plugin or raise.

        Raises:
            PluginError: If the plugin is not available
        """
        plugin = await self.load_plugin(plugin_name)
        if plugin is None:
            raise PluginError(f"Plugin {plugin_name} is not available", plugin_name=plugin_name)
        return plugin

    async def get_active_plugins(self) -> Dict[str, BasePlugin]:
        """
        Get all currently active (enabled and loaded) plugins, by priority.

        Returns:
            Dictionary of plugin name to plugin instance
        """
        if not self._discovery_complete:
            self.discover_plugins()

        enabled_sources = self.config_manager.sources.get_enabled_sources()
        active_plugins = {}

        for plugin_name in enabled_sources.keys():
            plugin = await self.load_plugin(plugin_name)
            if plugin is not None:
                active_plugins[plugin_name] = plugin

        return active_plugins

    async def find_plugin_for_url(self, url: str) -> Optional[Tuple[str, BasePlugin]]:
        """
        Find the active plugin whose site hosts a URL.

        Returns:
            Tuple of (plugin name, plugin), or None if no plugin matches
        """
        domain = URLHelper.extract_domain(url).lower()
        if not domain:
            return None

        for name, plugin in (await self.get_active_plugins()).items():
            if URLHelper.extract_domain(plugin.base_url).lower() == domain:
                return name, plugin

        return None

    async def search_all(
        self,
        query: str,
        max_concurrent: Optional[int] = None
    ) -> Dict[str, List[SearchResult]]:
        """
        Search across all active plugins concurrently.

        A failing plugin contributes an empty list; its error is kept in the
        plugin status.

        Args:
            query: Search query string
            max_concurrent: Maximum number of concurrent plugin searches

        Returns:
            Dictionary mapping plugin names to their search results
        """
        active_plugins = await self.get_active_plugins()

        if not active_plugins:
            logger.warning("No active plugins available for search")
            return {}

        if max_concurrent is None:
            max_concurrent = self.config_manager.sources.global_config.max_concurrent_plugins

        semaphore = asyncio.Semaphore(max_concurrent)
        plugin_timeout = self.config_manager.sources.global_config.plugin_timeout

        async def search_plugin(name: str, plugin: BasePlugin) -> Tuple[str, List[SearchResult]]:
            """Search a single plugin with error handling."""
            async with semaphore:
                try:
                    logger.debug(f"Searching plugin {name} for: {query}")
                    results = await asyncio.wait_for(plugin.search(query), timeout=plugin_timeout)
                    logger.debug(f"Plugin {name} returned {len(results)} results")
                    return name, results
                except asyncio.TimeoutError:
                    logger.error(f"Search timed out for plugin {name} after {plugin_timeout}s")
                    self._plugin_errors[name] = SearchError(
                        f"Search timed out after {plugin_timeout}s", query=query, source=name
                    )
                    return name, []
                except NovelPluxError as e:
                    logger.error(f"Search failed for plugin {name}: {e}")
                    self._plugin_errors[name] = e
                    return name, []

        search_tasks = [
            search_plugin(name, plugin)
            for name, plugin in active_plugins.items()
        ]

        search_results = dict(await asyncio.gather(*search_tasks))

        total_results = sum(len(results) for results in search_results.values())
        logger.info(f"Search complete: {total_results} total results from {len(search_results)} plugins")

        return search_results

    async def load_novel(self, plugin_name: str, url: str) -> Optional[NovelDetail]:
        """
        Load novel details from a specific plugin.

        Raises:
            PluginError: If plugin is not available or loading fails
        """
        plugin = await self.get_plugin(plugin_name)

        try:
            return await plugin.load(url)
        except NovelPluxError as e:
            self._plugin_errors[plugin_name] = e
            raise

    async def load_chapter_html(self, plugin_name: str, url: str) -> Optional[str]:
        """
        Render chapter content from a specific plugin.

        Raises:
            PluginError: If plugin is not available or extraction fails
        """
        plugin = await self.get_plugin(plugin_name)

        try:
            return await plugin.load_html(url)
        except NovelPluxError as e:
            self._plugin_errors[plugin_name] = e
            raise

    def get_plugin_status(self) -> Dict[str, Dict[str, Any]]:
        """
        Get status information for all plugins.

        Returns:
            Dictionary containing plugin status information
        """
        status: Dict[str, Any] = {
            "discovered": len(self._available_plugins),
            "loaded": len(self._loaded_plugins),
            "errors": len(self._plugin_errors),
            "plugins": {}
        }

        for name, plugin_class in self._available_plugins.items():
            plugin_info: Dict[str, Any] = {
                "class": plugin_class.__name__,
                "loaded": name in self._loaded_plugins,
                "enabled": False,
                "error": None
            }

            source_config = self.config_manager.sources.get_source(name)
            if source_config:
                plugin_info["enabled"] = source_config.enabled

            if name in self._plugin_errors:
                plugin_info["error"] = str(self._plugin_errors[name])

            if name in self._loaded_plugins:
                plugin_info["metadata"] = self._loaded_plugins[name].metadata.model_dump()

            status["plugins"][name] = plugin_info

        return status

    async def cleanup(self) -> None:
        """Clean up all loaded plugins."""
        logger.debug("Cleaning up plugin manager")

        cleanup_tasks = [
            plugin.cleanup()
            for plugin in self._loaded_plugins.values()
        ]

        if cleanup_tasks:
            results = await asyncio.gather(*cleanup_tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.debug(f"Error during plugin cleanup: {result}")

        self._loaded_plugins.clear()


__all__ = ["PluginManager"]
