"""
CLI Context - Global application context and state management.

This module holds the configuration manager created by the main callback
so commands can reach it without circular imports.
"""

from typing import Optional

from novelplux.core import ConfigManager, PluginManager


# Global application state
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: Optional[ConfigManager]) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


def create_plugin_manager() -> PluginManager:
    """Create a plugin manager bound to the global configuration."""
    return PluginManager(get_config_manager())


# Export context functions
__all__ = [
    "get_config_manager",
    "set_config_manager",
    "create_plugin_manager",
]
