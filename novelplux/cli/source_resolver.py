"""
Source Resolver - Pick the plugin responsible for a novel or chapter URL.
"""

import logging
from typing import Optional

from novelplux.core import PluginManager
from novelplux.core.exceptions import PluginError


logger = logging.getLogger(__name__)


async def resolve_source(
    plugin_manager: PluginManager,
    url: str,
    source_name: Optional[str] = None
) -> str:
    """
    Resolve the plugin name to use for a URL.

    An explicit source name wins, even for a disabled source. Otherwise the
    enabled source whose site hosts the URL is used.

    Returns:
        Name of the plugin to use

    Raises:
        PluginError: If no plugin can handle the URL
    """
    if source_name:
        await plugin_manager.get_plugin(source_name)
        return source_name

    match = await plugin_manager.find_plugin_for_url(url)
    if match is None:
        raise PluginError(f"No enabled source handles {url}; pass --source to choose one")

    name, _ = match
    logger.debug(f"Resolved {url} to source {name}")
    return name


__all__ = ["resolve_source"]
