"""
SkyNovels Plugin - Novel source plugin for skynovels.net

This plugin provides access to Spanish novel translations from skynovels.net,
including search, novel details with chapter lists, and chapter content.
"""

from .plugin import SkyNovelsPlugin, plugin_metadata
from .config import SkyNovelsConfig, get_default_config, validate_config
from .parser import SkyNovelsParser, parse_id_from_url
from .api import SkyNovelsAPI

__all__ = [
    "SkyNovelsPlugin",
    "plugin_metadata",
    "SkyNovelsConfig",
    "get_default_config",
    "validate_config",
    "SkyNovelsParser",
    "parse_id_from_url",
    "SkyNovelsAPI",
]
