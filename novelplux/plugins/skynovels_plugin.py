"""
SkyNovels Plugin Entry Point

This module serves as the entry point for the SkyNovels plugin,
importing the main plugin class from the skynovels subdirectory.
"""

from novelplux.plugins.skynovels.plugin import SkyNovelsPlugin

# Export the plugin class for discovery
__all__ = ["SkyNovelsPlugin"]
