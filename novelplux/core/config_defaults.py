"""
Configuration Defaults - Default configuration templates and utilities.

This module provides default configuration templates and utilities
for creating configuration files with sensible defaults.
"""

import json
from pathlib import Path

from novelplux.core.config_schemas import AppSettings, SourcesConfig, SourceConfig


def get_default_settings() -> AppSettings:
    """
    Get default application settings.

    Returns:
        AppSettings instance with sensible defaults
    """
    return AppSettings()


def get_default_sources() -> SourcesConfig:
    """
    Get default sources configuration with the bundled SkyNovels source.

    Returns:
        SourcesConfig instance with the default sources
    """
    sources_config = SourcesConfig()

    skynovels_source = SourceConfig(
        enabled=True,
        priority=1,
        name="SkyNovels",
        description="Spanish light novel translations from skynovels.net",
        config={
            "base_url": "https://www.skynovels.net",
            "api_base_url": "https://api.skynovels.net/api",
            "timeout": 30,
        }
    )

    sources_config.add_source("skynovels", skynovels_source)
    return sources_config


def create_default_config_files(config_dir: Path) -> None:
    """
    Create default configuration files in the specified directory.

    Args:
        config_dir: Directory to create configuration files in
    """
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / "settings.json"
    if not settings_file.exists():
        settings = get_default_settings()
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings.model_dump(mode='json'), f, indent=2, ensure_ascii=False)

    sources_file = config_dir / "sources.json"
    if not sources_file.exists():
        sources = get_default_sources()
        with open(sources_file, 'w', encoding='utf-8') as f:
            json.dump(sources.model_dump(mode='json'), f, indent=2, ensure_ascii=False)


# Export utility functions
__all__ = [
    "get_default_settings",
    "get_default_sources",
    "create_default_config_files",
]
