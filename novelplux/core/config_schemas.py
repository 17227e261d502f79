"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings and plugin configurations using Pydantic models.
"""

import logging
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


logger = logging.getLogger(__name__)


class UISettings(BaseModel):
    """User interface configuration settings."""

    show_banner: bool = Field(
        default=True,
        description="Whether to show the banner on startup"
    )
    table_style: Literal["rounded", "simple", "grid", "minimal"] = Field(
        default="rounded",
        description="Style for data tables"
    )


class SearchSettings(BaseModel):
    """Search-related configuration settings."""

    max_results_per_source: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Maximum results to display per source"
    )
    min_query_length: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Minimum search query length"
    )


class ReaderSettings(BaseModel):
    """Chapter reader configuration settings."""

    wrap_width: int = Field(
        default=100,
        ge=40,
        le=300,
        description="Maximum line width when printing chapter text"
    )
    show_chapter_list: bool = Field(
        default=True,
        description="Show the chapter table when displaying a novel"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class AppSettings(BaseModel):
    """Main application settings container."""

    ui: UISettings = Field(default_factory=UISettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    reader: ReaderSettings = Field(default_factory=ReaderSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SourceConfig(BaseModel):
    """Configuration for an individual source plugin."""

    enabled: bool = Field(
        default=False,
        description="Whether the source is enabled"
    )
    priority: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Source priority (lower numbers = higher priority)"
    )
    name: Optional[str] = Field(
        default=None,
        description="Display name for the source"
    )
    description: Optional[str] = Field(
        default=None,
        description="Description of the source"
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Source-specific configuration"
    )

    @field_validator('config')
    @classmethod
    def validate_config(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate source-specific configuration."""
        if 'rate_limit' in v and not isinstance(v['rate_limit'], (int, float)):
            raise ValueError("rate_limit must be a number")

        if 'timeout' in v and (not isinstance(v['timeout'], int) or v['timeout'] < 1):
            raise ValueError("timeout must be a positive integer")

        return v


class GlobalSourceConfig(BaseModel):
    """Global configuration for source management."""

    plugin_timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Default timeout for plugin operations"
    )
    max_concurrent_plugins: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum number of plugins to query concurrently"
    )


class SourcesConfig(BaseModel):
    """Sources configuration container."""

    sources: Dict[str, SourceConfig] = Field(
        default_factory=dict,
        description="Individual source configurations"
    )
    global_config: GlobalSourceConfig = Field(
        default_factory=GlobalSourceConfig,
        description="Global source management settings"
    )

    @model_validator(mode='after')
    def validate_source_priorities(self) -> 'SourcesConfig':
        """Warn about sources sharing a priority."""
        priorities = {}
        for name, config in self.sources.items():
            if config.priority in priorities:
                logger.warning(
                    f"Duplicate priority {config.priority} for sources "
                    f"{name} and {priorities[config.priority]}"
                )
            priorities[config.priority] = name

        return self

    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Get all enabled sources sorted by priority."""
        enabled = {
            name: config for name, config in self.sources.items()
            if config.enabled
        }

        return dict(sorted(
            enabled.items(),
            key=lambda item: item[1].priority
        ))

    def add_source(self, name: str, config: SourceConfig) -> None:
        """Add a new source configuration."""
        self.sources[name] = config

    def get_source(self, name: str) -> Optional[SourceConfig]:
        """Get configuration for a specific source."""
        return self.sources.get(name)


# Export all configuration models
__all__ = [
    "UISettings",
    "SearchSettings",
    "ReaderSettings",
    "LoggingSettings",
    "AppSettings",
    "SourceConfig",
    "GlobalSourceConfig",
    "SourcesConfig",
]
