"""
SkyNovels Plugin Configuration

This module handles configuration validation and defaults for the SkyNovels plugin.
The endpoint templates, failure markers and content selectors are ordered
lists so new variants of the unstable backend can be added here without
touching the fetch logic.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://www.skynovels.net"
DEFAULT_API_BASE_URL = "https://api.skynovels.net/api"

# Tried in order, first non-empty chapter list wins
DEFAULT_CHAPTER_ENDPOINTS = [
    "{api}/novel/{novel_id}/chapters?page=1&limit=5000",
    "{api}/novel/{novel_id}/chapters?page=1",
]

# Bodies the backend returns instead of a chapter list when it is unhealthy
DEFAULT_FAILURE_MARKERS = [
    "El servidor no responde",
    "Cannot GET",
]

DEFAULT_CONTENT_SELECTORS = [
    ".skn-chp-chapter .skn-chp-chapter-content",
    ".skn-chp-chapter-content",
    "markdown",
]


class SkyNovelsConfig(BaseModel):
    """Configuration model for SkyNovels plugin."""

    enabled: bool = Field(default=True, description="Enable/disable the plugin")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=0, ge=0, description="Retries per request on transport errors")
    rate_limit: float = Field(default=0.0, ge=0.0, description="Minimum seconds between requests")

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Site URL, also sent as referer")
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="REST API base URL")

    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36",
        description="User agent string for requests"
    )

    chapter_endpoints: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CHAPTER_ENDPOINTS),
        description="Chapter list URL templates with {api} and {novel_id} placeholders"
    )
    failure_markers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FAILURE_MARKERS),
        description="Body substrings that mark a failed chapter list response"
    )
    content_selectors: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS),
        description="CSS selectors for the chapter content container"
    )

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 5:
            raise ValueError("Timeout must be at least 5 seconds")
        return v

    @field_validator('base_url', 'api_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v.rstrip('/')

    @field_validator('chapter_endpoints')
    @classmethod
    def validate_chapter_endpoints(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("At least one chapter endpoint is required")
        for template in v:
            if "{novel_id}" not in template:
                raise ValueError(f"Chapter endpoint template lacks {{novel_id}}: {template}")
        return v

    @field_validator('content_selectors')
    @classmethod
    def validate_content_selectors(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("At least one content selector is required")
        return v


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for SkyNovels plugin."""
    return SkyNovelsConfig().model_dump()


def validate_config(config: Dict[str, Any]) -> SkyNovelsConfig:
    """
    Validate and create SkyNovelsConfig from dictionary.

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return SkyNovelsConfig(**config)
    except ValueError as e:
        logger.error(f"Invalid SkyNovels configuration: {e}")
        raise ValueError(f"Invalid SkyNovels configuration: {e}")


def merge_with_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge provided config with defaults.

    Args:
        config: User configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    merged = get_default_config()
    if config:
        merged.update(config)
    return merged


__all__ = [
    "SkyNovelsConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_CHAPTER_ENDPOINTS",
    "DEFAULT_FAILURE_MARKERS",
    "DEFAULT_CONTENT_SELECTORS",
    "get_default_config",
    "validate_config",
    "merge_with_defaults",
]
