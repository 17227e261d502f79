"""
Base Plugin Interface - Abstract base class for novel source plugins.

This module defines the interface that all novel source plugins must implement,
providing a consistent API for searching, loading novel details and rendering
chapter content.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
from urllib.parse import urljoin, urlparse

import aiohttp
from pydantic import BaseModel, Field

from novelplux import __version__
from novelplux.core.models import NovelDetail, SearchResult
from novelplux.core.exceptions import NetworkError


logger = logging.getLogger(__name__)


class PluginMetadata(BaseModel):
    """Metadata information for a plugin."""

    name: str = Field(..., description="Plugin display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Plugin author")
    description: str = Field(default="", description="Plugin description")
    website: Optional[str] = Field(None, description="Source website URL")
    language: str = Field(default="en", description="Content language code")
    has_main_page: bool = Field(default=False, description="Whether the source exposes a browsable main page")
    rate_limit: float = Field(default=0.0, ge=0.0, description="Minimum seconds between requests")


class BasePlugin(ABC):
    """
    Abstract base class for novel source plugins.

    All source plugins must inherit from this class and implement the
    three provider operations: ``search``, ``load`` and ``load_html``.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the plugin with configuration.

        Args:
            config: Plugin-specific configuration dictionary
        """
        self.config = config or {}
        self._session: Optional[aiohttp.ClientSession] = None
        self._last_request_time = 0.0

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._initialize_config()

    def _initialize_config(self) -> None:
        """Initialize plugin configuration with defaults."""
        self.timeout = self.config.get('timeout', 30)
        self.user_agent = self.config.get(
            'user_agent',
            f'NovelPlux/{__version__}'
        )
        self.max_retries = self.config.get('max_retries', 0)
        self.retry_delay = self.config.get('retry_delay', 1.0)
        self.rate_limit = self.config.get('rate_limit', self.metadata.rate_limit)

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata information."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Get the base URL for the novel source."""
        pass

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
            )

            timeout = aiohttp.ClientTimeout(total=self.timeout)

            headers = {
                'User-Agent': self.user_agent,
                'Accept': 'text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8',
                'Accept-Language': 'es-ES,es;q=0.9,en;q=0.5',
            }

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers=headers
            )

        return self._session

    async def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        current_time = time.monotonic()
        time_since_last = current_time - self._last_request_time

        if time_since_last < self.rate_limit:
            await asyncio.sleep(self.rate_limit - time_since_last)

        self._last_request_time = time.monotonic()

    async def _request(self, url: str, method: str = 'GET', read_body: bool = True, **kwargs) -> tuple:
        """
        Make an HTTP request with rate limiting and error handling.

        Args:
            url: URL to request, relative URLs are resolved against base_url
            method: HTTP method
            read_body: Decode and return the response text
            **kwargs: Additional arguments for the request

        Returns:
            Tuple of (status code, body text or None)

        Raises:
            NetworkError: If the request fails or the server answers >= 400
        """
        await self._rate_limit()

        if not urlparse(url).netloc:
            url = urljoin(self.base_url, url)

        last_exception: Optional[BaseException] = None

        for attempt in range(self.max_retries + 1):
            try:
                self.logger.debug(f"Making {method} request to {url} (attempt {attempt + 1})")

                async with self.session.request(method, url, **kwargs) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise NetworkError(
                            f"HTTP {response.status} error for {url}",
                            url=url,
                            status_code=response.status,
                            details=error_text
                        )

                    if read_body:
                        return response.status, await response.text()

                    await response.read()
                    return response.status, None

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                self.logger.warning(f"Request failed (attempt {attempt + 1}): {e}")

                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempts: {last_exception}",
            url=url,
            details=str(last_exception)
        )

    async def _get_text(self, url: str, **kwargs) -> str:
        """Get text content from URL."""
        _, text = await self._request(url, 'GET', read_body=True, **kwargs)
        return text

    @abstractmethod
    async def search(self, query: str) -> List[SearchResult]:
        """
        Search for novels by title.

        Args:
            query: Search query string

        Returns:
            List of search results

        Raises:
            PluginError: If search fails
        """
        pass

    @abstractmethod
    async def load(self, url: str) -> Optional[NovelDetail]:
        """
        Load full novel metadata and its chapter list.

        Args:
            url: URL to the novel page

        Returns:
            Novel details, or None if the URL does not identify a novel
            known to the source
        """
        pass

    @abstractmethod
    async def load_html(self, url: str) -> Optional[str]:
        """
        Extract the chapter content of a chapter page as HTML.

        Args:
            url: URL to the chapter page

        Returns:
            Normalized chapter HTML, or None if the page carries no
            server-rendered content
        """
        pass

    async def validate_connection(self) -> bool:
        """
        Validate that the plugin can connect to its source.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            status, _ = await self._request(self.base_url, read_body=False)
            return status == 200
        except NetworkError as e:
            self.logger.error(f"Connection validation failed: {e}")
            return False

    async def cleanup(self) -> None:
        """Clean up resources used by the plugin."""
        if self._session and not self._session.closed:
            await self._session.close()
            self.logger.debug("HTTP session closed")
        self._session = None

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


# Export base plugin class and metadata
__all__ = ["BasePlugin", "PluginMetadata"]
