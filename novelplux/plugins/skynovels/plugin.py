"""
SkyNovels Plugin - Main plugin implementation for skynovels.net

This module implements the SkyNovels plugin class that provides novel search,
novel detail loading with chapter lists, and chapter content extraction.
"""

import logging
from typing import Dict, List, Optional, Any

from novelplux.plugins.base import BasePlugin, PluginMetadata
from novelplux.core.models import NovelDetail, SearchResult
from novelplux.core.exceptions import NovelPluxError, PluginError

from .api import SkyNovelsAPI
from .parser import SkyNovelsParser, parse_id_from_url
from .config import SkyNovelsConfig, merge_with_defaults


logger = logging.getLogger(__name__)


plugin_metadata = PluginMetadata(
    name="SkyNovels",
    version="1.0.0",
    author="NovelPlux Team",
    description="Spanish light novel translations from skynovels.net",
    website="https://www.skynovels.net",
    language="es",
    has_main_page=False,
    rate_limit=0.0,
)


class SkyNovelsPlugin(BasePlugin):
    """
    SkyNovels plugin.

    Metadata and chapter lists come from the REST API; chapter text is
    scraped from the server-rendered chapter pages.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize SkyNovels plugin.

        Args:
            config: Plugin configuration dictionary
        """
        merged_config = merge_with_defaults(config)

        try:
            self.plugin_config = SkyNovelsConfig(**merged_config)
        except ValueError as e:
            logger.warning(f"Invalid configuration, using defaults: {e}")
            self.plugin_config = SkyNovelsConfig()

        super().__init__(self.plugin_config.model_dump())

        self.api = SkyNovelsAPI(
            self._get_text,
            api_base_url=self.plugin_config.api_base_url,
            site_base_url=self.plugin_config.base_url,
            chapter_endpoints=self.plugin_config.chapter_endpoints,
            failure_markers=self.plugin_config.failure_markers,
        )
        self.parser = SkyNovelsParser(
            base_url=self.plugin_config.base_url,
            api_base_url=self.plugin_config.api_base_url,
            source=self.source_name,
        )

        logger.debug("SkyNovels plugin initialized successfully")

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return plugin_metadata

    @property
    def base_url(self) -> str:
        """Get base URL for SkyNovels."""
        return self.plugin_config.base_url

    @property
    def source_name(self) -> str:
        return self.metadata.name.lower()

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search for novels on skynovels.net

        Args:
            query: Search query string

        Returns:
            List of search results; records without a title or slug are left out

        Raises:
            PluginError: If the query is empty or the search fails
            ParseError: If the response envelope cannot be decoded
            NetworkError: If the request fails
        """
        if not query or not query.strip():
            raise PluginError("Search query cannot be empty", plugin_name=self.source_name)

        clean_query = query.strip()
        logger.debug(f"Searching SkyNovels with query: '{clean_query}'")

        try:
            records = await self.api.search_novels(clean_query)
        except NovelPluxError:
            raise
        except Exception as e:
            raise PluginError(f"Search failed for query '{clean_query}': {e}", plugin_name=self.source_name)

        results = self.parser.parse_search_results(records)

        logger.info(f"Found {len(results)} novels for query: '{clean_query}' (raw records: {len(records)})")
        return results

    async def load(self, url: str) -> Optional[NovelDetail]:
        """
        Load novel details and the chapter list for a novel page URL.

        Args:
            url: Novel URL of the form ``.../novelas/<id>/<slug>``

        Returns:
            Novel details, or None when the URL has no novel id or the API
            knows no such novel. A novel whose chapter endpoints all fail is
            returned with an empty chapter list.
        """
        novel_id = parse_id_from_url(url)
        if novel_id is None:
            logger.debug(f"Could not extract novel id from URL: {url}")
            return None

        try:
            record = await self.api.get_novel(novel_id)
            if record is None:
                logger.info(f"Novel {novel_id} not found")
                return None

            try:
                chapter_records = await self.api.get_chapters(novel_id)
                chapters = self.parser.parse_chapters(chapter_records, novel_id, record.slug)
            except Exception as e:
                logger.warning(f"Chapter list unavailable for novel {novel_id}: {e}")
                chapters = []

            detail = self.parser.to_novel_detail(record, chapters)

        except NovelPluxError:
            raise
        except Exception as e:
            raise PluginError(f"Failed to load novel from '{url}': {e}", plugin_name=self.source_name)

        logger.info(f"Loaded '{detail.title}' with {detail.chapter_count} chapters")
        return detail

    async def load_html(self, url: str) -> Optional[str]:
        """
        Extract the server-rendered chapter content of a chapter page.

        Args:
            url: Chapter page URL

        Returns:
            Normalized chapter HTML, or None when the page carries no
            server-rendered content
        """
        if not url:
            raise PluginError("Chapter URL cannot be empty", plugin_name=self.source_name)

        try:
            page = await self.api.get_page(url)
            html = self.parser.extract_chapter_html(page, self.plugin_config.content_selectors)
        except NovelPluxError:
            raise
        except Exception as e:
            raise PluginError(f"Failed to extract chapter from '{url}': {e}", plugin_name=self.source_name)

        if html is None:
            logger.info(f"No server-rendered chapter content at {url}")
        return html

    async def validate_connection(self) -> bool:
        """
        Validate connection to the SkyNovels API.

        Returns:
            True if the API answered a search, False otherwise
        """
        try:
            await self.api.search_novels("a")
            logger.debug("SkyNovels connection validation successful")
            return True
        except NovelPluxError as e:
            logger.error(f"SkyNovels connection validation failed: {e}")
            return False

    def __str__(self) -> str:
        return f"SkyNovels Plugin v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"SkyNovelsPlugin(base_url='{self.base_url}', enabled={self.plugin_config.enabled})"


__all__ = ["SkyNovelsPlugin", "plugin_metadata"]
