"""
SkyNovels API Client

This module handles all HTTP interactions with the SkyNovels backend and
the rendered site.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Sequence
from urllib.parse import quote_plus

from novelplux.core.exceptions import ParseError

from .config import DEFAULT_API_BASE_URL, DEFAULT_BASE_URL, DEFAULT_CHAPTER_ENDPOINTS, DEFAULT_FAILURE_MARKERS
from .parser import ChapterRecord, NovelRecord, decode_chapters, decode_novels


logger = logging.getLogger(__name__)


FetchText = Callable[..., Awaitable[str]]


class SkyNovelsAPI:
    """Client for the SkyNovels REST API."""

    def __init__(
        self,
        fetch_text: FetchText,
        api_base_url: str = DEFAULT_API_BASE_URL,
        site_base_url: str = DEFAULT_BASE_URL,
        chapter_endpoints: Optional[Sequence[str]] = None,
        failure_markers: Optional[Sequence[str]] = None,
    ):
        """
        Initialize SkyNovels API client.

        Args:
            fetch_text: Coroutine function ``(url, headers=...) -> str``
                performing a GET and returning the body
            api_base_url: Base URL for the REST API
            site_base_url: Site URL, sent as referer on every request
            chapter_endpoints: Chapter list URL templates, tried in order
            failure_markers: Body substrings marking a failed chapter response
        """
        self.fetch_text = fetch_text
        self.base_url = api_base_url.rstrip('/')
        self.site_base_url = site_base_url.rstrip('/')
        self.chapter_endpoints = list(chapter_endpoints or DEFAULT_CHAPTER_ENDPOINTS)
        self.failure_markers = list(failure_markers or DEFAULT_FAILURE_MARKERS)

        self.headers = {
            "referer": self.site_base_url,
        }

    async def get_text(self, url: str) -> str:
        """GET a URL with the site referer and return the body."""
        return await self.fetch_text(url, headers=self.headers)

    def search_url(self, query: str) -> str:
        return f"{self.base_url}/novels?search={quote_plus(query)}"

    def novel_url(self, novel_id: int) -> str:
        return f"{self.base_url}/novels?id={novel_id}"

    def chapter_urls(self, novel_id: int) -> List[str]:
        return [
            template.format(api=self.base_url, novel_id=novel_id)
            for template in self.chapter_endpoints
        ]

    async def search_novels(self, query: str) -> List[NovelRecord]:
        """
        Search novels by free text.

        Raises:
            NetworkError: If the request fails
            ParseError: If the response envelope cannot be decoded
        """
        url = self.search_url(query)
        text = await self.get_text(url)

        try:
            records = decode_novels(text)
        except ParseError as e:
            e.url = url
            raise

        logger.debug(f"Found {len(records)} novel records for query: '{query}'")
        return records

    async def get_novel(self, novel_id: int) -> Optional[NovelRecord]:
        """
        Look up a single novel by id.

        The API answers with the same envelope as a search; the first record
        is the novel.

        Returns:
            The novel record, or None if the envelope is empty
        """
        url = self.novel_url(novel_id)
        text = await self.get_text(url)

        try:
            records = decode_novels(text)
        except ParseError as e:
            e.url = url
            raise

        if not records:
            logger.debug(f"No novel record for id {novel_id}")
            return None

        return records[0]

    def find_failure_marker(self, text: str) -> Optional[str]:
        """Return the first known failure marker contained in a body."""
        lowered = text.lower()
        for marker in self.failure_markers:
            if marker.lower() in lowered:
                return marker
        return None

    async def get_chapters(self, novel_id: int) -> List[ChapterRecord]:
        """
        Fetch the chapter list, walking the endpoint candidates in order.

        A candidate is skipped on any error while fetching or decoding it,
        when its body carries a known failure marker, or when its list is
        empty. The first non-empty list is returned.

        Returns:
            Chapter records, or an empty list when every candidate fails
        """
        for url in self.chapter_urls(novel_id):
            try:
                text = await self.get_text(url)
            except Exception as e:
                logger.debug(f"Chapter endpoint failed {url}: {e}")
                continue

            marker = self.find_failure_marker(text)
            if marker is not None:
                logger.debug(f"Chapter endpoint {url} answered with failure marker '{marker}'")
                continue

            try:
                records = decode_chapters(text)
            except Exception as e:
                logger.debug(f"Undecodable chapter list from {url}: {e}")
                continue

            if not records:
                logger.debug(f"Empty chapter list from {url}")
                continue

            logger.debug(f"Retrieved {len(records)} chapters for novel {novel_id} from {url}")
            return records

        logger.warning(f"No chapter endpoint returned chapters for novel {novel_id}")
        return []

    async def get_page(self, url: str) -> str:
        """Fetch a rendered site page."""
        return await self.get_text(url)


__all__ = ["SkyNovelsAPI"]
