"""
Plugin Utilities - Common utilities and helpers for plugin development.

This module provides utility functions and classes that are commonly needed
when developing novel source plugins, including HTML parsing, URL handling,
field fallback lookups and data extraction helpers.
"""

import re
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from novelplux.core.models import ChapterRef, SearchResult


logger = logging.getLogger(__name__)


class HTMLParser:
    """Utility class for HTML parsing operations."""

    def __init__(self, html_content: str):
        self.soup = BeautifulSoup(html_content, 'html.parser')

    def select_first(self, selectors: Iterable[str]) -> Tuple[Optional[str], Optional[Tag]]:
        """
        Find the first element matched by an ordered list of selectors.

        Args:
            selectors: CSS selectors, tried in order

        Returns:
            Tuple of (matching selector, element), or (None, None) when no
            selector matches
        """
        for selector in selectors:
            element = self.soup.select_one(selector)
            if element is not None:
                return selector, element
        return None, None

    @staticmethod
    def inner_html(element: Tag) -> str:
        """Serialize the children of an element."""
        return element.decode_contents()

    @staticmethod
    def normalize_html(html: str) -> str:
        """Re-parse and re-serialize an HTML fragment."""
        return str(BeautifulSoup(html, 'html.parser'))


class URLHelper:
    """Utility class for URL manipulation and validation."""

    @staticmethod
    def extract_domain(url: str) -> str:
        """Extract domain from URL."""
        return urlparse(url).netloc

    @staticmethod
    def validate_url(url: str) -> str:
        """Ensure a URL is an absolute http(s) URL."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if not url.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://: {url}")

        if not urlparse(url).netloc:
            raise ValueError(f"Invalid URL format: {url}")

        return url


class TextCleaner:
    """Utility class for cleaning and normalizing text content."""

    @staticmethod
    def clean_title(title: str) -> str:
        """Collapse whitespace in a title."""
        if not title:
            return ""
        return re.sub(r'\s+', ' ', title.strip())

    @staticmethod
    def html_to_text(html: Optional[str]) -> Optional[str]:
        """
        Convert an HTML snippet to plain text.

        Block-level breaks become newlines, runs of blank lines are
        collapsed and surrounding whitespace is stripped.

        Args:
            html: Raw HTML (plain text passes through unchanged)

        Returns:
            Plain text, or None for empty input
        """
        if not html or not html.strip():
            return None

        soup = BeautifulSoup(html, 'html.parser')
        for br in soup.find_all('br'):
            br.replace_with('\n')

        text = soup.get_text('\n')
        lines = [re.sub(r'[ \t\xa0]+', ' ', line).strip() for line in text.splitlines()]
        text = re.sub(r'\n{3,}', '\n\n', '\n'.join(lines)).strip()

        return text or None


def first_present(record: Mapping[str, Any], fields: Sequence[str], default: Any = None) -> Any:
    """
    Return the first field of ``record`` whose value is not None.

    Empty strings count as present; only missing keys and nulls fall through.

    Args:
        record: Mapping to read from
        fields: Field names in priority order
        default: Value returned when every field is absent

    Returns:
        First non-null value or the default
    """
    for field in fields:
        value = record.get(field)
        if value is not None:
            return value
    return default


def create_search_result(
    title: str,
    url: str,
    source: str,
    **kwargs
) -> SearchResult:
    """
    Create a SearchResult with cleaned data.

    Args:
        title: Novel title
        url: Novel URL
        source: Source plugin name
        **kwargs: Additional fields for SearchResult

    Returns:
        SearchResult instance
    """
    try:
        URLHelper.validate_url(url)
    except ValueError as e:
        raise ValueError(f"Invalid URL for SearchResult '{title}': {e}")

    return SearchResult(
        title=TextCleaner.clean_title(title),
        url=url,
        source=source,
        **kwargs
    )


def create_chapter_ref(
    name: str,
    url: str,
    order: int,
    **kwargs
) -> ChapterRef:
    """Create a ChapterRef with cleaned data."""
    clean_name = TextCleaner.clean_title(name)

    try:
        URLHelper.validate_url(url)
    except ValueError as e:
        raise ValueError(f"Invalid URL for chapter {order} '{clean_name}': {e}")

    return ChapterRef(name=clean_name, url=url, order=order, **kwargs)


# Export utility classes and functions
__all__ = [
    "HTMLParser",
    "URLHelper",
    "TextCleaner",
    "first_present",
    "create_search_result",
    "create_chapter_ref",
]
