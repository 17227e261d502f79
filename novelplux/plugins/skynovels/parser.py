"""
SkyNovels Data Parser

This module decodes SkyNovels API envelopes into typed records and maps them
to the core transfer models. It also extracts chapter content from rendered
chapter pages.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from novelplux.core.exceptions import ParseError
from novelplux.core.models import ChapterRef, NovelDetail, NovelStatus, SearchResult, rating_from_five_scale
from novelplux.plugins.common import HTMLParser, TextCleaner, create_chapter_ref, create_search_result, first_present

from .config import DEFAULT_API_BASE_URL, DEFAULT_BASE_URL, DEFAULT_CONTENT_SELECTORS


logger = logging.getLogger(__name__)


NOVEL_ID_PATTERN = re.compile(r"/novelas/(\d+)/")

# Display name and slug fallback chains for chapter records
CHAPTER_NAME_FIELDS = ("title", "chp_title", "name", "slug")
CHAPTER_SLUG_FIELDS = ("slug", "name")


class GenreRecord(BaseModel):
    """Genre entry of a novel record."""

    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    name: Optional[str] = Field(None, alias="genre_name")


class NovelRecord(BaseModel):
    """A novel as returned by the ``/novels`` endpoint."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True, coerce_numbers_to_str=True)

    id: int
    title: Optional[str] = Field(None, alias="nvl_title")
    slug: Optional[str] = Field(None, alias="nvl_name")
    writer: Optional[str] = Field(None, alias="nvl_writer")
    content: Optional[str] = Field(None, alias="nvl_content")
    status: Optional[str] = Field(None, alias="nvl_status")
    rating5: Optional[float] = Field(None, alias="nvl_rating")
    image: Optional[str] = None
    genres: List[GenreRecord] = Field(default_factory=list)
    chapters_count: Optional[int] = Field(None, alias="nvl_chapters")

    @field_validator('genres', mode='before')
    @classmethod
    def null_genres(cls, v: Any) -> Any:
        return [] if v is None else v


class ChapterRecord(BaseModel):
    """A chapter as returned by the ``/novel/<id>/chapters`` endpoint."""

    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    id: Optional[int] = None
    order: Optional[int] = None
    title: Optional[str] = None
    chp_title: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    updated_at: Optional[str] = None

    # 1-indexed slot in the raw list, set by decode_chapters
    position: Optional[int] = Field(None, exclude=True)


def parse_id_from_url(url: str) -> Optional[int]:
    """
    Extract the numeric novel id from a ``/novelas/<id>/<slug>`` URL.

    Returns:
        The id, or None if the URL does not carry one
    """
    match = NOVEL_ID_PATTERN.search(str(url))
    if match is None:
        return None
    return int(match.group(1))


def decode_envelope(text: str, key: str) -> List[Dict[str, Any]]:
    """
    Decode a JSON envelope and return the raw list stored under ``key``.

    A missing or null list decodes as empty.

    Raises:
        ParseError: If the body is not a JSON object or the list is malformed
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Response is not valid JSON: {e}", details=text[:200] if text else text)

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object with '{key}', got {type(data).__name__}")

    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ParseError(f"Expected '{key}' to be a list, got {type(items).__name__}")

    return items


def decode_novels(text: str) -> List[NovelRecord]:
    """Decode a ``novels`` envelope, skipping records that fail validation."""
    records = []
    for raw in decode_envelope(text, "novels"):
        try:
            records.append(NovelRecord.model_validate(raw))
        except ValidationError as e:
            logger.debug(f"Skipping malformed novel record: {e}")
    return records


def decode_chapters(text: str) -> List[ChapterRecord]:
    """
    Decode a ``chapters`` envelope, skipping records that fail validation.

    Each kept record remembers its position in the raw list, so skipped
    records do not shift the numbering of the ones after them.
    """
    records = []
    for position, raw in enumerate(decode_envelope(text, "chapters"), 1):
        try:
            record = ChapterRecord.model_validate(raw)
        except ValidationError as e:
            logger.debug(f"Skipping malformed chapter record at position {position}: {e}")
            continue
        record.position = position
        records.append(record)
    return records


class SkyNovelsParser:
    """Maps SkyNovels records to core models."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_base_url: str = DEFAULT_API_BASE_URL,
        source: str = "skynovels",
    ):
        """
        Initialize parser.

        Args:
            base_url: Site URL used to build novel and chapter URLs
            api_base_url: API URL used to build poster URLs
            source: Source name stamped on the produced models
        """
        self.base_url = base_url.rstrip('/')
        self.api_base_url = api_base_url.rstrip('/')
        self.source = source

    def build_poster(self, image: Optional[str], is_chapter: bool = False) -> Optional[str]:
        """Build the image URL for a cover or chapter image file name."""
        if not image or not image.strip():
            return None
        variant = "true" if is_chapter else "false"
        return f"{self.api_base_url}/get-image/{image}/novels/{variant}"

    def novel_url(self, novel_id: int, slug: Optional[str]) -> str:
        return f"{self.base_url}/novelas/{novel_id}/{slug or ''}"

    def to_search_result(self, record: NovelRecord) -> Optional[SearchResult]:
        """
        Convert a novel record to a search result.

        Returns:
            The result, or None when the record lacks a title or slug
        """
        if record.title is None or record.slug is None:
            logger.debug(f"Skipping novel {record.id} without title or slug")
            return None

        latest_chapter = None
        if record.chapters_count is not None:
            latest_chapter = f"Capítulos: {record.chapters_count}"

        return create_search_result(
            title=record.title,
            url=self.novel_url(record.id, record.slug),
            source=self.source,
            poster_url=self.build_poster(record.image),
            rating=rating_from_five_scale(record.rating5),
            latest_chapter=latest_chapter,
        )

    def parse_search_results(self, records: List[NovelRecord]) -> List[SearchResult]:
        """Convert novel records to search results, dropping unusable ones."""
        results = []
        for record in records:
            try:
                result = self.to_search_result(record)
            except ValueError as e:
                logger.warning(f"Failed to create SearchResult for novel {record.id}: {e}")
                continue
            if result is not None:
                results.append(result)
        return results

    def to_chapter_ref(
        self,
        record: ChapterRecord,
        position: int,
        novel_id: int,
        novel_slug: Optional[str],
    ) -> ChapterRef:
        """
        Convert a chapter record to a chapter reference.

        Args:
            record: Chapter record
            position: 1-indexed position in the chapter list, used when the
                record carries neither an explicit order nor a decoded position
            novel_id: Id of the owning novel
            novel_slug: Slug of the owning novel
        """
        if record.position is not None:
            position = record.position
        order = record.order if record.order is not None else position
        fields = record.model_dump()

        name = first_present(fields, CHAPTER_NAME_FIELDS, default=f"Capítulo {order}")
        slug = first_present(fields, CHAPTER_SLUG_FIELDS, default=f"capitulo-{order}")
        chapter_id = record.id if record.id is not None else 0

        return create_chapter_ref(
            name=name,
            url=f"{self.novel_url(novel_id, novel_slug)}/{chapter_id}/{slug}",
            order=order,
            release_date=record.updated_at,
        )

    def parse_chapters(
        self,
        records: List[ChapterRecord],
        novel_id: int,
        novel_slug: Optional[str],
    ) -> List[ChapterRef]:
        """Convert chapter records to chapter references, keeping API order."""
        chapters = []
        for position, record in enumerate(records, 1):
            try:
                chapters.append(self.to_chapter_ref(record, position, novel_id, novel_slug))
            except ValueError as e:
                logger.warning(f"Failed to create chapter at position {position}: {e}")
        return chapters

    def to_novel_detail(self, record: NovelRecord, chapters: List[ChapterRef]) -> NovelDetail:
        """Assemble the full novel detail from a novel record and its chapters."""
        title = record.title or record.slug or f"Novel {record.id}"

        return NovelDetail(
            id=record.id,
            title=title,
            url=self.novel_url(record.id, record.slug),
            source=self.source,
            slug=record.slug,
            author=record.writer,
            poster_url=self.build_poster(record.image),
            synopsis=TextCleaner.html_to_text(record.content),
            status=NovelStatus.from_label(record.status),
            tags=[genre.name for genre in record.genres if genre.name is not None],
            rating=rating_from_five_scale(record.rating5),
            chapters=chapters,
        )

    @staticmethod
    def extract_chapter_html(html: str, selectors: Optional[List[str]] = None) -> Optional[str]:
        """
        Extract the chapter content container from a chapter page.

        The first selector that matches an element wins, even when that
        element turns out to be empty.

        Returns:
            Normalized inner HTML of the container, or None when no selector
            matches or the content is blank
        """
        parser = HTMLParser(html)
        selector, element = parser.select_first(selectors or DEFAULT_CONTENT_SELECTORS)

        if element is None:
            logger.debug("No chapter content container found")
            return None

        content = HTMLParser.inner_html(element)
        if not content.strip():
            logger.debug(f"Chapter content container '{selector}' is empty")
            return None

        return HTMLParser.normalize_html(content)


__all__ = [
    "GenreRecord",
    "NovelRecord",
    "ChapterRecord",
    "CHAPTER_NAME_FIELDS",
    "CHAPTER_SLUG_FIELDS",
    "parse_id_from_url",
    "decode_envelope",
    "decode_novels",
    "decode_chapters",
    "SkyNovelsParser",
]
