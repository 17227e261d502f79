"""
Core Data Models - Pydantic models for type safety and validation.

This module defines the core data structures returned by source plugins:
search results, chapter references and full novel details. All models are
plain transfer objects created per request and handed back to the caller.
"""

from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class NovelStatus(str, Enum):
    """Publication status of a novel."""

    ONGOING = "ongoing"
    COMPLETED = "completed"
    PAUSED = "paused"
    DROPPED = "dropped"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "NovelStatus":
        """
        Map a free-form status label to a NovelStatus.

        Sources report status in their own words (and languages), so the
        label is matched against known keywords case-insensitively.
        """
        if not label:
            return cls.UNKNOWN

        text = label.strip().lower()
        for status, keywords in _STATUS_KEYWORDS.items():
            if any(keyword in text for keyword in keywords):
                return status

        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


# Checked in order, first match wins
_STATUS_KEYWORDS = {
    NovelStatus.COMPLETED: ("finaliz", "complet", "terminad", "finished", "ended"),
    NovelStatus.DROPPED: ("cancelad", "abandonad", "dropped", "cancelled", "canceled"),
    NovelStatus.PAUSED: ("pausad", "hiatus", "paused", "en pausa"),
    NovelStatus.ONGOING: ("activ", "en curso", "emision", "emisión", "ongoing", "publicando"),
}


def _validate_http_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"URL must be an absolute http(s) URL: {value}")
    return value


class SearchResult(BaseModel):
    """
    Represents a novel search result from a plugin source.

    Contains the title, the canonical novel URL and a few display hints.
    """

    title: str = Field(..., description="Novel title")
    url: str = Field(..., description="Canonical URL of the novel page")
    source: str = Field(default="", description="Source plugin name")
    poster_url: Optional[str] = Field(None, description="Cover image URL")
    rating: int = Field(0, description="Rating on a 0-1000 scale")
    latest_chapter: Optional[str] = Field(None, description="Latest chapter label")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure title is properly formatted."""
        return v.strip()

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_http_url(v)

    def __str__(self) -> str:
        return f"{self.title} ({self.source})"

    def __repr__(self) -> str:
        return f"SearchResult(title='{self.title}', source='{self.source}')"


class ChapterRef(BaseModel):
    """A single chapter entry of a novel's table of contents."""

    name: str = Field(..., description="Chapter display name")
    url: str = Field(..., description="URL of the chapter page")
    order: int = Field(..., description="Chapter order number")
    release_date: Optional[str] = Field(None, description="Release or update date as reported by the source")

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_http_url(v)

    def __str__(self) -> str:
        return f"{self.order}. {self.name}"

    def __repr__(self) -> str:
        return f"ChapterRef(order={self.order}, name='{self.name}')"


class NovelDetail(BaseModel):
    """
    Full metadata of a novel together with its ordered chapter list.
    """

    id: int = Field(..., description="Numeric novel id on the source")
    title: str = Field(..., min_length=1, description="Novel title")
    url: str = Field(..., description="Canonical URL of the novel page")
    source: str = Field(default="", description="Source plugin name")
    slug: Optional[str] = Field(None, description="URL slug of the novel")
    author: Optional[str] = Field(None, description="Author name")
    poster_url: Optional[str] = Field(None, description="Cover image URL")
    synopsis: Optional[str] = Field(None, description="Plain text synopsis")
    status: NovelStatus = Field(NovelStatus.UNKNOWN, description="Publication status")
    tags: List[str] = Field(default_factory=list, description="Genre tags")
    rating: int = Field(0, description="Rating on a 0-1000 scale")
    chapters: List[ChapterRef] = Field(default_factory=list, description="Chapters in source order")

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_http_url(v)

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        """Drop blank tags."""
        return [tag.strip() for tag in v if tag and tag.strip()]

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    def __str__(self) -> str:
        return f"{self.title} ({self.chapter_count} chapters)"

    def __repr__(self) -> str:
        return f"NovelDetail(id={self.id}, title='{self.title}')"


def rating_from_five_scale(rating5: Optional[float]) -> int:
    """Convert a 0-5 star rating to the 0-1000 integer scale."""
    return int((rating5 or 0.0) * 200)


__all__ = [
    "NovelStatus",
    "SearchResult",
    "ChapterRef",
    "NovelDetail",
    "rating_from_five_scale",
]
