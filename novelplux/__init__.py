"""
NovelPlux - Novel reader with pluggable content sources.

A command-line tool for searching novels, browsing their chapter lists and
reading chapters from various sources, built on Typer and Rich.
"""

__version__ = "0.1.0"
__author__ = "NovelPlux Team"

# Package metadata
__title__ = "novelplux"
__description__ = "Novel reader with pluggable content sources"
__license__ = "MIT"

from novelplux.core.models import SearchResult, NovelDetail, ChapterRef, NovelStatus

__all__ = [
    "__version__",
    "__author__",
    "SearchResult",
    "NovelDetail",
    "ChapterRef",
    "NovelStatus",
]
