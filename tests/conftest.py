"""Shared pytest fixtures for the novelplux test suite."""

import json

import pytest
from unittest.mock import AsyncMock


# ---------------------------------------------------------------------------
# SkyNovels API payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def novel_record():
    """Return a raw novel record as served by the /novels endpoint."""
    return {
        "id": 123,
        "nvl_title": "La Espada Errante",
        "nvl_name": "la-espada-errante",
        "nvl_writer": "Autor Ejemplo",
        "nvl_content": "<p>Un joven espadachín.</p><p>Recorre el mundo.</p>",
        "nvl_status": "Activa",
        "nvl_rating": 4.5,
        "nvl_chapters": 2,
        "image": "cover.jpg",
        "genres": [{"genre_name": "Acción"}, {"genre_name": "Fantasía"}],
    }


@pytest.fixture
def novels_body(novel_record):
    """Return a /novels envelope holding one novel."""
    return json.dumps({"novels": [novel_record]})


@pytest.fixture
def chapters_body():
    """Return a /chapters envelope with two chapters."""
    return json.dumps({
        "chapters": [
            {"id": 1001, "chp_title": "El comienzo", "slug": "el-comienzo", "updated_at": "2023-01-02T00:00:00Z"},
            {"id": 1002, "chp_title": "El viaje", "slug": "el-viaje", "updated_at": "2023-01-09T00:00:00Z"},
        ]
    })


@pytest.fixture
def chapter_page():
    """Return a server-rendered chapter page."""
    return (
        "<html><body><div class='skn-chp-chapter'>"
        "<div class='skn-chp-chapter-content'><p>Primer párrafo.</p><p>Segundo párrafo.</p></div>"
        "</div></body></html>"
    )


# ---------------------------------------------------------------------------
# Plugin fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plugin():
    """Return a SkyNovelsPlugin whose HTTP fetch is an AsyncMock."""
    from novelplux.plugins.skynovels import SkyNovelsPlugin
    skynovels = SkyNovelsPlugin()
    skynovels.api.fetch_text = AsyncMock()
    return skynovels


@pytest.fixture
def router():
    """Return a factory building fetch side effects that answer by URL substring.

    Fragments are matched in insertion order; exception values are raised.
    """
    def route(responses):
        async def fetch(url, **kwargs):
            for fragment, response in responses.items():
                if fragment in url:
                    if isinstance(response, Exception):
                        raise response
                    return response
            raise AssertionError(f"Unexpected request: {url}")
        return fetch
    return route


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config_manager(tmp_path):
    """Return a ConfigManager backed by a temporary directory."""
    from novelplux.core import ConfigManager
    return ConfigManager(tmp_path / "config")
