"""Tests for the SkyNovels plugin operations."""

import json

import pytest
from unittest.mock import AsyncMock, patch

from novelplux.core.exceptions import NetworkError, ParseError, PluginError
from novelplux.core.models import NovelStatus
from novelplux.plugins.skynovels import SkyNovelsPlugin


NOVEL_URL = "https://www.skynovels.net/novelas/123/la-espada-errante"
CHAPTER_URL = "https://www.skynovels.net/novelas/123/la-espada-errante/1001/el-comienzo"


class TestConfiguration:
    def test_defaults(self):
        plugin = SkyNovelsPlugin()
        assert plugin.base_url == "https://www.skynovels.net"
        assert plugin.timeout == 30
        assert plugin.max_retries == 0
        assert plugin.metadata.has_main_page is False

    def test_user_values_merged(self):
        plugin = SkyNovelsPlugin({"timeout": 10, "base_url": "https://mirror.example.com/"})
        assert plugin.timeout == 10
        assert plugin.base_url == "https://mirror.example.com"

    def test_invalid_values_fall_back_to_defaults(self):
        plugin = SkyNovelsPlugin({"timeout": 1})
        assert plugin.timeout == 30

    def test_no_session_until_first_request(self):
        plugin = SkyNovelsPlugin()
        assert plugin._session is None


class TestSearch:
    @pytest.mark.asyncio
    async def test_returns_results(self, plugin, novels_body):
        plugin.api.fetch_text.return_value = novels_body
        results = await plugin.search("espada")

        assert len(results) == 1
        assert results[0].url == NOVEL_URL
        assert results[0].rating == 900

    @pytest.mark.asyncio
    async def test_skips_records_without_title_or_slug(self, plugin, novel_record):
        plugin.api.fetch_text.return_value = json.dumps({"novels": [
            novel_record,
            {"id": 2, "nvl_title": None, "nvl_name": "sin-titulo"},
            {"id": 3, "nvl_title": "Sin slug"},
        ]})
        results = await plugin.search("espada")
        assert [r.title for r in results] == ["La Espada Errante"]

    @pytest.mark.asyncio
    async def test_query_is_stripped(self, plugin):
        plugin.api.fetch_text.return_value = '{"novels": []}'
        await plugin.search("  espada  ")
        assert plugin.api.fetch_text.await_args.args[0].endswith("/novels?search=espada")

    @pytest.mark.asyncio
    async def test_empty_query(self, plugin):
        with pytest.raises(PluginError):
            await plugin.search("   ")

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self, plugin):
        plugin.api.fetch_text.return_value = "<html>oops</html>"
        with pytest.raises(ParseError):
            await plugin.search("espada")

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, plugin):
        plugin.api.fetch_text.side_effect = RuntimeError("boom")
        with pytest.raises(PluginError) as exc_info:
            await plugin.search("espada")
        assert exc_info.value.plugin_name == "skynovels"


class TestLoad:
    @pytest.mark.asyncio
    async def test_loads_novel_with_chapters(self, plugin, router, novels_body, chapters_body):
        plugin.api.fetch_text.side_effect = router({
            "novels?id=123": novels_body,
            "limit=5000": chapters_body,
        })
        detail = await plugin.load(NOVEL_URL)

        assert detail.id == 123
        assert detail.status is NovelStatus.ONGOING
        assert [c.name for c in detail.chapters] == ["El comienzo", "El viaje"]
        assert detail.chapters[0].url == CHAPTER_URL
        assert detail.chapters[0].order == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_second_endpoint(self, plugin, router, novels_body, chapters_body):
        plugin.api.fetch_text.side_effect = router({
            "novels?id=123": novels_body,
            "limit=5000": '{"error": "El servidor no responde"}',
            "chapters?page=1": chapters_body,
        })
        detail = await plugin.load(NOVEL_URL)
        assert detail.chapter_count == 2

    @pytest.mark.asyncio
    async def test_all_chapter_endpoints_failing_gives_empty_chapters(self, plugin, router, novels_body):
        plugin.api.fetch_text.side_effect = router({
            "novels?id=123": novels_body,
            "limit=5000": '{"error": "El servidor no responde"}',
            "chapters?page=1": NetworkError("HTTP 500", status_code=500),
        })
        detail = await plugin.load(NOVEL_URL)

        assert detail is not None
        assert detail.chapters == []

    @pytest.mark.asyncio
    async def test_undecodable_chapter_bodies_give_empty_chapters(self, plugin, router, novels_body):
        bad_bytes = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        plugin.api.fetch_text.side_effect = router({
            "novels?id=123": novels_body,
            "limit=5000": bad_bytes,
            "chapters?page=1": bad_bytes,
        })
        detail = await plugin.load(NOVEL_URL)

        assert detail.id == 123
        assert detail.chapters == []

    @pytest.mark.asyncio
    async def test_chapter_mapping_failure_gives_empty_chapters(self, plugin, router, novels_body, chapters_body):
        plugin.api.fetch_text.side_effect = router({
            "novels?id=123": novels_body,
            "limit=5000": chapters_body,
        })
        with patch.object(plugin.parser, "parse_chapters", side_effect=RuntimeError("mapping")):
            detail = await plugin.load(NOVEL_URL)

        assert detail.title == "La Espada Errante"
        assert detail.chapters == []

    @pytest.mark.asyncio
    async def test_skipped_chapter_keeps_later_positions(self, plugin, router, novels_body):
        body = json.dumps({"chapters": [
            {"id": 1, "title": "A"},
            {"id": "not-a-number", "title": "B"},
            {"id": 3},
        ]})
        plugin.api.fetch_text.side_effect = router({
            "novels?id=123": novels_body,
            "limit=5000": body,
        })
        detail = await plugin.load(NOVEL_URL)

        assert [(c.order, c.name) for c in detail.chapters] == [(1, "A"), (3, "Capítulo 3")]
        assert detail.chapters[1].url == f"{NOVEL_URL}/3/capitulo-3"

    @pytest.mark.asyncio
    async def test_url_without_id(self, plugin):
        assert await plugin.load("https://www.skynovels.net/explorar") is None
        plugin.api.fetch_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_novel(self, plugin):
        plugin.api.fetch_text.return_value = '{"novels": []}'
        assert await plugin.load(NOVEL_URL) is None
        assert plugin.api.fetch_text.await_count == 1

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self, plugin):
        plugin.api.fetch_text.side_effect = NetworkError("HTTP 503", status_code=503)
        with pytest.raises(NetworkError):
            await plugin.load(NOVEL_URL)


class TestLoadHtml:
    @pytest.mark.asyncio
    async def test_extracts_content(self, plugin, chapter_page):
        plugin.api.fetch_text.return_value = chapter_page
        html = await plugin.load_html(CHAPTER_URL)

        assert "Primer párrafo." in html
        plugin.api.fetch_text.assert_awaited_once_with(
            CHAPTER_URL, headers={"referer": "https://www.skynovels.net"}
        )

    @pytest.mark.asyncio
    async def test_no_selector_matches(self, plugin):
        plugin.api.fetch_text.return_value = "<html><body><app-root></app-root></body></html>"
        assert await plugin.load_html(CHAPTER_URL) is None

    @pytest.mark.asyncio
    async def test_empty_url(self, plugin):
        with pytest.raises(PluginError):
            await plugin.load_html("")


class TestConnection:
    @pytest.mark.asyncio
    async def test_validate_connection(self, plugin):
        plugin.api.fetch_text.return_value = '{"novels": []}'
        assert await plugin.validate_connection() is True

    @pytest.mark.asyncio
    async def test_validate_connection_failure(self, plugin):
        plugin.api.fetch_text.side_effect = NetworkError("down")
        assert await plugin.validate_connection() is False

    @pytest.mark.asyncio
    async def test_cleanup_without_session(self):
        plugin = SkyNovelsPlugin()
        await plugin.cleanup()
        assert plugin._session is None


class TestBaseRequest:
    @pytest.mark.asyncio
    async def test_http_error_raises_network_error(self):
        plugin = SkyNovelsPlugin()

        response = AsyncMock()
        response.status = 404
        response.text.return_value = "Not Found"
        context = AsyncMock()
        context.__aenter__.return_value = response

        session = AsyncMock()
        session.closed = False
        session.request = lambda *args, **kwargs: context
        plugin._session = session

        with pytest.raises(NetworkError) as exc_info:
            await plugin._get_text("https://www.skynovels.net/novelas/1/x")
        assert exc_info.value.status_code == 404
