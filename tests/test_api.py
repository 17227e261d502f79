"""Tests for the SkyNovels API client and its chapter endpoint fallback."""

import asyncio
import json

import aiohttp
import pytest
from unittest.mock import AsyncMock

from novelplux.core.exceptions import NetworkError, ParseError
from novelplux.plugins.skynovels.api import SkyNovelsAPI


PRIMARY = "https://api.skynovels.net/api/novel/123/chapters?page=1&limit=5000"
SECONDARY = "https://api.skynovels.net/api/novel/123/chapters?page=1"


@pytest.fixture
def fetch():
    return AsyncMock()


@pytest.fixture
def api(fetch):
    return SkyNovelsAPI(fetch)


class TestUrls:
    def test_search_url_quotes_query(self, api):
        assert api.search_url("la espada") == "https://api.skynovels.net/api/novels?search=la+espada"

    def test_novel_url(self, api):
        assert api.novel_url(123) == "https://api.skynovels.net/api/novels?id=123"

    def test_chapter_urls_in_order(self, api):
        assert api.chapter_urls(123) == [PRIMARY, SECONDARY]


class TestRequests:
    @pytest.mark.asyncio
    async def test_referer_header_sent(self, api, fetch):
        fetch.return_value = '{"novels": []}'
        await api.search_novels("espada")
        fetch.assert_awaited_once_with(
            "https://api.skynovels.net/api/novels?search=espada",
            headers={"referer": "https://www.skynovels.net"},
        )

    @pytest.mark.asyncio
    async def test_search_decode_error_carries_url(self, api, fetch):
        fetch.return_value = "not json"
        with pytest.raises(ParseError) as exc_info:
            await api.search_novels("espada")
        assert exc_info.value.url == "https://api.skynovels.net/api/novels?search=espada"

    @pytest.mark.asyncio
    async def test_get_novel_returns_first_record(self, api, fetch, novels_body):
        fetch.return_value = novels_body
        record = await api.get_novel(123)
        assert record.id == 123

    @pytest.mark.asyncio
    async def test_get_novel_empty_envelope(self, api, fetch):
        fetch.return_value = '{"novels": []}'
        assert await api.get_novel(123) is None

    @pytest.mark.asyncio
    async def test_get_novel_network_error_propagates(self, api, fetch):
        fetch.side_effect = NetworkError("HTTP 500", status_code=500)
        with pytest.raises(NetworkError):
            await api.get_novel(123)


class TestChapterFallback:
    @pytest.mark.asyncio
    async def test_primary_success(self, api, fetch, chapters_body):
        fetch.return_value = chapters_body
        records = await api.get_chapters(123)
        assert len(records) == 2
        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_server_not_responding_marker(self, api, fetch, chapters_body):
        fetch.side_effect = ['{"message": "El servidor no responde"}', chapters_body]
        records = await api.get_chapters(123)

        assert len(records) == 2
        assert [c.args[0] for c in fetch.await_args_list] == [PRIMARY, SECONDARY]

    @pytest.mark.asyncio
    async def test_marker_is_case_insensitive(self, api, fetch, chapters_body):
        fetch.side_effect = ["<pre>cannot get /api/novel/123/chapters</pre>", chapters_body]
        assert len(await api.get_chapters(123)) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        NetworkError("HTTP 502", status_code=502),
        aiohttp.ClientError("reset"),
        asyncio.TimeoutError(),
        UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
        RuntimeError("unexpected"),
    ])
    async def test_request_failure_falls_back(self, api, fetch, chapters_body, error):
        fetch.side_effect = [error, chapters_body]
        assert len(await api.get_chapters(123)) == 2

    @pytest.mark.asyncio
    async def test_empty_list_falls_back(self, api, fetch, chapters_body):
        fetch.side_effect = ['{"chapters": []}', chapters_body]
        assert len(await api.get_chapters(123)) == 2

    @pytest.mark.asyncio
    async def test_undecodable_body_falls_back(self, api, fetch, chapters_body):
        fetch.side_effect = ["<html></html>", chapters_body]
        assert len(await api.get_chapters(123)) == 2

    @pytest.mark.asyncio
    async def test_all_candidates_fail(self, api, fetch):
        fetch.side_effect = ['{"message": "El servidor no responde"}', NetworkError("HTTP 500", status_code=500)]
        assert await api.get_chapters(123) == []
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_any_error_on_every_candidate_gives_empty_list(self, api, fetch):
        fetch.side_effect = [
            UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
            KeyError("chapters"),
        ]
        assert await api.get_chapters(123) == []
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_custom_endpoints(self, fetch, chapters_body):
        api = SkyNovelsAPI(fetch, chapter_endpoints=["{api}/v2/chapters/{novel_id}"])
        fetch.return_value = chapters_body
        await api.get_chapters(7)
        assert fetch.await_args.args[0] == "https://api.skynovels.net/api/v2/chapters/7"


class TestFailureMarkers:
    def test_no_marker(self, api):
        assert api.find_failure_marker(json.dumps({"chapters": []})) is None

    def test_marker_found(self, api):
        assert api.find_failure_marker("Error: El servidor no responde") == "El servidor no responde"
