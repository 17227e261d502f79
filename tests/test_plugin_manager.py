"""Tests for plugin discovery, loading and fan-out search."""

from typing import List, Optional

import pytest

from novelplux.core import PluginManager
from novelplux.core.exceptions import NetworkError, PluginError
from novelplux.core.models import NovelDetail, SearchResult
from novelplux.plugins.base import BasePlugin, PluginMetadata
from novelplux.plugins.skynovels import SkyNovelsPlugin


class FakePlugin(BasePlugin):
    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(name="Fake")

    @property
    def base_url(self) -> str:
        return "https://fake.example.com"

    async def search(self, query: str) -> List[SearchResult]:
        return [SearchResult(title=f"{query} novel", url="https://fake.example.com/n/1", source="fake")]

    async def load(self, url: str) -> Optional[NovelDetail]:
        return None

    async def load_html(self, url: str) -> Optional[str]:
        return "<p>fake</p>"


class FailingPlugin(FakePlugin):
    @property
    def base_url(self) -> str:
        return "https://failing.example.com"

    async def search(self, query: str) -> List[SearchResult]:
        raise NetworkError("HTTP 500", status_code=500)

    async def load(self, url: str) -> Optional[NovelDetail]:
        raise PluginError("broken", plugin_name="failing")


@pytest.fixture
def manager(config_manager):
    config_manager.disable_source("skynovels")
    config_manager.update_source_config("fake", {"enabled": True, "priority": 2})
    config_manager.update_source_config("failing", {"enabled": True, "priority": 3})

    plugin_manager = PluginManager(config_manager)
    plugin_manager.discover_plugins()
    plugin_manager.register_plugin("fake", FakePlugin)
    plugin_manager.register_plugin("failing", FailingPlugin)
    return plugin_manager


class TestDiscovery:
    def test_discovers_skynovels(self, config_manager):
        plugin_manager = PluginManager(config_manager)
        plugin_manager.discover_plugins()
        assert plugin_manager.available_plugins["skynovels"] is SkyNovelsPlugin

    def test_missing_plugins_dir(self, config_manager, tmp_path):
        plugin_manager = PluginManager(config_manager, plugins_dir=tmp_path / "nope")
        plugin_manager.discover_plugins()
        assert plugin_manager.available_plugins == {}

    @pytest.mark.asyncio
    async def test_load_plugin_uses_source_config(self, config_manager):
        config_manager.update_source_config("skynovels", {"config": {"timeout": 12}})
        plugin_manager = PluginManager(config_manager)

        plugin = await plugin_manager.load_plugin("skynovels")

        assert isinstance(plugin, SkyNovelsPlugin)
        assert plugin.timeout == 12
        assert await plugin_manager.load_plugin("skynovels") is plugin

    @pytest.mark.asyncio
    async def test_unknown_plugin(self, config_manager):
        plugin_manager = PluginManager(config_manager)
        assert await plugin_manager.load_plugin("nope") is None
        with pytest.raises(PluginError):
            await plugin_manager.get_plugin("nope")


class TestActivePlugins:
    @pytest.mark.asyncio
    async def test_only_enabled_sources_by_priority(self, manager):
        active = await manager.get_active_plugins()
        assert list(active) == ["fake", "failing"]

    @pytest.mark.asyncio
    async def test_find_plugin_for_url(self, manager):
        name, plugin = await manager.find_plugin_for_url("https://fake.example.com/n/1")
        assert name == "fake"
        assert isinstance(plugin, FakePlugin)

    @pytest.mark.asyncio
    async def test_find_plugin_for_unknown_url(self, manager):
        assert await manager.find_plugin_for_url("https://elsewhere.example.com/x") is None
        assert await manager.find_plugin_for_url("not a url") is None


class TestOperations:
    @pytest.mark.asyncio
    async def test_search_all_isolates_failures(self, manager):
        results = await manager.search_all("espada")

        assert [r.title for r in results["fake"]] == ["espada novel"]
        assert results["failing"] == []
        assert "HTTP 500" in manager.get_plugin_status()["plugins"]["failing"]["error"]

    @pytest.mark.asyncio
    async def test_search_all_without_plugins(self, config_manager):
        config_manager.disable_source("skynovels")
        plugin_manager = PluginManager(config_manager)
        assert await plugin_manager.search_all("espada") == {}

    @pytest.mark.asyncio
    async def test_load_chapter_html(self, manager):
        assert await manager.load_chapter_html("fake", "https://fake.example.com/c/1") == "<p>fake</p>"

    @pytest.mark.asyncio
    async def test_load_novel_error_recorded(self, manager):
        with pytest.raises(PluginError):
            await manager.load_novel("failing", "https://failing.example.com/n/1")
        assert manager.get_plugin_status()["plugins"]["failing"]["error"] == "broken"

    @pytest.mark.asyncio
    async def test_cleanup_unloads_plugins(self, manager):
        await manager.get_active_plugins()
        await manager.cleanup()
        assert manager.get_plugin_status()["loaded"] == 0
