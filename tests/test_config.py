"""Tests for configuration schemas and the JSON configuration manager."""

import json

import pytest

from novelplux.core import ConfigManager
from novelplux.core.config_defaults import create_default_config_files, get_default_sources
from novelplux.core.config_schemas import LoggingSettings, SourceConfig, SourcesConfig
from novelplux.core.exceptions import ConfigurationError
from novelplux.plugins.skynovels.config import (
    SkyNovelsConfig,
    merge_with_defaults,
    validate_config,
)


class TestConfigManager:
    def test_creates_default_files(self, tmp_path):
        config_dir = tmp_path / "config"
        manager = ConfigManager(config_dir)

        assert (config_dir / "settings.json").exists()
        assert (config_dir / "sources.json").exists()
        assert manager.settings.search.min_query_length == 2
        assert "skynovels" in manager.sources.sources

    def test_corrupt_settings_backed_up(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text("{not json", encoding="utf-8")

        manager = ConfigManager(config_dir)

        assert (config_dir / "settings.json.backup").read_text(encoding="utf-8") == "{not json"
        assert manager.settings.reader.wrap_width == 100

    def test_invalid_sources_backed_up(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "sources.json").write_text(
            json.dumps({"sources": {"skynovels": {"priority": 0}}}), encoding="utf-8"
        )

        manager = ConfigManager(config_dir)

        assert (config_dir / "sources.json.backup").exists()
        assert manager.sources.get_source("skynovels").priority == 1

    def test_update_and_get_setting(self, config_manager):
        config_manager.update_setting("reader.wrap_width", 80)

        assert config_manager.get_setting("reader.wrap_width") == 80
        saved = json.loads((config_manager.config_dir / "settings.json").read_text(encoding="utf-8"))
        assert saved["reader"]["wrap_width"] == 80

    def test_get_missing_setting(self, config_manager):
        assert config_manager.get_setting("reader.nope", "fallback") == "fallback"

    def test_update_invalid_path(self, config_manager):
        with pytest.raises(ConfigurationError):
            config_manager.update_setting("reader.nope", 1)

    def test_update_invalid_value(self, config_manager):
        with pytest.raises(ConfigurationError):
            config_manager.update_setting("reader.wrap_width", 5)

    def test_enable_disable_source(self, config_manager):
        config_manager.disable_source("skynovels")
        assert config_manager.get_enabled_sources() == {}

        config_manager.enable_source("skynovels")
        assert list(config_manager.get_enabled_sources()) == ["skynovels"]

        reloaded = ConfigManager(config_manager.config_dir)
        assert reloaded.sources.get_source("skynovels").enabled is True

    def test_reset_to_defaults(self, config_manager):
        config_manager.update_setting("search.min_query_length", 5)
        config_manager.reset_to_defaults()
        assert config_manager.settings.search.min_query_length == 2

    def test_create_default_files_keeps_existing(self, tmp_path):
        (tmp_path / "settings.json").write_text('{"reader": {"wrap_width": 60}}', encoding="utf-8")
        create_default_config_files(tmp_path)

        assert json.loads((tmp_path / "settings.json").read_text(encoding="utf-8")) == {"reader": {"wrap_width": 60}}
        assert (tmp_path / "sources.json").exists()


class TestSchemas:
    def test_logging_level_upper_cased(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_enabled_sources_sorted_by_priority(self):
        sources = SourcesConfig(sources={
            "b": SourceConfig(enabled=True, priority=2),
            "a": SourceConfig(enabled=True, priority=1),
            "c": SourceConfig(enabled=False, priority=3),
        })
        assert list(sources.get_enabled_sources()) == ["a", "b"]

    def test_source_config_rejects_bad_timeout(self):
        with pytest.raises(ValueError):
            SourceConfig(config={"timeout": 0})

    def test_default_sources(self):
        skynovels = get_default_sources().get_source("skynovels")
        assert skynovels.enabled is True
        assert skynovels.config["api_base_url"] == "https://api.skynovels.net/api"


class TestSkyNovelsConfig:
    def test_defaults(self):
        config = SkyNovelsConfig()
        assert config.max_retries == 0
        assert config.chapter_endpoints[0].endswith("chapters?page=1&limit=5000")
        assert config.failure_markers == ["El servidor no responde", "Cannot GET"]

    def test_endpoint_needs_novel_id(self):
        with pytest.raises(ValueError):
            SkyNovelsConfig(chapter_endpoints=["{api}/chapters"])

    def test_content_selectors_required(self):
        with pytest.raises(ValueError):
            SkyNovelsConfig(content_selectors=[])

    def test_url_must_be_http(self):
        with pytest.raises(ValueError):
            SkyNovelsConfig(api_base_url="ftp://api.example.com")

    def test_validate_config_message(self):
        with pytest.raises(ValueError, match="Invalid SkyNovels configuration"):
            validate_config({"timeout": 2})

    def test_merge_with_defaults(self):
        merged = merge_with_defaults({"rate_limit": 1.5})
        assert merged["rate_limit"] == 1.5
        assert merged["timeout"] == 30
