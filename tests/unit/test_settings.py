"""
Unit tests for settings persistence.
"""

import json
import logging

import pytest

from ddfloppy.core import BlockStatus
from ddfloppy.core.settings import (
    Settings,
    StatusColors,
    LoggingSettings,
    get_settings_dir,
    get_settings_file,
)


@pytest.fixture
def settings_dir(tmp_path, monkeypatch):
    """Point the settings directory at a temporary location."""
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    Settings.reset_instance()
    yield tmp_path / "ddfloppy"
    Settings.reset_instance()


class TestPaths:
    """Test settings file locations."""

    def test_xdg_config_home(self, settings_dir):
        assert get_settings_dir() == settings_dir
        assert get_settings_file() == settings_dir / "settings.json"


class TestDefaults:
    """Test default values."""

    def test_status_colors(self):
        colors = StatusColors()

        assert colors.color_for(BlockStatus.NON_TRIED) == "#808080"
        assert colors.color_for(BlockStatus.NON_TRIMMED) == "#f0f000"
        assert colors.color_for(BlockStatus.NON_SCRAPED) == "#0000f0"
        assert colors.color_for(BlockStatus.BAD_SECTOR) == "#f00000"
        assert colors.color_for(BlockStatus.FINISHED) == "#00f000"

    def test_log_level(self):
        assert LoggingSettings().get_log_level() == logging.DEBUG
        assert LoggingSettings(log_level="warning").get_log_level() == logging.WARNING
        assert LoggingSettings(log_level="bogus").get_log_level() == logging.DEBUG

    def test_log_file_default(self, settings_dir):
        assert LoggingSettings().get_log_file() == settings_dir / "ddfloppy.log"
        assert str(LoggingSettings(log_file="/tmp/x.log").get_log_file()) == "/tmp/x.log"


class TestPersistence:
    """Test loading and saving settings."""

    def test_missing_file(self, settings_dir):
        settings = Settings()
        assert settings.load() is False
        assert settings.display.show_sector_lines is True

    def test_save_and_load(self, settings_dir):
        settings = Settings()
        settings.display.show_sector_lines = False
        settings.display.colors.bad_sector = "#ff00ff"
        settings.logging.log_level = "INFO"
        assert settings.save() is True

        loaded = Settings()
        assert loaded.load() is True
        assert loaded.display.show_sector_lines is False
        assert loaded.display.colors.bad_sector == "#ff00ff"
        assert loaded.display.colors.finished == "#00f000"
        assert loaded.logging.get_log_level() == logging.INFO

    def test_invalid_json(self, settings_dir):
        settings_dir.mkdir(parents=True)
        (settings_dir / "settings.json").write_text("{not json", encoding="utf-8")

        settings = Settings()
        assert settings.load() is False
        assert settings.display.window_width == 1000

    def test_unknown_and_mistyped_keys_ignored(self, settings_dir):
        settings_dir.mkdir(parents=True)
        data = {
            "display": {"window_width": "wide", "window_height": 700, "sparkles": True},
            "logging": {"log_level": "ERROR"},
            "extra": 1,
        }
        (settings_dir / "settings.json").write_text(json.dumps(data), encoding="utf-8")

        settings = Settings()
        assert settings.load() is True
        assert settings.display.window_width == 1000
        assert settings.display.window_height == 700
        assert not hasattr(settings.display, "sparkles")
        assert settings.logging.log_level == "ERROR"


class TestSingleton:
    """Test the shared settings instance."""

    def test_instance_is_shared(self, settings_dir):
        assert Settings.instance() is Settings.instance()

    def test_instance_loads_file(self, settings_dir):
        settings_dir.mkdir(parents=True)
        data = {"display": {"show_sector_lines": False}}
        (settings_dir / "settings.json").write_text(json.dumps(data), encoding="utf-8")

        assert Settings.instance().display.show_sector_lines is False

    def test_reset_instance(self, settings_dir):
        first = Settings.instance()
        Settings.reset_instance()
        assert Settings.instance() is not first
