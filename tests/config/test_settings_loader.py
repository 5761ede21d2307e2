"""
Tests for config/settings_loader.py - cached YAML access.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from config import settings_loader


def _use_config(tmp_path, monkeypatch, text: str) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    monkeypatch.setenv("STREAKS_CONFIG_PATH", str(path))
    settings_loader.load_settings(force_reload=True)


class TestLoadSettings:
    """Tests for loading and caching."""

    def test_default_path(self):
        assert settings_loader.get_config_path().name == "base.yaml"

    def test_cached(self):
        first = settings_loader.load_settings()
        assert settings_loader.load_settings() is first

    def test_missing_file_gives_empty(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STREAKS_CONFIG_PATH", str(tmp_path / "nope.yaml"))
        assert settings_loader.load_settings(force_reload=True) == {}
        # Accessors fall back to built-in defaults
        assert settings_loader.get_pct_change_field() == "pct_change"
        assert settings_loader.get_stats_decimals() == 4


    def test_explicit_path(self, tmp_path):
        path = tmp_path / "explicit.yaml"
        path.write_text("report:\n  title: Explicit\n", encoding="utf-8")

        settings_loader.load_settings(path=path)

        assert settings_loader.get_report_config()["title"] == "Explicit"
        # The environment is left alone
        assert "STREAKS_CONFIG_PATH" not in os.environ

        settings_loader.load_settings(force_reload=True)
        assert settings_loader.get_report_config()["title"] == "Streak Analysis Report"


class TestGetSetting:
    """Tests for dot-path lookup."""

    def test_nested(self):
        assert settings_loader.get_setting("analysis.close_field") == "close"

    def test_missing_returns_default(self):
        assert settings_loader.get_setting("analysis.nope", "x") == "x"
        assert settings_loader.get_setting("stats.display_decimals.deeper", 7) == 7


class TestAccessors:
    """Tests for the typed accessors."""

    def test_base_values(self):
        assert settings_loader.get_open_field() == "open"
        assert settings_loader.get_default_close_field() == "Close"
        assert settings_loader.get_date_keywords() == ["date", "time"]
        assert settings_loader.get_numeric_detection_config() == {"sample_size": 10, "min_ratio": 0.8}
        assert settings_loader.get_report_config()["title"] == "Streak Analysis Report"
        assert settings_loader.get_log_level() == "INFO"

    def test_overrides(self, tmp_path, monkeypatch):
        _use_config(
            tmp_path, monkeypatch,
            "analysis:\n  pct_change_field: chg\n  date_keywords: [Day]\n"
            "logging:\n  level: debug\n",
        )
        assert settings_loader.get_pct_change_field() == "chg"
        assert settings_loader.get_date_keywords() == ["day"]
        assert settings_loader.get_log_level() == "DEBUG"
