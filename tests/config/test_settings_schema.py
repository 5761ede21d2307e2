"""
Tests for config/settings_schema.py - Typed config validation.
"""
from __future__ import annotations

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from config.settings_schema import (
    load_validated_settings,
    Settings,
    AnalysisConfig,
    LoggingConfig,
)
from core.exceptions import MissingConfigError, SettingsValidationError


class TestLoadValidatedSettings:
    """Tests for loading and validating settings."""

    def test_loads_base_yaml(self):
        """The shipped base.yaml validates."""
        settings = load_validated_settings()
        assert settings.analysis.pct_change_field == "pct_change"
        assert settings.stats.display_decimals == 4
        assert settings.report.max_streak_rows == 50
        assert settings.logging.level == "INFO"

    def test_loads_custom_settings(self, tmp_path):
        """Loads settings from an explicit YAML path."""
        path = tmp_path / "custom.yaml"
        path.write_text(
            "stats:\n  display_decimals: 2\nreport:\n  title: Custom\n",
            encoding="utf-8",
        )
        settings = load_validated_settings(path)
        assert settings.stats.display_decimals == 2
        assert settings.report.title == "Custom"
        # Unspecified sections fall back to defaults
        assert settings.analysis.close_field == "close"

    def test_env_path_is_used(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("report:\n  price_decimals: 4\n", encoding="utf-8")
        monkeypatch.setenv("STREAKS_CONFIG_PATH", str(path))

        assert load_validated_settings().report.price_decimals == 4

    def test_missing_env_path_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STREAKS_CONFIG_PATH", str(tmp_path / "nope.yaml"))

        settings = load_validated_settings()
        assert settings == Settings()

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(MissingConfigError) as exc_info:
            load_validated_settings(tmp_path / "nope.yaml")
        assert "nope.yaml" in exc_info.value.context["path"]

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("stats:\n  display_decimals: -1\n", encoding="utf-8")

        with pytest.raises(SettingsValidationError) as exc_info:
            load_validated_settings(path)
        assert exc_info.value.cause is not None
        assert exc_info.value.context["errors"] >= 1

    def test_malformed_yaml_raises(self, tmp_path):
        import yaml

        path = tmp_path / "broken.yaml"
        path.write_text("report: [unclosed\n", encoding="utf-8")

        with pytest.raises(SettingsValidationError) as exc_info:
            load_validated_settings(path)
        assert isinstance(exc_info.value.cause, yaml.YAMLError)
        assert exc_info.value.context["path"] == str(path)

    def test_non_mapping_root_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SettingsValidationError):
            load_validated_settings(path)

    def test_extra_sections_allowed(self, tmp_path):
        path = tmp_path / "extra.yaml"
        path.write_text("custom_section:\n  foo: 1\n", encoding="utf-8")

        settings = load_validated_settings(path)
        assert settings.stats.display_decimals == 4


class TestSectionValidators:
    """Tests for field-level validation."""

    def test_date_keywords_lowercased(self):
        cfg = AnalysisConfig(date_keywords=["Date", "TIMESTAMP"])
        assert cfg.date_keywords == ["date", "timestamp"]

    def test_blank_date_keyword_rejected(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            AnalysisConfig(date_keywords=["date", "  "])

    def test_log_level_case_insensitive(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")
