"""
YAML settings loader for the streak analyzer.
Provides cached access to base.yaml settings.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


_settings_cache: Optional[Dict[str, Any]] = None


def get_config_path() -> Path:
    """Return path to base.yaml config file."""
    env_path = os.getenv("STREAKS_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return Path(__file__).parent / "base.yaml"


def load_settings(
    force_reload: bool = False,
    path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load and cache settings from base.yaml.

    An explicit path replaces the cached settings for the rest of the process
    (until the next force_reload) without touching STREAKS_CONFIG_PATH.
    """
    global _settings_cache
    if _settings_cache is not None and not force_reload and path is None:
        return _settings_cache

    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.exists():
        _settings_cache = {}
        return _settings_cache

    with open(config_path, "r", encoding="utf-8") as f:
        _settings_cache = yaml.safe_load(f) or {}
    return _settings_cache


def get_setting(path: str, default: Any = None) -> Any:
    """
    Get a nested setting by dot-notation path.
    Example: get_setting("analysis.pct_change_field", "pct_change")
    """
    settings = load_settings()
    keys = path.split(".")
    value = settings
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


# Specific config accessors for clarity

def get_pct_change_field() -> str:
    """Name of the derived percent-change column."""
    return str(get_setting("analysis.pct_change_field", "pct_change"))


def get_open_field() -> str:
    """Case-insensitive name of the open-price column."""
    return str(get_setting("analysis.open_field", "open"))


def get_close_field() -> str:
    """Case-insensitive name of the close-price column."""
    return str(get_setting("analysis.close_field", "close"))


def get_default_close_field() -> str:
    """Column used for prices when no close-named column is found."""
    return str(get_setting("analysis.default_close_field", "Close"))


def get_date_keywords() -> List[str]:
    """Substrings that mark a column as the date column."""
    keywords = get_setting("analysis.date_keywords", ["date", "time"]) or []
    return [str(k).lower() for k in keywords]


def get_stats_decimals() -> int:
    """Decimal places for mean/std display rounding."""
    return int(get_setting("stats.display_decimals", 4))


def get_numeric_detection_config() -> Dict[str, Any]:
    """Sampling rule for numeric field detection."""
    return {
        "sample_size": int(get_setting("numeric_detection.sample_size", 10)),
        "min_ratio": float(get_setting("numeric_detection.min_ratio", 0.8)),
    }


def get_report_config() -> Dict[str, Any]:
    """Get report rendering configuration."""
    return {
        "title": str(get_setting("report.title", "Streak Analysis Report")),
        "price_decimals": int(get_setting("report.price_decimals", 2)),
        "percent_decimals": int(get_setting("report.percent_decimals", 2)),
        "max_streak_rows": int(get_setting("report.max_streak_rows", 50)),
    }


def get_log_level() -> str:
    """Default log level for the CLI."""
    return str(get_setting("logging.level", "INFO")).upper()
