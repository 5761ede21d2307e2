"""
Typed Settings Schema (Pydantic)
================================

Provides typed, validated configuration for the streak analyzer.

Usage:
    from config.settings_schema import load_validated_settings

    settings = load_validated_settings()
    decimals = settings.stats.display_decimals
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.settings_loader import get_config_path
from core.exceptions import MissingConfigError, SettingsValidationError

logger = logging.getLogger(__name__)


# ============================================================================
# Schema Definitions
# ============================================================================

class SystemConfig(BaseModel):
    """System-level configuration."""
    name: str = "streaks"
    version: str = "1.0.0"


class AnalysisConfig(BaseModel):
    """Column naming used by the extraction step."""
    pct_change_field: str = "pct_change"
    open_field: str = "open"
    close_field: str = "close"
    default_close_field: str = "Close"
    date_keywords: List[str] = Field(default_factory=lambda: ["date", "time"])

    @field_validator("date_keywords")
    @classmethod
    def keywords_not_blank(cls, v: List[str]) -> List[str]:
        if any(not str(k).strip() for k in v):
            raise ValueError("date_keywords must not contain blank entries")
        return [str(k).lower() for k in v]


class StatsConfig(BaseModel):
    """Summary statistics display."""
    display_decimals: int = Field(default=4, ge=0, le=12)


class NumericDetectionConfig(BaseModel):
    """Sampling rule for numeric field detection."""
    sample_size: int = Field(default=10, ge=1)
    min_ratio: float = Field(default=0.8, gt=0, le=1)


class ReportConfig(BaseModel):
    """Report rendering."""
    title: str = "Streak Analysis Report"
    price_decimals: int = Field(default=2, ge=0, le=8)
    percent_decimals: int = Field(default=2, ge=0, le=8)
    max_streak_rows: int = Field(default=50, ge=0)


class LoggingConfig(BaseModel):
    """Logging."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return str(v).upper()


class Settings(BaseModel):
    """Complete settings schema."""
    model_config = ConfigDict(extra="allow")

    system: SystemConfig = Field(default_factory=SystemConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    numeric_detection: NumericDetectionConfig = Field(default_factory=NumericDetectionConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# ============================================================================
# Validation Functions
# ============================================================================

def load_validated_settings(path: Optional[Path] = None) -> Settings:
    """
    Load and validate settings.

    Args:
        path: Explicit YAML path. Defaults to the loader's resolved path
            (STREAKS_CONFIG_PATH or config/base.yaml).

    Returns:
        Validated Settings object

    Raises:
        MissingConfigError: If an explicit path does not exist
        SettingsValidationError: If settings are invalid
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise MissingConfigError(
                "Config file not found", context={"path": str(config_path)}
            )
    else:
        config_path = get_config_path()

    raw = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Settings file is not valid YAML: {e}")
            raise SettingsValidationError(
                "Settings file is not valid YAML",
                context={"path": str(config_path)},
                cause=e,
            ) from e
    else:
        logger.warning(f"Config file not found: {config_path}, using defaults")

    if not isinstance(raw, dict):
        raise SettingsValidationError(
            "Settings root must be a mapping", context={"path": str(config_path)}
        )

    try:
        return Settings(**raw)
    except ValidationError as e:
        logger.error(f"Settings validation failed: {e}")
        raise SettingsValidationError(
            "Settings validation failed",
            context={"path": str(config_path), "errors": len(e.errors())},
            cause=e,
        ) from e
