"""Configuration validation models using Pydantic."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..core.date_resolver import DATE_FORMATS, TWO_DIGIT_YEAR_PIVOT, YEAR_ROLLBACK_MONTHS
from ..core.field_detector import FIELD_MATCHERS
from ..core.summary import TREND_WINDOW


class DashboardSettings(BaseModel):
    """Refresh and windowing settings for the dashboard."""

    refresh_interval_seconds: int = Field(60, ge=0, description="Auto-refresh period; 0 disables it")
    default_sheet: Optional[str] = Field(None, description="Sheet shown when none is selected")
    trend_window: int = Field(TREND_WINDOW, ge=1, description="Trailing window size for growth and trends")


class DateSettings(BaseModel):
    """How week labels are resolved to dates."""

    two_digit_year_pivot: int = Field(TWO_DIGIT_YEAR_PIVOT, ge=0, le=100)
    year_rollback_months: int = Field(YEAR_ROLLBACK_MONTHS, ge=0, le=11)
    date_formats: List[str] = Field(default_factory=lambda: list(DATE_FORMATS))

    @field_validator('date_formats')
    @classmethod
    def validate_formats(cls, v):
        """Keep only non-empty format strings."""
        formats = [f for f in v if isinstance(f, str) and f.strip()]
        if not formats:
            raise ValueError("date_formats must contain at least one format string")
        return formats


class PathSettings(BaseModel):
    logs_dir: str = Field("logs", description="Directory for system.log")


class LoggingSettings(BaseModel):
    level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR'] = 'INFO'


class DashboardConfig(BaseModel):
    """Complete dashboard configuration."""

    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    dates: DateSettings = Field(default_factory=DateSettings)
    headers: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in FIELD_MATCHERS.items()},
        description="Header substrings per field",
    )
    paths: PathSettings = Field(default_factory=PathSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator('headers')
    @classmethod
    def validate_headers(cls, v):
        """Reject unknown field names and merge overrides over the defaults."""
        unknown = sorted(set(v) - set(FIELD_MATCHERS))
        if unknown:
            raise ValueError(f"Unknown fields in 'headers' block: {unknown}")
        merged = {k: list(vals) for k, vals in FIELD_MATCHERS.items()}
        for name, needles in v.items():
            cleaned = [str(n).strip().lower() for n in needles if str(n).strip()]
            if not cleaned:
                raise ValueError(f"Field '{name}' needs at least one header substring")
            merged[name] = cleaned
        return merged


def load_config(path: str | Path) -> Dict:
    """Load a YAML configuration file."""

    with open(path, "r", encoding="utf-8") as stream:
        return yaml.safe_load(stream) or {}


def load_and_validate_config(config_dict: Optional[dict]) -> DashboardConfig:
    """
    Validate a raw configuration mapping.

    Args:
        config_dict: Parsed YAML (may be empty or None)

    Returns:
        Validated DashboardConfig object

    Raises:
        ValidationError: If configuration is invalid
    """
    return DashboardConfig(**(config_dict or {}))


def load_dashboard_config(path: str | Path | None = None) -> DashboardConfig:
    """Load and validate a YAML config; defaults when ``path`` is None."""
    if path is None:
        return DashboardConfig()
    return load_and_validate_config(load_config(path))
