"""Configuration management for calgrid.

This module loads configuration from environment variables with sensible defaults.
It uses dotenv to load from .env files and provides a centralized config object.
"""

import logging
import os
from pathlib import Path
from typing import FrozenSet, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .providers.video import DEFAULT_VIDEO_FOLDER

logger = logging.getLogger(__name__)



class AppConfig(BaseModel):
    """Application configuration loaded from environment variables."""

    # Calendar Configuration
    timezone: str = Field(description="IANA timezone of the displayed calendar")
    first_weekday: int = Field(description="First weekday of the grid, 0 = Sunday")
    highlighted_weekdays: FrozenSet[int] = Field(
        description="Weekdays highlighted in the header, 0 = Sunday"
    )
    show_week_numbers: bool = Field(description="Whether to show the week number column")
    show_declined_events: bool = Field(description="Whether to keep declined events")
    calendar_scaling: float = Field(description="Display scaling of the calendar")

    # Collaborators
    video_folder: str = Field(description="Root folder of the video recordings")
    fetch_timeout: Optional[float] = Field(
        None, description="Seconds before an event fetch is abandoned"
    )

    # Logging Configuration
    log_level: str = Field(description="Logging level")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is known."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("first_weekday")
    @classmethod
    def validate_first_weekday(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError(f"first_weekday must be between 0 and 6, got {v}")
        return v

    @field_validator("highlighted_weekdays")
    @classmethod
    def validate_highlighted_weekdays(cls, v: FrozenSet[int]) -> FrozenSet[int]:
        invalid = sorted(day for day in v if not 0 <= day <= 6)
        if invalid:
            raise ValueError(f"Invalid highlighted weekdays: {invalid}")
        return v

    @field_validator("calendar_scaling")
    @classmethod
    def validate_calendar_scaling(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("calendar_scaling must be positive")
        return v

    @field_validator("fetch_timeout")
    @classmethod
    def validate_fetch_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("fetch_timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return level

    @property
    def video_path(self) -> Path:
        return Path(self.video_folder).expanduser()


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_weekdays(value: str) -> FrozenSet[int]:
    return frozenset(int(part) for part in value.split(",") if part.strip())


def load_default_config() -> AppConfig:
    """Load configuration from environment variables with defaults."""
    # Load environment variables from .env file
    load_dotenv()

    timeout = os.getenv("CALGRID_FETCH_TIMEOUT")

    return AppConfig(
        timezone=os.getenv("CALGRID_TIMEZONE", "UTC"),
        first_weekday=int(os.getenv("CALGRID_FIRST_WEEKDAY", "0")),
        highlighted_weekdays=_parse_weekdays(
            os.getenv("CALGRID_HIGHLIGHTED_WEEKDAYS", "0,6")
        ),
        show_week_numbers=_parse_bool(os.getenv("CALGRID_SHOW_WEEK_NUMBERS", "false")),
        show_declined_events=_parse_bool(
            os.getenv("CALGRID_SHOW_DECLINED_EVENTS", "false")
        ),
        calendar_scaling=float(os.getenv("CALGRID_CALENDAR_SCALING", "1.0")),
        video_folder=os.getenv("CALGRID_VIDEO_FOLDER", str(DEFAULT_VIDEO_FOLDER)),
        fetch_timeout=float(timeout) if timeout else None,
        log_level=os.getenv("CALGRID_LOG_LEVEL", "INFO"),
    )


# Singleton config instance
_config: Optional[AppConfig] = None


def get_current_config() -> AppConfig:
    """Get the current application configuration (singleton)."""
    global _config
    if _config is None:
        _config = load_default_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration. Useful for testing."""
    global _config
    _config = None
