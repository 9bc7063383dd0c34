"""Centralized configuration using Pydantic Settings.

Clinical band thresholds are fixed and live in ``domain_constants``. The
settings below cover what the product may tune: logging, trend sensitivity,
checklist escalation rules and engagement messaging. All settings can be
overridden via environment variables.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Skip reading .env file during testing to use code defaults
ENV_FILE = None if os.environ.get("TESTING") else ".env"
ENV_FILE_ENCODING = "utf-8"

_CHECKLIST_CATEGORY_KEYS = frozenset(
    {
        "social_friends_problems",
        "appearance_problems",
        "attitude_opinion_problems",
        "parents_problems",
        "family_home_problems",
        "school_problems",
        "money_problems",
        "religion_problems",
        "emotional_problems",
        "dating_sex_problems",
    }
)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(default=True)
    include_caller: bool = Field(default=True)


class TrendSettings(BaseSettings):
    """Trend comparison configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TREND_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    change_threshold: int = Field(
        default=5,
        ge=0,
        le=40,
        description="Score change beyond which a trend counts as improvement or decline",
    )
    default_window: str = Field(
        default="30d",
        description="History window used for trends (7d, 30d, 90d, 1y)",
    )

    @field_validator("default_window")
    @classmethod
    def validate_window(cls, v: str) -> str:
        """Accept only the supported range tokens."""
        if v not in ("7d", "30d", "90d", "1y"):
            raise ValueError(f"Unsupported trend window: {v}")
        return v


class ChecklistSettings(BaseSettings):
    """Checklist escalation rules.

    Which categories escalate on a single circled item is a product decision,
    so the list is configurable rather than hard-coded.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHECKLIST_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    high_severity_categories: list[str] = Field(
        default=["emotional_problems", "dating_sex_problems", "family_home_problems"],
        description="A single circled item in these categories escalates to at least high",
    )
    self_harm_items: list[str] = Field(
        default=[
            "thinking_too_much_about_death",
            "being_afraid_of_hurting_self",
            "being_afraid_of_hurting_someone_else",
        ],
        description="Emotional items that force critical risk when marked",
    )
    circled_high_threshold: int = Field(default=3, ge=1, description="Circled count for high")
    circled_critical_threshold: int = Field(
        default=6, ge=1, description="Circled count for critical"
    )
    moderate_ratio: float = Field(
        default=0.15, gt=0.0, lt=1.0, description="Checked share at which risk is moderate"
    )
    high_ratio: float = Field(
        default=0.35, gt=0.0, lt=1.0, description="Checked share at which risk is high"
    )
    top_categories: int = Field(
        default=3, ge=1, le=10, description="Categories used for risk factors"
    )

    @field_validator("high_severity_categories")
    @classmethod
    def validate_categories(cls, v: list[str]) -> list[str]:
        """Reject category keys the backend does not know."""
        unknown = [key for key in v if key not in _CHECKLIST_CATEGORY_KEYS]
        if unknown:
            raise ValueError(f"Unknown checklist categories: {', '.join(unknown)}")
        return v

    @model_validator(mode="after")
    def validate_ordering(self) -> ChecklistSettings:
        """Thresholds must escalate in order."""
        if self.moderate_ratio >= self.high_ratio:
            raise ValueError("moderate_ratio must be below high_ratio")
        if self.circled_high_threshold >= self.circled_critical_threshold:
            raise ValueError("circled_high_threshold must be below circled_critical_threshold")
        return self


class InsightSettings(BaseSettings):
    """Insight generation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INSIGHT_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    engagement_threshold: int = Field(
        default=3,
        ge=1,
        description="Below this many assessments an engagement insight is added",
    )


class Settings(BaseSettings):
    """Root settings combining all configuration groups."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        env_nested_delimiter="__",
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    trend: TrendSettings = Field(default_factory=TrendSettings)
    checklist: ChecklistSettings = Field(default_factory=ChecklistSettings)
    insight: InsightSettings = Field(default_factory=InsightSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()


def get_checklist_settings() -> ChecklistSettings:
    """Get checklist escalation settings."""
    return get_settings().checklist


def get_trend_settings() -> TrendSettings:
    """Get trend comparison settings."""
    return get_settings().trend


__all__ = [
    "ChecklistSettings",
    "InsightSettings",
    "LoggingSettings",
    "Settings",
    "TrendSettings",
    "get_checklist_settings",
    "get_settings",
    "get_trend_settings",
]
