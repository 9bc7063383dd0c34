"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest

# Set TESTING mode BEFORE any app imports to prevent .env file loading.
os.environ["TESTING"] = "1"

# Clear environment variables BEFORE any imports that might use Pydantic Settings
# This runs at conftest import time, before test collection
_ENV_VARS_TO_CLEAR = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_INCLUDE_TIMESTAMP",
    "LOG_INCLUDE_CALLER",
    "TREND_CHANGE_THRESHOLD",
    "TREND_DEFAULT_WINDOW",
    "CHECKLIST_HIGH_SEVERITY_CATEGORIES",
    "CHECKLIST_SELF_HARM_ITEMS",
    "CHECKLIST_CIRCLED_HIGH_THRESHOLD",
    "CHECKLIST_CIRCLED_CRITICAL_THRESHOLD",
    "CHECKLIST_MODERATE_RATIO",
    "CHECKLIST_HIGH_RATIO",
    "CHECKLIST_TOP_CATEGORIES",
    "INSIGHT_ENGAGEMENT_THRESHOLD",
]

for _var in _ENV_VARS_TO_CLEAR:
    os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that might be set by .env file.

    This ensures tests use code defaults, not local developer overrides.
    Also clears any cached settings to force re-read of defaults.
    """
    for var in _ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    # Clear the settings cache to ensure fresh reads
    from wellness_insights.config import get_settings  # noqa: PLC0415

    get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for window and cooldown computations."""
    return datetime(2025, 3, 31, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def moderate_depression_answers() -> dict[int, int]:
    """PHQ-9 answers totalling 14 (moderate) with the self-harm item at 0."""
    return dict(enumerate([3, 3, 2, 2, 1, 1, 1, 1, 0]))


@pytest.fixture(scope="session")
def stress_fixed_vector() -> dict[int, int]:
    """PSS-10 answers exercising reverse scoring.

    Raw [4, 4, 4, 0, 0, 4, 0, 0, 4, 4] scores 4 on every item: total 40.
    """
    return dict(enumerate([4, 4, 4, 0, 0, 4, 0, 0, 4, 4]))
