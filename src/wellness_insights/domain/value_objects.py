"""Immutable value objects for the Wellness Insights domain.

Value objects are immutable (frozen) dataclasses that represent domain
concepts without identity. They are equal if all their attributes are equal.
They are internal results; anything that crosses to the persistence or
display layer is a pydantic model in ``entities``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from wellness_insights.domain.enums import (
        AssessmentType,
        ChecklistCategory,
        OrdinalCode,
        SuicideRiskLevel,
        TrendDirection,
    )


@dataclass(frozen=True, slots=True)
class ChecklistItem:
    """One entry of the static personal-problems checklist."""

    question_id: int
    """Stable id submitted by the questionnaire form (1-based)."""

    category: ChecklistCategory
    """Category the item belongs to."""

    field: str
    """Backend field name within the category map."""

    text: str
    """Display text."""


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Total and band of an additive instrument."""

    assessment_type: AssessmentType
    total_score: int
    level: OrdinalCode
    contributions: tuple[int, ...]
    """Per-item contribution in questionnaire order (after reverse scoring)."""

    def __post_init__(self) -> None:
        """Validate the total matches the contributions.

        Raises:
            ValueError: If total_score differs from the sum of contributions.
        """
        if self.total_score != sum(self.contributions):
            raise ValueError("total_score must equal the sum of contributions")


@dataclass(frozen=True, slots=True)
class SuicideScreenResult:
    """Outcome of the suicide-risk screener.

    The numeric band and the intervention flag are independent signals and
    consumers must check both.
    """

    risk_score: int
    risk_level: SuicideRiskLevel
    requires_immediate_intervention: bool
    branch_open: bool
    """True when the gating item was answered yes."""

    scored_fields: tuple[str, ...]
    """Fields that contributed to the risk score, in order."""


@dataclass(frozen=True, slots=True)
class TrendComparison:
    """First-vs-last comparison of one assessment type."""

    assessment_type: AssessmentType
    direction: TrendDirection
    first_level: str
    last_level: str
    first_score: int | None = None
    last_score: int | None = None

    @property
    def delta(self) -> int | None:
        """Score change (last - first), or None for level-only comparisons."""
        if self.first_score is None or self.last_score is None:
            return None
        return self.last_score - self.first_score

    @property
    def percent_change(self) -> float | None:
        """Change relative to the first score, or None when undefined."""
        delta = self.delta
        if delta is None or not self.first_score:
            return None
        return delta / self.first_score * 100


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """A history retrieval window."""

    start: datetime
    end: datetime
    label: str
    """Original range token, e.g. "30d"."""

    def __post_init__(self) -> None:
        """Validate ordering.

        Raises:
            ValueError: If start is after end.
        """
        if self.start > self.end:
            raise ValueError("Window start must not be after its end")

    @property
    def days(self) -> int:
        """Length of the window in whole days."""
        return (self.end - self.start).days


@dataclass(frozen=True, slots=True)
class CooldownStatus:
    """Retake cooldown state for one instrument."""

    is_active: bool
    days_remaining: int
    cooldown_period_days: int
    next_available_date: datetime
    last_assessment_date: datetime
    last_severity_level: str
