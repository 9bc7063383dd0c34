"""Domain enumerations for Wellness Insights.

This module defines the closed value sets used throughout the domain layer:
- AssessmentType: The five tracked assessments (plus the overall scope)
- Response codes: Frequency, StressFrequency, Difficulty, YesNo,
  BehaviorTimeframe, ChecklistMark
- Bands: AnxietySeverity, DepressionSeverity, StressLevel,
  SuicideRiskLevel, ChecklistRiskLevel, UrgencyLevel
- ChecklistCategory: The ten personal-problems life domains
- Insight vocabulary: InsightType, InsightSeverity, TrendDirection

Response codes and bands are ordered: member position is the ordinal used for
scoring and for ranking levels against each other.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from wellness_insights.config.domain_constants import (
    ANXIETY_BANDS,
    ANXIETY_TOP_BAND,
    DEPRESSION_BANDS,
    DEPRESSION_TOP_BAND,
    STRESS_BANDS,
    STRESS_TOP_BAND,
    SUICIDE_RISK_BANDS,
    SUICIDE_RISK_TOP_BAND,
    band_for,
)


class OrdinalCode(StrEnum):
    """String enum whose declaration order is meaningful."""

    @property
    def ordinal(self) -> int:
        """Position of the member in declaration order (0-based)."""
        return list(type(self)).index(self)

    @classmethod
    def from_int(cls, value: int) -> Self:
        """Create a code from its ordinal, clamping to the valid range.

        Args:
            value: Ordinal to convert (clamped to 0..len-1).

        Returns:
            Member at the clamped position.
        """
        members = list(cls)
        return members[max(0, min(len(members) - 1, value))]

    @classmethod
    def lowest(cls) -> Self:
        """Return the first (lowest) member."""
        return next(iter(cls))

    @classmethod
    def max_ordinal(cls) -> int:
        """Return the highest valid ordinal."""
        return len(cls) - 1

    @classmethod
    def parse(cls, value: str | None) -> Self | None:
        """Parse a stored value case-insensitively.

        Args:
            value: Stored level string (e.g. "Moderate").

        Returns:
            The member, or None when the value is unknown or missing.
        """
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class AssessmentType(StrEnum):
    """Assessments tracked by the platform.

    OVERALL is only used as the scope of engagement insights.
    """

    ANXIETY = "anxiety"
    STRESS = "stress"
    DEPRESSION = "depression"
    SUICIDE = "suicide"
    CHECKLIST = "checklist"
    OVERALL = "overall"

    @classmethod
    def tracked(cls) -> list[AssessmentType]:
        """Return the five assessment types in insight emission order."""
        return [cls.ANXIETY, cls.STRESS, cls.DEPRESSION, cls.SUICIDE, cls.CHECKLIST]

    @property
    def is_scored(self) -> bool:
        """True for the additive instruments that carry a total score."""
        return self in (AssessmentType.ANXIETY, AssessmentType.STRESS, AssessmentType.DEPRESSION)


class Frequency(OrdinalCode):
    """Two-week symptom frequency (GAD-7 / PHQ-9 items, scored 0-3)."""

    NOT_AT_ALL = "not_at_all"
    SEVERAL_DAYS = "several_days"
    MORE_THAN_HALF_DAYS = "more_than_half_days"
    NEARLY_EVERY_DAY = "nearly_every_day"


class StressFrequency(OrdinalCode):
    """One-month frequency (PSS-10 items, scored 0-4)."""

    NEVER = "never"
    ALMOST_NEVER = "almost_never"
    SOMETIMES = "sometimes"
    FAIRLY_OFTEN = "fairly_often"
    VERY_OFTEN = "very_often"


class Difficulty(OrdinalCode):
    """Functional impairment follow-up. Recorded, never scored."""

    NOT_DIFFICULT_AT_ALL = "not_difficult_at_all"
    SOMEWHAT_DIFFICULT = "somewhat_difficult"
    VERY_DIFFICULT = "very_difficult"
    EXTREMELY_DIFFICULT = "extremely_difficult"


class YesNo(OrdinalCode):
    """Binary screener answer (no=0, yes=1)."""

    NO = "no"
    YES = "yes"


class BehaviorTimeframe(OrdinalCode):
    """When preparatory suicidal behaviour occurred."""

    NEVER = "never"
    LIFETIME_BUT_NOT_RECENT = "lifetime_but_not_recent"
    PAST_THREE_MONTHS = "past_three_months"


class ChecklistMark(OrdinalCode):
    """Tri-state checklist answer."""

    NOT_CHECKED = "not_checked"
    CHECKED = "checked"
    CIRCLED_MOST_IMPORTANT = "circled_most_important"

    @property
    def weight(self) -> int:
        """Contribution to a category score (circled items count double)."""
        return self.ordinal

    @property
    def is_marked(self) -> bool:
        """True for checked or circled items."""
        return self is not ChecklistMark.NOT_CHECKED


class AnxietySeverity(OrdinalCode):
    """GAD-7 severity band."""

    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @classmethod
    def from_total_score(cls, total: int) -> AnxietySeverity:
        """Band a GAD-7 total: 0-4 minimal, 5-9 mild, 10-14 moderate, 15+ severe."""
        return cls(band_for(total, ANXIETY_BANDS, ANXIETY_TOP_BAND))


class DepressionSeverity(OrdinalCode):
    """PHQ-9 severity band."""

    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    MODERATELY_SEVERE = "moderately_severe"
    SEVERE = "severe"

    @classmethod
    def from_total_score(cls, total: int) -> DepressionSeverity:
        """Band a PHQ-9 total.

        Thresholds:
        - 0-4: Minimal
        - 5-9: Mild
        - 10-14: Moderate
        - 15-19: Moderately severe
        - 20-27: Severe
        """
        return cls(band_for(total, DEPRESSION_BANDS, DEPRESSION_TOP_BAND))


class StressLevel(OrdinalCode):
    """PSS-10 stress band."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def from_total_score(cls, total: int) -> StressLevel:
        """Band a PSS-10 total: 0-13 low, 14-26 moderate, 27-40 high."""
        return cls(band_for(total, STRESS_BANDS, STRESS_TOP_BAND))


class SuicideRiskLevel(OrdinalCode):
    """Suicide-risk screener band."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def from_risk_score(cls, risk_score: int) -> SuicideRiskLevel:
        """Band a risk score: 0-1 low, 2-3 moderate, 4+ high."""
        return cls(band_for(risk_score, SUICIDE_RISK_BANDS, SUICIDE_RISK_TOP_BAND))


class ChecklistRiskLevel(OrdinalCode):
    """Personal-problems checklist risk level."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def urgency(self) -> UrgencyLevel:
        """Urgency that maps 1:1 from this risk level."""
        return UrgencyLevel.from_int(self.ordinal)


class UrgencyLevel(OrdinalCode):
    """How soon a counselor should follow up on a checklist."""

    NONE = "none"
    MONITOR = "monitor"
    SCHEDULE = "schedule"
    IMMEDIATE = "immediate"


class ChecklistCategory(StrEnum):
    """Life-domain categories of the personal-problems checklist.

    Values are the backend record keys.
    """

    SOCIAL_FRIENDS = "social_friends_problems"
    APPEARANCE = "appearance_problems"
    ATTITUDE_OPINION = "attitude_opinion_problems"
    PARENTS = "parents_problems"
    FAMILY_HOME = "family_home_problems"
    SCHOOL = "school_problems"
    MONEY = "money_problems"
    RELIGION = "religion_problems"
    EMOTIONAL = "emotional_problems"
    DATING_SEX = "dating_sex_problems"

    @property
    def label(self) -> str:
        """Human-readable category name."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS: dict[ChecklistCategory, str] = {
    ChecklistCategory.SOCIAL_FRIENDS: "Social/Friends",
    ChecklistCategory.APPEARANCE: "Appearance",
    ChecklistCategory.ATTITUDE_OPINION: "Attitude/Opinion",
    ChecklistCategory.PARENTS: "Parents",
    ChecklistCategory.FAMILY_HOME: "Family/Home",
    ChecklistCategory.SCHOOL: "School",
    ChecklistCategory.MONEY: "Money",
    ChecklistCategory.RELIGION: "Religion",
    ChecklistCategory.EMOTIONAL: "Emotional",
    ChecklistCategory.DATING_SEX: "Dating/Sex",
}


class InsightType(StrEnum):
    """Kind of generated insight."""

    IMPROVEMENT = "improvement"
    DECLINE = "decline"
    STABLE = "stable"
    WARNING = "warning"


class InsightSeverity(OrdinalCode):
    """Display severity of an insight."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort rank: high=3, medium=2, low=1."""
        return self.ordinal + 1


class TrendDirection(StrEnum):
    """Outcome of a first-vs-last trend comparison."""

    IMPROVEMENT = "improvement"
    DECLINE = "decline"
    STABLE = "stable"
