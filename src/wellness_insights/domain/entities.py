"""Boundary entities exchanged with the backend and display layers.

These are pydantic models so they validate what the remote API returns and
dump back to the JSON shape it expects (camelCase keys via aliases). Records
are owned by the backend and are read-only here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wellness_insights.domain.enums import (
    AssessmentType,
    ChecklistCategory,
    ChecklistMark,
    ChecklistRiskLevel,
    InsightSeverity,
    InsightType,
    UrgencyLevel,
)


class BoundaryModel(BaseModel):
    """Base for models that cross the network boundary."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Dump to a JSON-safe dict using backend field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AnalysisSummary(BoundaryModel):
    """Derived description of an assessment.

    Recomputable from the responses and never used for branching, except for
    the explicit urgent flags which the backend may set on its own.
    """

    total_score: int | None = Field(default=None, alias="totalScore")
    severity_level: str | None = Field(default=None, alias="severityLevel")
    severity_description: str | None = Field(default=None, alias="severityDescription")
    recommendation_message: str | None = Field(default=None, alias="recommendationMessage")
    needs_professional_help: bool = Field(default=False, alias="needsProfessionalHelp")
    requires_immediate_attention: bool = Field(default=False, alias="requiresImmediateAttention")

    # Suicide-risk screener only
    risk_level: str | None = Field(default=None, alias="riskLevel")
    requires_immediate_intervention: bool | None = Field(
        default=None, alias="requiresImmediateIntervention"
    )
    risk_description: str | None = Field(default=None, alias="riskDescription")
    crisis_protocol_required: bool | None = Field(default=None, alias="crisisProtocolRequired")
    safety_plan_needed: bool | None = Field(default=None, alias="safetyPlanNeeded")
    risk_score: int | None = Field(default=None, alias="riskScore")
    recommendations: list[str] | None = None


class AssessmentRecord(BoundaryModel):
    """A stored instrument assessment (anxiety, stress, depression or suicide)."""

    id: str
    user_id: str = Field(alias="userId")
    assessment_type: AssessmentType | None = Field(default=None, alias="type")
    total_score: int | None = Field(default=None, alias="totalScore")
    severity_level: str | None = Field(default=None, alias="severityLevel")
    risk_level: str | None = Field(default=None, alias="riskLevel")
    assessment_date: datetime = Field(alias="assessmentDate")
    responses: dict[str, str] = Field(default_factory=dict)
    analysis: AnalysisSummary | None = None
    requires_immediate_intervention: bool = False

    @property
    def level(self) -> str | None:
        """Severity level, or risk level for the suicide screener."""
        return self.severity_level or self.risk_level

    @property
    def requires_immediate_attention(self) -> bool:
        """True when the analysis carries the depression self-harm flag."""
        return self.analysis is not None and self.analysis.requires_immediate_attention


class ChecklistAnalysis(BoundaryModel):
    """Derived analysis of a personal-problems checklist."""

    total_problems_checked: int = Field(alias="totalProblemsChecked")
    total_circled_important: int = Field(alias="totalCircledImportant")
    category_scores: dict[str, int] = Field(alias="categoryScores")
    risk_level: ChecklistRiskLevel = Field(alias="riskLevel")
    urgency_level: UrgencyLevel = Field(alias="urgencyLevel")
    risk_factors: list[str] = Field(default_factory=list, alias="riskFactors")
    recommendations: list[str] = Field(default_factory=list)
    needs_attention: bool = Field(alias="needsAttention")
    analysis_date: datetime | None = Field(default=None, alias="analysisDate")
    disclaimer: str = ""


class ChecklistRecord(BoundaryModel):
    """A stored personal-problems checklist.

    Category attributes use the backend keys verbatim.
    """

    id: str
    user_id: str = Field(alias="userId")
    date_completed: datetime
    social_friends_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    appearance_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    attitude_opinion_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    parents_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    family_home_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    school_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    money_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    religion_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    emotional_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    dating_sex_problems: dict[str, ChecklistMark] = Field(default_factory=dict)
    checklist_analysis: ChecklistAnalysis | None = None

    def marks(self, category: ChecklistCategory) -> dict[str, ChecklistMark]:
        """Return the item map of one category."""
        marks: dict[str, ChecklistMark] = getattr(self, category.value)
        return marks

    def category_maps(self) -> dict[ChecklistCategory, dict[str, ChecklistMark]]:
        """Return all ten category maps keyed by category."""
        return {category: self.marks(category) for category in ChecklistCategory}

    @property
    def assessment_date(self) -> datetime:
        """Completion date, named like the instrument records."""
        return self.date_completed

    @property
    def level(self) -> str | None:
        """Risk level of the stored analysis, if one was generated."""
        if self.checklist_analysis is None:
            return None
        return self.checklist_analysis.risk_level.value

    @property
    def total_score(self) -> None:
        """Checklists use categorical risk levels instead of a score."""
        return None

    @property
    def requires_immediate_intervention(self) -> bool:
        """Checklists never carry the suicide intervention flag."""
        return False

    @property
    def requires_immediate_attention(self) -> bool:
        """Checklists never carry the depression self-harm flag."""
        return False


HistoryRecord = AssessmentRecord | ChecklistRecord


class TrendPoint(BoundaryModel):
    """One historical assessment reduced for trend comparison."""

    score: int | None = None
    level: str
    date: datetime
    requires_intervention: bool | None = Field(default=None, alias="requiresIntervention")
    count: int | None = None


class Insight(BoundaryModel):
    """A prioritized, human-readable statement about assessment state or trend."""

    type: InsightType
    assessment_type: AssessmentType = Field(alias="assessmentType")
    message: str
    severity: InsightSeverity
    recommendation: str | None = None
    priority: int = Field(default=0, exclude=True)
    """Tie-break inside a severity; urgent flags get a higher priority."""


class TypeStats(BoundaryModel):
    """Score statistics for one assessment type."""

    count: int = 0
    average_score: float | None = Field(default=None, alias="averageScore")
    min_score: int | None = Field(default=None, alias="minScore")
    max_score: int | None = Field(default=None, alias="maxScore")


class AssessmentStats(BoundaryModel):
    """Score statistics across all assessment types."""

    by_type: dict[AssessmentType, TypeStats] = Field(alias="byType")
    total_assessments: int = Field(alias="totalAssessments")
    first_assessment_date: datetime | None = Field(default=None, alias="firstAssessmentDate")
    latest_assessment_date: datetime | None = Field(default=None, alias="latestAssessmentDate")


class PersonalSummary(BoundaryModel):
    """Assessment counts and latest record per type for one student."""

    total_assessments: dict[str, int] = Field(alias="totalAssessments")
    latest_assessments: dict[AssessmentType, AssessmentRecord | ChecklistRecord | None] = Field(
        alias="latestAssessments"
    )

    @property
    def overall(self) -> int:
        """Total number of assessments across all types."""
        return self.total_assessments.get("overall", 0)
