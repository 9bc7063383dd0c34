"""Domain models for assessment scoring and insights.

This module provides the core domain layer for Wellness Insights.

Modules:
    enums: Closed value sets (response codes, bands, insight vocabulary)
    value_objects: Immutable internal results (ScoreResult, TrendComparison, etc.)
    entities: Boundary models exchanged with the backend (AssessmentRecord, Insight, etc.)
    exceptions: Domain-specific exceptions

Example:
    >>> from wellness_insights.domain import DepressionSeverity
    >>> DepressionSeverity.from_total_score(14)
    <DepressionSeverity.MODERATE: 'moderate'>
"""

from wellness_insights.domain.entities import (
    AnalysisSummary,
    AssessmentRecord,
    AssessmentStats,
    ChecklistAnalysis,
    ChecklistRecord,
    HistoryRecord,
    Insight,
    PersonalSummary,
    TrendPoint,
    TypeStats,
)
from wellness_insights.domain.enums import (
    AnxietySeverity,
    AssessmentType,
    BehaviorTimeframe,
    ChecklistCategory,
    ChecklistMark,
    ChecklistRiskLevel,
    DepressionSeverity,
    Difficulty,
    Frequency,
    InsightSeverity,
    InsightType,
    StressFrequency,
    StressLevel,
    SuicideRiskLevel,
    TrendDirection,
    UrgencyLevel,
    YesNo,
)
from wellness_insights.domain.exceptions import (
    AssessmentError,
    ChecklistSchemaError,
    DomainError,
    HistoryError,
    HistoryUnavailableError,
    TaxonomyError,
    UnknownInstrumentError,
    ValidationError,
)
from wellness_insights.domain.value_objects import (
    ChecklistItem,
    CooldownStatus,
    ScoreResult,
    SuicideScreenResult,
    TimeWindow,
    TrendComparison,
)

__all__ = [
    "AnalysisSummary",
    "AnxietySeverity",
    "AssessmentError",
    "AssessmentRecord",
    "AssessmentStats",
    "AssessmentType",
    "BehaviorTimeframe",
    "ChecklistAnalysis",
    "ChecklistCategory",
    "ChecklistItem",
    "ChecklistMark",
    "ChecklistRecord",
    "ChecklistRiskLevel",
    "ChecklistSchemaError",
    "CooldownStatus",
    "DepressionSeverity",
    "Difficulty",
    "DomainError",
    "Frequency",
    "HistoryError",
    "HistoryRecord",
    "HistoryUnavailableError",
    "Insight",
    "InsightSeverity",
    "InsightType",
    "PersonalSummary",
    "ScoreResult",
    "StressFrequency",
    "StressLevel",
    "SuicideRiskLevel",
    "SuicideScreenResult",
    "TaxonomyError",
    "TimeWindow",
    "TrendComparison",
    "TrendDirection",
    "TrendPoint",
    "TypeStats",
    "UnknownInstrumentError",
    "UrgencyLevel",
    "ValidationError",
    "YesNo",
]
