"""Progress insight generation.

Turns per-type trend points and latest records into a prioritized list of
human-readable insights for the student dashboard:

1. A trend insight per type with two or more points (severity-only insight
   from the latest record otherwise).
2. On the trend path, a warning when the latest level is moderate or worse.
3. Urgent warnings from the latest records, always: suicide intervention
   and the depression self-harm item.
4. One engagement insight when few assessments exist.

The result is sorted by severity; inside a severity, urgent warnings come
first so a suicide intervention warning always leads the list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wellness_insights.config import InsightSettings, Settings, get_settings
from wellness_insights.domain.entities import AssessmentRecord, Insight
from wellness_insights.domain.enums import (
    AssessmentType,
    InsightSeverity,
    InsightType,
    TrendDirection,
)
from wellness_insights.infrastructure.logging import get_logger, log_context
from wellness_insights.services.history import (
    UNKNOWN_LEVEL,
    build_trend_points,
    fetch_all,
    latest_records,
    parse_time_range,
)
from wellness_insights.services.summary import build_personal_summary
from wellness_insights.services.trend import (
    LEVEL_SCALES,
    TrendComparator,
    level_rank,
    moderate_rank,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime

    from wellness_insights.domain.entities import HistoryRecord, TrendPoint
    from wellness_insights.domain.value_objects import TrendComparison
    from wellness_insights.services.history import HistoryProvider

logger = get_logger(__name__)

SUICIDE_INTERVENTION_PRIORITY = 2
DEPRESSION_ATTENTION_PRIORITY = 1

_DISPLAY_NAMES: dict[AssessmentType, str] = {
    AssessmentType.SUICIDE: "suicide risk",
    AssessmentType.CHECKLIST: "personal problems",
}

_WINDOW_PHRASES: dict[str, str] = {
    "7d": "the last 7 days",
    "30d": "the last 30 days",
    "90d": "the last 90 days",
    "1y": "the last year",
}

_WARNING_RECOMMENDATIONS: dict[InsightSeverity, str] = {
    InsightSeverity.HIGH: "Please contact your guidance counselor immediately for support.",
    InsightSeverity.MEDIUM: "Consider scheduling an appointment with your guidance counselor.",
    InsightSeverity.LOW: "Maintain your current routine and continue monitoring your wellbeing.",
}

_IMPROVEMENT_RECOMMENDATION = "Keep up the great work! Continue with your current strategies."
_DECLINE_RECOMMENDATION = (
    "Consider reaching out to your guidance counselor or trying stress management techniques."
)
_STABLE_RECOMMENDATION = (
    "Maintain your current routine and consider adding new wellness activities."
)
_EMERGENCY_RECOMMENDATION = (
    "Please contact your guidance counselor or emergency services immediately."
)


def display_name(assessment_type: AssessmentType) -> str:
    """Name of an assessment type as used in messages."""
    return _DISPLAY_NAMES.get(assessment_type, assessment_type.value)


def display_level(level: str) -> str:
    """Level value as used in messages (e.g. "moderately severe")."""
    return level.replace("_", " ").lower()


def level_severity(assessment_type: AssessmentType, level: str | None) -> InsightSeverity:
    """Insight severity of a stored level.

    Moderate maps to medium, anything ranked above moderate maps to high,
    lower bands map to low.
    """
    rank = level_rank(assessment_type, level)
    threshold = moderate_rank(assessment_type)
    if rank > threshold:
        return InsightSeverity.HIGH
    if rank == threshold:
        return InsightSeverity.MEDIUM
    return InsightSeverity.LOW


class InsightGenerator:
    """Builds the sorted insight list from trends and latest records."""

    def __init__(
        self,
        comparator: TrendComparator | None = None,
        settings: InsightSettings | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            comparator: Trend comparator. If None, one is built from config.
            settings: Insight settings. If None, uses defaults from config.
        """
        self._comparator = comparator or TrendComparator()
        self._settings = settings or get_settings().insight

    def generate(
        self,
        trends: Mapping[AssessmentType, Sequence[TrendPoint]],
        latest: Mapping[AssessmentType, HistoryRecord | None],
        total_assessments: int,
        window_label: str = "30d",
    ) -> list[Insight]:
        """Generate insights.

        Args:
            trends: Ascending trend points per assessment type.
            latest: Most recent record per assessment type.
            total_assessments: Assessments completed across all types.
            window_label: Range token of the trend window, used in messages.

        Returns:
            Insights sorted by severity, urgent warnings first.
        """
        phrase = _WINDOW_PHRASES.get(window_label, f"the last {window_label}")
        insights: list[Insight] = []

        for assessment_type in AssessmentType.tracked():
            points = trends.get(assessment_type, [])
            record = latest.get(assessment_type)
            comparison = self._comparator.compare(assessment_type, points)

            if comparison is not None:
                insights.append(self._trend_insight(comparison, phrase))
                latest_level = record.level if record is not None else points[-1].level
                warning = self._level_warning(assessment_type, latest_level)
                if warning is not None:
                    insights.append(warning)
            elif record is not None:
                insights.append(self._severity_insight(assessment_type, record.level))

            insights.extend(self._urgent_warnings(assessment_type, record, points))

        engagement = self._engagement_insight(total_assessments)
        if engagement is not None:
            insights.append(engagement)

        return sort_insights(insights)

    def _trend_insight(self, comparison: TrendComparison, phrase: str) -> Insight:
        assessment_type = comparison.assessment_type
        name = display_name(assessment_type)

        if comparison.delta is not None:
            return self._score_trend_insight(comparison, name, phrase)

        first = display_level(comparison.first_level)
        last = display_level(comparison.last_level)
        last_severity = level_severity(assessment_type, comparison.last_level)
        if comparison.direction is TrendDirection.DECLINE:
            # Any rise in suicide risk is high; checklist only at its top level.
            top_reached = (
                level_rank(assessment_type, comparison.last_level)
                == LEVEL_SCALES[assessment_type].max_ordinal()
            )
            severity = (
                InsightSeverity.HIGH
                if assessment_type is AssessmentType.SUICIDE or top_reached
                else InsightSeverity.MEDIUM
            )
            return Insight(
                type=InsightType.DECLINE,
                assessment_type=assessment_type,
                message=f"Your {name} level has increased from {first} to {last} over {phrase}.",
                severity=severity,
                recommendation=_EMERGENCY_RECOMMENDATION
                if severity is InsightSeverity.HIGH
                else _WARNING_RECOMMENDATIONS[InsightSeverity.MEDIUM],
            )
        if comparison.direction is TrendDirection.IMPROVEMENT:
            return Insight(
                type=InsightType.IMPROVEMENT,
                assessment_type=assessment_type,
                message=f"Your {name} level has improved from {first} to {last} over {phrase}.",
                severity=InsightSeverity.LOW,
                recommendation=_IMPROVEMENT_RECOMMENDATION,
            )
        return Insight(
            type=InsightType.STABLE,
            assessment_type=assessment_type,
            message=f"Your {name} level has remained {last} over {phrase}.",
            severity=last_severity,
            recommendation=_WARNING_RECOMMENDATIONS[last_severity],
        )

    def _score_trend_insight(self, comparison: TrendComparison, name: str, phrase: str) -> Insight:
        change = _format_change(comparison)
        if comparison.direction is TrendDirection.IMPROVEMENT:
            return Insight(
                type=InsightType.IMPROVEMENT,
                assessment_type=comparison.assessment_type,
                message=f"Your {name} scores have improved by {change} over {phrase}.",
                severity=InsightSeverity.LOW,
                recommendation=_IMPROVEMENT_RECOMMENDATION,
            )
        if comparison.direction is TrendDirection.DECLINE:
            return Insight(
                type=InsightType.DECLINE,
                assessment_type=comparison.assessment_type,
                message=f"Your {name} scores have increased by {change} over {phrase}.",
                severity=InsightSeverity.MEDIUM,
                recommendation=_DECLINE_RECOMMENDATION,
            )
        return Insight(
            type=InsightType.STABLE,
            assessment_type=comparison.assessment_type,
            message=f"Your {name} levels have remained stable over {phrase}.",
            severity=InsightSeverity.LOW,
            recommendation=_STABLE_RECOMMENDATION,
        )

    def _level_warning(self, assessment_type: AssessmentType, level: str | None) -> Insight | None:
        severity = level_severity(assessment_type, level)
        if severity is InsightSeverity.LOW or level is None:
            return None
        return Insight(
            type=InsightType.WARNING,
            assessment_type=assessment_type,
            message=(
                f"Your latest {display_name(assessment_type)} assessment shows "
                f"{display_level(level)} levels."
            ),
            severity=severity,
            recommendation=_WARNING_RECOMMENDATIONS[severity],
        )

    def _severity_insight(self, assessment_type: AssessmentType, level: str | None) -> Insight:
        """Insight for a type with a single record in the window."""
        shown = display_level(level or UNKNOWN_LEVEL)
        severity = level_severity(assessment_type, level)
        return Insight(
            type=InsightType.STABLE if severity is InsightSeverity.LOW else InsightType.WARNING,
            assessment_type=assessment_type,
            message=f"Your {display_name(assessment_type)} assessment shows {shown} levels.",
            severity=severity,
            recommendation=_WARNING_RECOMMENDATIONS[severity],
        )

    def _urgent_warnings(
        self,
        assessment_type: AssessmentType,
        record: HistoryRecord | None,
        points: Sequence[TrendPoint],
    ) -> list[Insight]:
        if assessment_type is AssessmentType.SUICIDE:
            flagged = bool(points and points[-1].requires_intervention)
            if record is not None:
                flagged = _suicide_flag(record)
            if flagged:
                return [
                    Insight(
                        type=InsightType.WARNING,
                        assessment_type=assessment_type,
                        message="Your latest suicide risk assessment requires immediate attention.",
                        severity=InsightSeverity.HIGH,
                        recommendation=_EMERGENCY_RECOMMENDATION,
                        priority=SUICIDE_INTERVENTION_PRIORITY,
                    )
                ]
        if (
            assessment_type is AssessmentType.DEPRESSION
            and record is not None
            and record.requires_immediate_attention
        ):
            return [
                Insight(
                    type=InsightType.WARNING,
                    assessment_type=assessment_type,
                    message=(
                        "Your latest depression assessment mentions thoughts of self-harm "
                        "and needs attention."
                    ),
                    severity=InsightSeverity.HIGH,
                    recommendation=_EMERGENCY_RECOMMENDATION,
                    priority=DEPRESSION_ATTENTION_PRIORITY,
                )
            ]
        return []

    def _engagement_insight(self, total_assessments: int) -> Insight | None:
        if total_assessments == 0:
            return Insight(
                type=InsightType.WARNING,
                assessment_type=AssessmentType.OVERALL,
                message="You haven't completed any mental health assessments yet.",
                severity=InsightSeverity.MEDIUM,
                recommendation=(
                    "Consider taking your first assessment to establish a baseline "
                    "for your mental health."
                ),
            )
        if total_assessments < self._settings.engagement_threshold:
            return Insight(
                type=InsightType.IMPROVEMENT,
                assessment_type=AssessmentType.OVERALL,
                message="You've started tracking your mental health. Great first step!",
                severity=InsightSeverity.LOW,
                recommendation=(
                    "Continue taking regular assessments to better understand "
                    "your mental health patterns."
                ),
            )
        return None


def _suicide_flag(record: HistoryRecord) -> bool:
    if not isinstance(record, AssessmentRecord):
        return False
    analysis_flag = bool(record.analysis and record.analysis.requires_immediate_intervention)
    return record.requires_immediate_intervention or analysis_flag


def _format_change(comparison: TrendComparison) -> str:
    percent = comparison.percent_change
    if percent is None:
        return f"{abs(comparison.delta or 0)} points"
    return f"{abs(percent):.1f}%"


def sort_insights(insights: Sequence[Insight]) -> list[Insight]:
    """Stable sort: severity descending, then priority descending."""
    return sorted(insights, key=lambda insight: (-insight.severity.rank, -insight.priority))


class InsightService:
    """Loads a student's history and produces dashboard insights."""

    def __init__(
        self,
        provider: HistoryProvider,
        settings: Settings | None = None,
        generator: InsightGenerator | None = None,
    ) -> None:
        """Initialize service.

        Args:
            provider: History source.
            settings: Application settings. If None, uses cached settings.
            generator: Insight generator. If None, one is built from settings.
        """
        self._provider = provider
        self._settings = settings or get_settings()
        self._generator = generator or InsightGenerator(
            TrendComparator(self._settings.trend), self._settings.insight
        )

    def progress_insights(
        self,
        user_id: str,
        time_range: str | None = None,
        now: datetime | None = None,
    ) -> list[Insight]:
        """Generate insights for one student.

        Trends use the requested window; totals and latest records use the
        full history.

        Args:
            user_id: Student id.
            time_range: Window token (defaults to the configured window).
            now: Window end (defaults to the current UTC time).

        Returns:
            Sorted insights.
        """
        label = time_range or self._settings.trend.default_window
        window = parse_time_range(label, now)
        with log_context(user_id=user_id):
            all_records = fetch_all(self._provider, user_id)
            windowed = fetch_all(self._provider, user_id, window)
            summary = build_personal_summary(all_records)
            trends = {
                assessment_type: build_trend_points(records)
                for assessment_type, records in windowed.items()
            }
            insights = self._generator.generate(
                trends,
                latest_records(all_records),
                summary.overall,
                window_label=label,
            )
            logger.info(
                "Insights generated",
                window=label,
                total_assessments=summary.overall,
                insight_count=len(insights),
            )
            return insights
