"""Tests for progress insight generation."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tests.fixtures import FailingHistoryProvider, make_assessment, make_checklist, make_suicide
from wellness_insights.config import InsightSettings
from wellness_insights.domain.entities import Insight
from wellness_insights.domain.enums import (
    AssessmentType,
    ChecklistRiskLevel,
    InsightSeverity,
    InsightType,
)
from wellness_insights.services.history import (
    InMemoryHistoryProvider,
    build_trend_points,
    latest_records,
    record_type,
)
from wellness_insights.services.insights import (
    InsightGenerator,
    InsightService,
    display_level,
    level_severity,
    sort_insights,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def generator() -> InsightGenerator:
    """Generator with default settings."""
    return InsightGenerator()


def _generate(
    generator: InsightGenerator, records: list, total: int | None = None
) -> list[Insight]:
    histories: dict[AssessmentType, list] = {}
    for record in records:
        histories.setdefault(record_type(record), []).append(record)
    trends = {kind: build_trend_points(items) for kind, items in histories.items()}
    return generator.generate(
        trends,
        latest_records(histories),
        total if total is not None else len(records),
    )


def _of_type(insights: list[Insight], assessment_type: AssessmentType) -> list[Insight]:
    return [insight for insight in insights if insight.assessment_type is assessment_type]


class TestLevelSeverity:
    """Tests for level-to-severity mapping."""

    @pytest.mark.parametrize(
        ("assessment_type", "level", "expected"),
        [
            (AssessmentType.ANXIETY, "mild", InsightSeverity.LOW),
            (AssessmentType.ANXIETY, "moderate", InsightSeverity.MEDIUM),
            (AssessmentType.ANXIETY, "severe", InsightSeverity.HIGH),
            (AssessmentType.DEPRESSION, "moderately_severe", InsightSeverity.HIGH),
            (AssessmentType.STRESS, "high", InsightSeverity.HIGH),
            (AssessmentType.SUICIDE, "low", InsightSeverity.LOW),
            (AssessmentType.CHECKLIST, "critical", InsightSeverity.HIGH),
            (AssessmentType.SUICIDE, None, InsightSeverity.LOW),
        ],
    )
    def test_mapping(
        self, assessment_type: AssessmentType, level: str | None, expected: InsightSeverity
    ) -> None:
        """Moderate is medium, above moderate is high."""
        assert level_severity(assessment_type, level) is expected

    def test_display_level(self) -> None:
        """Underscores become spaces."""
        assert display_level("moderately_severe") == "moderately severe"


class TestScoreTrendInsights:
    """Tests for additive instrument trends."""

    def test_improvement(self, generator: InsightGenerator, now: datetime) -> None:
        """A score drop beyond the threshold is an improvement."""
        records = [
            make_assessment(AssessmentType.DEPRESSION, 20, "severe", now - timedelta(days=10)),
            make_assessment(AssessmentType.DEPRESSION, 10, "moderate", now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.DEPRESSION)
        trend = next(i for i in insights if i.type is InsightType.IMPROVEMENT)
        assert trend.message == (
            "Your depression scores have improved by 50.0% over the last 30 days."
        )
        assert trend.severity is InsightSeverity.LOW
        warning = next(i for i in insights if i.type is InsightType.WARNING)
        assert warning.message == "Your latest depression assessment shows moderate levels."
        assert warning.severity is InsightSeverity.MEDIUM

    def test_decline(self, generator: InsightGenerator, now: datetime) -> None:
        """A score rise beyond the threshold is a medium decline."""
        records = [
            make_assessment(AssessmentType.ANXIETY, 4, "minimal", now - timedelta(days=5)),
            make_assessment(AssessmentType.ANXIETY, 12, "moderate", now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.ANXIETY)
        trend = next(i for i in insights if i.type is InsightType.DECLINE)
        assert trend.message == (
            "Your anxiety scores have increased by 200.0% over the last 30 days."
        )
        assert trend.severity is InsightSeverity.MEDIUM

    def test_change_from_zero_in_points(self, generator: InsightGenerator, now: datetime) -> None:
        """A first score of zero reports the change in points."""
        records = [
            make_assessment(AssessmentType.STRESS, 0, "low", now - timedelta(days=5)),
            make_assessment(AssessmentType.STRESS, 8, "low", now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.STRESS)
        assert insights[0].message == (
            "Your stress scores have increased by 8 points over the last 30 days."
        )

    def test_stable(self, generator: InsightGenerator, now: datetime) -> None:
        """Small changes are stable and raise no warning for low bands."""
        records = [
            make_assessment(AssessmentType.ANXIETY, 3, "minimal", now - timedelta(days=5)),
            make_assessment(AssessmentType.ANXIETY, 4, "minimal", now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.ANXIETY)
        assert len(insights) == 1
        assert insights[0].type is InsightType.STABLE
        assert insights[0].message == (
            "Your anxiety levels have remained stable over the last 30 days."
        )


class TestLevelTrendInsights:
    """Tests for level-only trends."""

    def test_suicide_risk_increase_is_high(
        self, generator: InsightGenerator, now: datetime
    ) -> None:
        """Any rise in suicide risk is a high-severity decline."""
        records = [
            make_suicide("low", now - timedelta(days=7)),
            make_suicide("moderate", now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.SUICIDE)
        decline = next(i for i in insights if i.type is InsightType.DECLINE)
        assert decline.message == (
            "Your suicide risk level has increased from low to moderate over the last 30 days."
        )
        assert decline.severity is InsightSeverity.HIGH

    @pytest.mark.parametrize(
        ("last", "expected"),
        [
            (ChecklistRiskLevel.HIGH, InsightSeverity.MEDIUM),
            (ChecklistRiskLevel.CRITICAL, InsightSeverity.HIGH),
        ],
    )
    def test_checklist_decline(
        self,
        generator: InsightGenerator,
        now: datetime,
        last: ChecklistRiskLevel,
        expected: InsightSeverity,
    ) -> None:
        """Checklist declines are high only at the critical level."""
        records = [
            make_checklist(ChecklistRiskLevel.MODERATE, now - timedelta(days=7)),
            make_checklist(last, now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.CHECKLIST)
        decline = next(i for i in insights if i.type is InsightType.DECLINE)
        assert decline.severity is expected
        assert "personal problems level has increased" in decline.message

    def test_level_improvement(self, generator: InsightGenerator, now: datetime) -> None:
        """A lower level is an improvement."""
        records = [
            make_checklist(ChecklistRiskLevel.HIGH, now - timedelta(days=7)),
            make_checklist(ChecklistRiskLevel.LOW, now),
        ]
        insights = _of_type(_generate(generator, records), AssessmentType.CHECKLIST)
        assert [i.type for i in insights] == [InsightType.IMPROVEMENT]


class TestSingleRecord:
    """Tests for types with one record in the window."""

    def test_moderate_is_warning(self, generator: InsightGenerator, now: datetime) -> None:
        """A single moderate record yields one medium warning."""
        records = [make_assessment(AssessmentType.DEPRESSION, 12, "moderate", now)]
        insights = _of_type(_generate(generator, records), AssessmentType.DEPRESSION)
        assert len(insights) == 1
        assert insights[0].type is InsightType.WARNING
        assert insights[0].severity is InsightSeverity.MEDIUM
        assert insights[0].message == "Your depression assessment shows moderate levels."

    def test_low_is_stable(self, generator: InsightGenerator, now: datetime) -> None:
        """A single low record yields a low stable insight."""
        records = [make_assessment(AssessmentType.ANXIETY, 2, "minimal", now)]
        insights = _of_type(_generate(generator, records), AssessmentType.ANXIETY)
        assert [(i.type, i.severity) for i in insights] == [
            (InsightType.STABLE, InsightSeverity.LOW)
        ]


class TestUrgentWarnings:
    """Tests for urgent flags on the latest records."""

    def test_suicide_intervention_leads(self, generator: InsightGenerator, now: datetime) -> None:
        """The intervention warning comes before other high insights."""
        records = [
            make_assessment(AssessmentType.ANXIETY, 18, "severe", now),
            make_suicide("high", now, intervention=True),
        ]
        insights = _generate(generator, records)
        assert insights[0].message == (
            "Your latest suicide risk assessment requires immediate attention."
        )
        assert insights[0].severity is InsightSeverity.HIGH

    def test_intervention_on_low_risk(self, generator: InsightGenerator, now: datetime) -> None:
        """The flag is honored even when the band is low."""
        records = [make_suicide("low", now, intervention=True)]
        insights = _of_type(_generate(generator, records), AssessmentType.SUICIDE)
        assert any(i.severity is InsightSeverity.HIGH for i in insights)

    def test_depression_self_harm(self, generator: InsightGenerator, now: datetime) -> None:
        """The self-harm item yields a high warning after the suicide one."""
        records = [
            make_assessment(
                AssessmentType.DEPRESSION, 6, "mild", now, urgent_attention=True
            ),
            make_suicide("high", now, intervention=True),
        ]
        insights = _generate(generator, records)
        assert insights[0].assessment_type is AssessmentType.SUICIDE
        assert insights[1].assessment_type is AssessmentType.DEPRESSION
        assert "thoughts of self-harm" in insights[1].message


class TestEngagement:
    """Tests for the engagement insight."""

    def test_no_assessments(self, generator: InsightGenerator) -> None:
        """No history yields a single medium warning."""
        insights = generator.generate({}, {}, 0)
        assert len(insights) == 1
        assert insights[0].assessment_type is AssessmentType.OVERALL
        assert insights[0].severity is InsightSeverity.MEDIUM
        assert insights[0].message == "You haven't completed any mental health assessments yet."

    def test_few_assessments(self, generator: InsightGenerator, now: datetime) -> None:
        """Fewer than the threshold yields an encouraging insight."""
        records = [make_assessment(AssessmentType.ANXIETY, 2, "minimal", now)]
        insights = _generate(generator, records)
        assert insights[-1].message == (
            "You've started tracking your mental health. Great first step!"
        )

    def test_threshold_from_settings(self, now: datetime) -> None:
        """No engagement insight once the threshold is reached."""
        generator = InsightGenerator(settings=InsightSettings(engagement_threshold=1))
        records = [make_assessment(AssessmentType.ANXIETY, 2, "minimal", now)]
        insights = _generate(generator, records)
        assert all(i.assessment_type is not AssessmentType.OVERALL for i in insights)


class TestSortInsights:
    """Tests for ordering."""

    def test_severity_then_priority(self) -> None:
        """High before medium before low; priority breaks ties."""
        low = Insight(
            type=InsightType.STABLE,
            assessment_type=AssessmentType.ANXIETY,
            message="low",
            severity=InsightSeverity.LOW,
        )
        high = low.model_copy(update={"message": "high", "severity": InsightSeverity.HIGH})
        urgent = high.model_copy(update={"message": "urgent", "priority": 2})
        medium = low.model_copy(update={"message": "medium", "severity": InsightSeverity.MEDIUM})
        ordered = sort_insights([low, high, medium, urgent])
        assert [i.message for i in ordered] == ["urgent", "high", "medium", "low"]


class TestInsightService:
    """Tests for the history-backed service."""

    def test_window_limits_trends(self, now: datetime) -> None:
        """Trends use the window while totals use the full history."""
        provider = InMemoryHistoryProvider(
            [
                make_assessment(AssessmentType.ANXIETY, 15, "severe", now - timedelta(days=60)),
                make_assessment(AssessmentType.ANXIETY, 3, "minimal", now - timedelta(days=2)),
                make_assessment(AssessmentType.ANXIETY, 2, "minimal", now - timedelta(days=1)),
            ]
        )
        service = InsightService(provider)

        month = service.progress_insights("student-1", "30d", now)
        assert [i.type for i in month] == [InsightType.STABLE]

        quarter = service.progress_insights("student-1", "90d", now)
        assert quarter[0].type is InsightType.IMPROVEMENT
        assert "over the last 90 days" in quarter[0].message

    def test_unavailable_history(self, now: datetime) -> None:
        """An unavailable source behaves as an empty history."""
        service = InsightService(FailingHistoryProvider())
        insights = service.progress_insights("student-1", now=now)
        assert [i.message for i in insights] == [
            "You haven't completed any mental health assessments yet."
        ]
