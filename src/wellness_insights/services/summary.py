"""Personal summary and score statistics across assessment types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from wellness_insights.domain.entities import AssessmentStats, PersonalSummary, TypeStats
from wellness_insights.domain.enums import AssessmentType
from wellness_insights.services.history import as_utc, latest_records

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from wellness_insights.domain.entities import HistoryRecord


def compute_type_stats(records: Sequence[HistoryRecord]) -> TypeStats:
    """Count and score statistics of one assessment type.

    Records without a total score (suicide screener, checklist) are counted
    but excluded from the score statistics.
    """
    scores = np.array(
        [record.total_score for record in records if record.total_score is not None],
        dtype=np.float64,
    )
    if scores.size == 0:
        return TypeStats(count=len(records))
    return TypeStats(
        count=len(records),
        average_score=round(float(np.mean(scores)), 2),
        min_score=int(np.min(scores)),
        max_score=int(np.max(scores)),
    )


def compute_stats(histories: Mapping[AssessmentType, Sequence[HistoryRecord]]) -> AssessmentStats:
    """Aggregate statistics over every tracked assessment type.

    Args:
        histories: Records per assessment type.

    Returns:
        Per-type statistics plus the overall count and date range.
    """
    by_type = {
        assessment_type: compute_type_stats(histories.get(assessment_type, []))
        for assessment_type in AssessmentType.tracked()
    }
    dates = [record.assessment_date for records in histories.values() for record in records]
    return AssessmentStats(
        by_type=by_type,
        total_assessments=sum(stats.count for stats in by_type.values()),
        first_assessment_date=min(dates, key=as_utc) if dates else None,
        latest_assessment_date=max(dates, key=as_utc) if dates else None,
    )


def build_personal_summary(
    histories: Mapping[AssessmentType, Sequence[HistoryRecord]],
) -> PersonalSummary:
    """Totals per type (plus "overall") and the latest record per type."""
    totals = {
        assessment_type.value: len(histories.get(assessment_type, []))
        for assessment_type in AssessmentType.tracked()
    }
    totals[AssessmentType.OVERALL.value] = sum(totals.values())
    latest = latest_records(
        {
            assessment_type: histories.get(assessment_type, [])
            for assessment_type in AssessmentType.tracked()
        }
    )
    return PersonalSummary(total_assessments=totals, latest_assessments=latest)
