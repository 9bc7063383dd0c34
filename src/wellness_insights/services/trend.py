"""First-vs-last trend comparison over assessment history.

Scored instruments compare total scores against a fixed change threshold.
Instruments without a linear score (the suicide-risk screener and the
checklist) compare the ordinal rank of their levels. Lower is better for
every instrument, so a falling score or rank is an improvement.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wellness_insights.config import TrendSettings, get_trend_settings
from wellness_insights.domain.enums import (
    AnxietySeverity,
    AssessmentType,
    ChecklistRiskLevel,
    DepressionSeverity,
    OrdinalCode,
    StressLevel,
    SuicideRiskLevel,
    TrendDirection,
)
from wellness_insights.domain.value_objects import TrendComparison
from wellness_insights.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wellness_insights.domain.entities import TrendPoint

logger = get_logger(__name__)

LEVEL_SCALES: dict[AssessmentType, type[OrdinalCode]] = {
    AssessmentType.ANXIETY: AnxietySeverity,
    AssessmentType.STRESS: StressLevel,
    AssessmentType.DEPRESSION: DepressionSeverity,
    AssessmentType.SUICIDE: SuicideRiskLevel,
    AssessmentType.CHECKLIST: ChecklistRiskLevel,
}


def level_rank(assessment_type: AssessmentType, level: str | None) -> int:
    """Rank a stored level within its instrument's band order.

    Unknown or missing levels rank as the lowest band.

    Args:
        assessment_type: Instrument the level belongs to.
        level: Stored level value (case-insensitive).

    Returns:
        0-based rank.
    """
    scale = LEVEL_SCALES.get(assessment_type)
    if scale is None:
        return 0
    code = scale.parse(level)
    if code is None:
        if level:
            logger.debug("Unknown level ranked lowest", assessment_type=assessment_type.value)
        return 0
    return code.ordinal


def moderate_rank(assessment_type: AssessmentType) -> int:
    """Rank of the "moderate" band, the warning threshold of every instrument."""
    return level_rank(assessment_type, "moderate")


def _direction(change: int, threshold: int = 0) -> TrendDirection:
    if change < -threshold:
        return TrendDirection.IMPROVEMENT
    if change > threshold:
        return TrendDirection.DECLINE
    return TrendDirection.STABLE


class TrendComparator:
    """Compares the first and last points of a history window."""

    def __init__(self, settings: TrendSettings | None = None) -> None:
        """Initialize comparator.

        Args:
            settings: Trend settings. If None, uses defaults from config.
        """
        self._settings = settings or get_trend_settings()

    @property
    def threshold(self) -> int:
        """Score change that separates stable from improvement or decline."""
        return self._settings.change_threshold

    def compare(
        self, assessment_type: AssessmentType, points: Sequence[TrendPoint]
    ) -> TrendComparison | None:
        """Compare first and last points.

        Args:
            assessment_type: Instrument of the points.
            points: Trend points in ascending date order.

        Returns:
            The comparison, or None when fewer than two points exist.
        """
        if len(points) < 2:
            return None
        first, last = points[0], points[-1]

        if assessment_type.is_scored and first.score is not None and last.score is not None:
            direction = _direction(last.score - first.score, self.threshold)
            return TrendComparison(
                assessment_type=assessment_type,
                direction=direction,
                first_level=first.level,
                last_level=last.level,
                first_score=first.score,
                last_score=last.score,
            )

        if assessment_type.is_scored:
            logger.debug("Score missing, comparing levels", assessment_type=assessment_type.value)
        change = level_rank(assessment_type, last.level) - level_rank(assessment_type, first.level)
        return TrendComparison(
            assessment_type=assessment_type,
            direction=_direction(change),
            first_level=first.level,
            last_level=last.level,
        )
