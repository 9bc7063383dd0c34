"""Personal-problems checklist analysis.

The checklist is categorical: it has no total score. Instead the analyzer
derives per-category scores (checked counts once, circled counts twice), a
risk level from escalation rules and overall volume, a matching counselor
urgency, and templated risk factors and recommendations for the categories
that carry the most weight.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from wellness_insights.config import ChecklistSettings, get_checklist_settings
from wellness_insights.config.checklist_taxonomy import FIELDS_BY_CATEGORY, TOTAL_ITEMS
from wellness_insights.config.domain_constants import CHECKLIST_DISCLAIMER
from wellness_insights.domain.entities import ChecklistAnalysis, ChecklistRecord
from wellness_insights.domain.enums import ChecklistCategory, ChecklistMark, ChecklistRiskLevel
from wellness_insights.domain.exceptions import ChecklistSchemaError
from wellness_insights.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)

RISK_FACTOR_TEMPLATES: dict[ChecklistCategory, str] = {
    ChecklistCategory.SOCIAL_FRIENDS: "Difficulties with friendships and social connection",
    ChecklistCategory.APPEARANCE: "Concerns about physical appearance and self-image",
    ChecklistCategory.ATTITUDE_OPINION: "Struggles with outlook, attitudes or self-confidence",
    ChecklistCategory.PARENTS: "Strain in the relationship with parents",
    ChecklistCategory.FAMILY_HOME: "Stress or conflict in the family or home environment",
    ChecklistCategory.SCHOOL: "Academic pressure or difficulties at school",
    ChecklistCategory.MONEY: "Financial worries",
    ChecklistCategory.RELIGION: "Questions or conflict around religion and beliefs",
    ChecklistCategory.EMOTIONAL: "Emotional distress",
    ChecklistCategory.DATING_SEX: "Concerns about dating, relationships or sexuality",
}

RECOMMENDATION_TEMPLATES: dict[ChecklistCategory, str] = {
    ChecklistCategory.SOCIAL_FRIENDS: (
        "Join a peer support group or club to build social connections."
    ),
    ChecklistCategory.APPEARANCE: "Talk with your counselor about body image and self-esteem.",
    ChecklistCategory.ATTITUDE_OPINION: (
        "Explore self-confidence and coping skills with your counselor."
    ),
    ChecklistCategory.PARENTS: (
        "Consider a counselor-guided conversation about communication with your parents."
    ),
    ChecklistCategory.FAMILY_HOME: "Share what is happening at home with your guidance counselor.",
    ChecklistCategory.SCHOOL: "Ask about academic support, tutoring or study-skills sessions.",
    ChecklistCategory.MONEY: (
        "Ask the guidance office about financial assistance and scholarship options."
    ),
    ChecklistCategory.RELIGION: (
        "Talk with a trusted mentor or counselor about your questions of faith."
    ),
    ChecklistCategory.EMOTIONAL: (
        "Schedule a session with your guidance counselor about how you have been feeling."
    ),
    ChecklistCategory.DATING_SEX: (
        "Talk confidentially with your counselor about relationship concerns."
    ),
}

ESCALATION_RECOMMENDATIONS: dict[ChecklistRiskLevel, str] = {
    ChecklistRiskLevel.HIGH: (
        "Schedule a session with your guidance counselor to go over the items you marked."
    ),
    ChecklistRiskLevel.CRITICAL: (
        "Contact your guidance counselor immediately. "
        "If you are in danger, call emergency services."
    ),
}

NO_CONCERNS_RECOMMENDATION = (
    "Keep taking care of yourself and retake the checklist whenever things change."
)


class ChecklistAnalyzer:
    """Derives risk level, urgency and recommendations from checklist marks.

    Example:
        >>> analyzer = ChecklistAnalyzer()
        >>> analysis = analyzer.analyze(record)
        >>> analysis.urgency_level
        <UrgencyLevel.SCHEDULE: 'schedule'>
    """

    def __init__(self, settings: ChecklistSettings | None = None) -> None:
        """Initialize the analyzer.

        Args:
            settings: Escalation settings. If None, uses defaults from config.
        """
        self._settings = settings or get_checklist_settings()
        self._high_severity = frozenset(
            ChecklistCategory(key) for key in self._settings.high_severity_categories
        )
        self._self_harm_items = frozenset(self._settings.self_harm_items)

    def analyze(
        self,
        checklist: ChecklistRecord | Mapping[str, Mapping[str, str]],
        analysis_date: datetime | None = None,
    ) -> ChecklistAnalysis:
        """Analyze one checklist.

        Args:
            checklist: Stored record, or category key to item map as produced
                by ``encode_checklist``. Missing items count as not checked.
            analysis_date: Timestamp stored with the analysis. Omitted from the
                payload when not given.

        Returns:
            The checklist analysis.

        Raises:
            ChecklistSchemaError: If a category or field is not in the taxonomy.
        """
        marks = self._collect(checklist)

        category_scores = {
            category.value: sum(mark.weight for mark in items.values())
            for category, items in marks.items()
        }
        total_checked = sum(
            1 for items in marks.values() for mark in items.values() if mark.is_marked
        )
        total_circled = sum(
            1
            for items in marks.values()
            for mark in items.values()
            if mark is ChecklistMark.CIRCLED_MOST_IMPORTANT
        )

        risk_level = max(
            self._escalation_floor(marks, total_circled),
            self._volume_level(total_checked),
            key=lambda level: level.ordinal,
        )
        top = self.top_categories(category_scores)
        risk_factors = [RISK_FACTOR_TEMPLATES[category] for category in top]
        recommendations = [RECOMMENDATION_TEMPLATES[category] for category in top]
        if risk_level in ESCALATION_RECOMMENDATIONS:
            recommendations.insert(0, ESCALATION_RECOMMENDATIONS[risk_level])
        if not recommendations:
            recommendations.append(NO_CONCERNS_RECOMMENDATION)

        logger.info(
            "Checklist analyzed",
            total_checked=total_checked,
            total_circled=total_circled,
            risk_level=risk_level.value,
        )
        return ChecklistAnalysis(
            total_problems_checked=total_checked,
            total_circled_important=total_circled,
            category_scores=category_scores,
            risk_level=risk_level,
            urgency_level=risk_level.urgency,
            risk_factors=risk_factors,
            recommendations=recommendations,
            needs_attention=risk_level.ordinal >= ChecklistRiskLevel.HIGH.ordinal,
            analysis_date=analysis_date,
            disclaimer=CHECKLIST_DISCLAIMER,
        )

    def top_categories(self, category_scores: Mapping[str, int]) -> list[ChecklistCategory]:
        """Highest-scoring categories with a positive score.

        Ties keep taxonomy order.
        """
        scored = [
            category for category in ChecklistCategory if category_scores.get(category.value, 0) > 0
        ]
        scored.sort(key=lambda category: category_scores[category.value], reverse=True)
        return scored[: self._settings.top_categories]

    def _escalation_floor(
        self,
        marks: Mapping[ChecklistCategory, Mapping[str, ChecklistMark]],
        total_circled: int,
    ) -> ChecklistRiskLevel:
        emotional = marks[ChecklistCategory.EMOTIONAL]
        if total_circled >= self._settings.circled_critical_threshold or any(
            emotional.get(item, ChecklistMark.NOT_CHECKED).is_marked
            for item in self._self_harm_items
        ):
            return ChecklistRiskLevel.CRITICAL
        if total_circled >= self._settings.circled_high_threshold:
            return ChecklistRiskLevel.HIGH
        for category in self._high_severity:
            if ChecklistMark.CIRCLED_MOST_IMPORTANT in marks[category].values():
                return ChecklistRiskLevel.HIGH
        return ChecklistRiskLevel.LOW

    def _volume_level(self, total_checked: int) -> ChecklistRiskLevel:
        ratio = total_checked / TOTAL_ITEMS
        if ratio < self._settings.moderate_ratio:
            return ChecklistRiskLevel.LOW
        if ratio < self._settings.high_ratio:
            return ChecklistRiskLevel.MODERATE
        return ChecklistRiskLevel.HIGH

    def _collect(
        self, checklist: ChecklistRecord | Mapping[str, Mapping[str, str]]
    ) -> dict[ChecklistCategory, dict[str, ChecklistMark]]:
        """Validate names against the taxonomy and parse marks."""
        if isinstance(checklist, ChecklistRecord):
            source: Mapping[str, Mapping[str, str]] = {
                category.value: items for category, items in checklist.category_maps().items()
            }
        else:
            source = checklist

        collected: dict[ChecklistCategory, dict[str, ChecklistMark]] = {
            category: {} for category in ChecklistCategory
        }
        for key, items in source.items():
            try:
                category = ChecklistCategory(key)
            except ValueError as e:
                raise ChecklistSchemaError(key) from e
            known = FIELDS_BY_CATEGORY[category]
            for field, value in items.items():
                if field not in known:
                    raise ChecklistSchemaError(key, field)
                mark = ChecklistMark.parse(value)
                if mark is None:
                    logger.warning("Unknown checklist mark treated as not checked", category=key)
                    mark = ChecklistMark.NOT_CHECKED
                collected[category][field] = mark
        return collected


def analyze_checklist(
    checklist: ChecklistRecord | Mapping[str, Mapping[str, str]],
    analysis_date: datetime | None = None,
) -> ChecklistAnalysis:
    """Analyze a checklist with the configured escalation settings."""
    return ChecklistAnalyzer().analyze(checklist, analysis_date)
