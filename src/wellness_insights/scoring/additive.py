"""Additive instrument scorers: GAD-7 (anxiety), PHQ-9 (depression), PSS-10 (stress).

Each scorer reads an encoded response, sums the per-item contributions and
bands the total. Stress applies reverse scoring to its positively worded
items. Depression additionally raises an urgent flag whenever the self-harm
item is endorsed, independent of the total.

Scorers tolerate partial or unexpected input the same way the encoder does:
a missing or unknown code contributes zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from wellness_insights.config.domain_constants import (
    ANXIETY_FIELDS,
    DEPRESSION_FIELDS,
    DEPRESSION_SELF_HARM_FIELD,
    STRESS_FIELDS,
    STRESS_REVERSED_POSITIONS,
    STRESS_SCALE_MAX,
)
from wellness_insights.domain.entities import AnalysisSummary
from wellness_insights.domain.enums import (
    AnxietySeverity,
    AssessmentType,
    DepressionSeverity,
    Frequency,
    OrdinalCode,
    StressFrequency,
    StressLevel,
)
from wellness_insights.domain.value_objects import ScoreResult
from wellness_insights.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)


def item_ordinal(code_cls: type[OrdinalCode], value: str | None) -> int:
    """Return the ordinal of an encoded answer, 0 when missing or unknown."""
    code = code_cls.parse(value)
    if code is None:
        if value is not None:
            logger.warning("Unknown response code scored as zero", code_set=code_cls.__name__)
        return 0
    return code.ordinal


class AdditiveScorer:
    """Base scorer for instruments whose total is a plain item sum.

    Subclasses declare the item fields, the response code set, the band enum
    and the description tables.
    """

    assessment_type: ClassVar[AssessmentType]
    fields: ClassVar[tuple[str, ...]]
    code_set: ClassVar[type[OrdinalCode]] = Frequency
    descriptions: ClassVar[dict[str, str]]
    recommendations: ClassVar[dict[str, str]]
    help_threshold: ClassVar[str] = "moderate"
    """Lowest band at which professional help is recommended."""

    def contributions(self, encoded: Mapping[str, str]) -> tuple[int, ...]:
        """Per-item contributions in questionnaire order."""
        return tuple(item_ordinal(self.code_set, encoded.get(name)) for name in self.fields)

    def band(self, total: int) -> OrdinalCode:
        """Band a total score."""
        raise NotImplementedError

    def score(self, encoded: Mapping[str, str]) -> ScoreResult:
        """Score an encoded response.

        Args:
            encoded: Field name to code value (extra fields are ignored).

        Returns:
            ScoreResult with total, band and contributions.
        """
        contributions = self.contributions(encoded)
        total = sum(contributions)
        return ScoreResult(
            assessment_type=self.assessment_type,
            total_score=total,
            level=self.band(total),
            contributions=contributions,
        )

    def needs_professional_help(self, result: ScoreResult, encoded: Mapping[str, str]) -> bool:
        """True when the band is at or above the help threshold."""
        threshold = type(result.level)(self.help_threshold)
        return result.level.ordinal >= threshold.ordinal

    def requires_immediate_attention(self, encoded: Mapping[str, str]) -> bool:
        """Urgent flag; only depression can raise it."""
        return False

    def analyze(self, encoded: Mapping[str, str]) -> tuple[ScoreResult, AnalysisSummary]:
        """Score and describe an encoded response.

        Returns:
            Tuple of (score result, analysis summary).
        """
        result = self.score(encoded)
        level = result.level.value
        urgent = self.requires_immediate_attention(encoded)
        analysis = AnalysisSummary(
            total_score=result.total_score,
            severity_level=level,
            severity_description=self.descriptions[level],
            recommendation_message=self.recommendations[level],
            needs_professional_help=urgent or self.needs_professional_help(result, encoded),
            requires_immediate_attention=urgent,
        )
        logger.debug(
            "Assessment scored",
            assessment_type=self.assessment_type.value,
            total_score=result.total_score,
            level=level,
        )
        return result, analysis


class AnxietyScorer(AdditiveScorer):
    """GAD-7: seven items scored 0-3, total 0-21."""

    assessment_type = AssessmentType.ANXIETY
    fields = ANXIETY_FIELDS
    descriptions: ClassVar[dict[str, str]] = {
        "minimal": "Minimal anxiety symptoms.",
        "mild": "Mild anxiety symptoms that may come and go.",
        "moderate": "Moderate anxiety symptoms that are likely affecting daily life.",
        "severe": "Severe anxiety symptoms that are significantly affecting daily life.",
    }
    recommendations: ClassVar[dict[str, str]] = {
        "minimal": "Keep up your current routines and self-care habits.",
        "mild": "Try relaxation techniques and monitor how you feel over the next weeks.",
        "moderate": "Consider talking with your guidance counselor about what you are feeling.",
        "severe": (
            "Please reach out to your guidance counselor or a mental health professional soon."
        ),
    }

    def band(self, total: int) -> AnxietySeverity:
        return AnxietySeverity.from_total_score(total)


class DepressionScorer(AdditiveScorer):
    """PHQ-9: nine items scored 0-3, total 0-27.

    Item 9 asks about thoughts of self-harm. Any answer above "not at all"
    makes the assessment urgent regardless of the total.
    """

    assessment_type = AssessmentType.DEPRESSION
    fields = DEPRESSION_FIELDS
    descriptions: ClassVar[dict[str, str]] = {
        "minimal": "Minimal depressive symptoms.",
        "mild": "Mild depressive symptoms.",
        "moderate": "Moderate depressive symptoms.",
        "moderately_severe": "Moderately severe depressive symptoms.",
        "severe": "Severe depressive symptoms.",
    }
    recommendations: ClassVar[dict[str, str]] = {
        "minimal": "Continue your healthy habits and check in with yourself regularly.",
        "mild": "Stay connected with people you trust and keep track of your mood.",
        "moderate": "Consider scheduling a session with your guidance counselor.",
        "moderately_severe": "We recommend speaking with your guidance counselor this week.",
        "severe": (
            "Please contact your guidance counselor or a mental health professional as soon as "
            "possible."
        ),
    }

    def band(self, total: int) -> DepressionSeverity:
        return DepressionSeverity.from_total_score(total)

    def requires_immediate_attention(self, encoded: Mapping[str, str]) -> bool:
        return item_ordinal(Frequency, encoded.get(DEPRESSION_SELF_HARM_FIELD)) > 0


class StressScorer(AdditiveScorer):
    """PSS-10: ten items scored 0-4, total 0-40.

    Items 4, 5, 7 and 8 are positively worded and reverse scored.
    """

    assessment_type = AssessmentType.STRESS
    fields = STRESS_FIELDS
    code_set = StressFrequency
    descriptions: ClassVar[dict[str, str]] = {
        "low": "Low perceived stress.",
        "moderate": "Moderate perceived stress.",
        "high": "High perceived stress.",
    }
    recommendations: ClassVar[dict[str, str]] = {
        "low": "You seem to be managing stress well. Keep it up.",
        "moderate": "Try building short breaks, sleep and exercise into your week.",
        "high": "Consider talking with your guidance counselor about stress management.",
    }

    def contributions(self, encoded: Mapping[str, str]) -> tuple[int, ...]:
        raw = super().contributions(encoded)
        return tuple(
            STRESS_SCALE_MAX - value if position in STRESS_REVERSED_POSITIONS else value
            for position, value in enumerate(raw)
        )

    def band(self, total: int) -> StressLevel:
        return StressLevel.from_total_score(total)


_SCORERS: dict[AssessmentType, AdditiveScorer] = {
    AssessmentType.ANXIETY: AnxietyScorer(),
    AssessmentType.DEPRESSION: DepressionScorer(),
    AssessmentType.STRESS: StressScorer(),
}


def get_scorer(assessment_type: AssessmentType) -> AdditiveScorer | None:
    """Return the additive scorer for a type, or None for non-additive types."""
    return _SCORERS.get(assessment_type)


def score_anxiety(encoded: Mapping[str, str]) -> ScoreResult:
    """Score an encoded GAD-7 response."""
    return _SCORERS[AssessmentType.ANXIETY].score(encoded)


def score_depression(encoded: Mapping[str, str]) -> ScoreResult:
    """Score an encoded PHQ-9 response."""
    return _SCORERS[AssessmentType.DEPRESSION].score(encoded)


def score_stress(encoded: Mapping[str, str]) -> ScoreResult:
    """Score an encoded PSS-10 response."""
    return _SCORERS[AssessmentType.STRESS].score(encoded)
