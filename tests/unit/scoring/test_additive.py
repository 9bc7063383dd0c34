"""Tests for the additive instrument scorers."""

from __future__ import annotations

import pytest

from wellness_insights.config.domain_constants import DEPRESSION_SELF_HARM_FIELD
from wellness_insights.domain.enums import (
    AnxietySeverity,
    AssessmentType,
    DepressionSeverity,
    StressLevel,
)
from wellness_insights.scoring.additive import (
    AnxietyScorer,
    DepressionScorer,
    StressScorer,
    get_scorer,
    score_anxiety,
    score_depression,
    score_stress,
)
from wellness_insights.scoring.encoding import encode_anxiety, encode_depression, encode_stress

pytestmark = pytest.mark.unit


class TestAnxietyScorer:
    """Tests for GAD-7 scoring."""

    def test_all_zero_is_minimal(self) -> None:
        """All-zero vectors give the lowest band."""
        result = score_anxiety(encode_anxiety({}))
        assert result.total_score == 0
        assert result.level is AnxietySeverity.MINIMAL

    def test_all_max_is_severe(self) -> None:
        """Maximum answers total 21."""
        result = score_anxiety(encode_anxiety(dict.fromkeys(range(7), 3)))
        assert result.total_score == 21
        assert result.level is AnxietySeverity.SEVERE

    def test_difficulty_not_scored(self) -> None:
        """The follow-up question never contributes."""
        encoded = encode_anxiety({0: 1, 7: 3})
        assert score_anxiety(encoded).total_score == 1

    def test_analysis_help_threshold(self) -> None:
        """Professional help is suggested from moderate upward."""
        _, mild = AnxietyScorer().analyze(encode_anxiety(dict.fromkeys(range(5), 1)))
        _, moderate = AnxietyScorer().analyze(encode_anxiety(dict.fromkeys(range(5), 2)))
        assert mild.severity_level == "mild"
        assert not mild.needs_professional_help
        assert moderate.severity_level == "moderate"
        assert moderate.needs_professional_help
        assert moderate.severity_description


class TestDepressionScorer:
    """Tests for PHQ-9 scoring."""

    def test_reference_vector(self, moderate_depression_answers: dict[int, int]) -> None:
        """[3,3,2,2,1,1,1,1,0] totals 14, moderate, no urgent flag."""
        encoded = encode_depression(moderate_depression_answers)
        result, analysis = DepressionScorer().analyze(encoded)
        assert result.total_score == 14
        assert result.level is DepressionSeverity.MODERATE
        assert result.contributions == (3, 3, 2, 2, 1, 1, 1, 1, 0)
        assert not analysis.requires_immediate_attention

    def test_self_harm_item_sets_urgent_flag(
        self, moderate_depression_answers: dict[int, int]
    ) -> None:
        """Item 9 above zero is urgent regardless of total."""
        answers = {**moderate_depression_answers, 8: 2}
        encoded = encode_depression(answers)
        assert encoded[DEPRESSION_SELF_HARM_FIELD] == "more_than_half_days"
        result, analysis = DepressionScorer().analyze(encoded)
        assert result.total_score == 16
        assert analysis.requires_immediate_attention
        assert analysis.needs_professional_help

    def test_self_harm_flag_on_minimal_total(self) -> None:
        """A low total does not suppress the urgent flag."""
        _, analysis = DepressionScorer().analyze(encode_depression({8: 1}))
        assert analysis.severity_level == "minimal"
        assert analysis.requires_immediate_attention
        assert analysis.needs_professional_help

    def test_moderately_severe_band(self) -> None:
        """Totals 15-19 are moderately severe."""
        result = score_depression(encode_depression(dict.fromkeys(range(8), 2)))
        assert result.total_score == 16
        assert result.level is DepressionSeverity.MODERATELY_SEVERE

    def test_unknown_codes_score_zero(self) -> None:
        """Unexpected stored codes contribute nothing."""
        result = score_depression({"feeling_down_depressed_hopeless": "always"})
        assert result.total_score == 0


class TestStressScorer:
    """Tests for PSS-10 scoring."""

    def test_reverse_scored_fixed_vector(self, stress_fixed_vector: dict[int, int]) -> None:
        """Positive items are reverse scored: the vector totals 40."""
        result = score_stress(encode_stress(stress_fixed_vector))
        assert result.contributions == (4,) * 10
        assert result.total_score == 40
        assert result.level is StressLevel.HIGH

    def test_all_zero_answers(self) -> None:
        """All-zero raw answers still score 16 through the reversed items."""
        result = score_stress(encode_stress({}))
        assert result.total_score == 16
        assert result.level is StressLevel.MODERATE

    def test_lowest_possible_stress(self) -> None:
        """Reversed items at 4 and the rest at 0 give the lowest band."""
        raw = {3: 4, 4: 4, 6: 4, 7: 4}
        result = score_stress(encode_stress(raw))
        assert result.total_score == 0
        assert result.level is StressLevel.LOW

    def test_needs_help_from_moderate(self) -> None:
        """Moderate stress recommends professional help."""
        _, analysis = StressScorer().analyze(encode_stress({}))
        assert analysis.needs_professional_help
        assert not analysis.requires_immediate_attention


class TestGetScorer:
    """Tests for scorer lookup."""

    def test_additive_types(self) -> None:
        """Each additive type has a scorer."""
        assert isinstance(get_scorer(AssessmentType.ANXIETY), AnxietyScorer)
        assert isinstance(get_scorer(AssessmentType.DEPRESSION), DepressionScorer)
        assert isinstance(get_scorer(AssessmentType.STRESS), StressScorer)

    def test_non_additive_types(self) -> None:
        """Screener and checklist are not additive."""
        assert get_scorer(AssessmentType.SUICIDE) is None
        assert get_scorer(AssessmentType.CHECKLIST) is None
