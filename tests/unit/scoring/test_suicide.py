"""Tests for the suicide-risk screener."""

from __future__ import annotations

import pytest

from wellness_insights.domain.enums import BehaviorTimeframe, SuicideRiskLevel, YesNo
from wellness_insights.domain.exceptions import ValidationError
from wellness_insights.scoring.encoding import encode_suicide
from wellness_insights.scoring.suicide import (
    CRISIS_RECOMMENDATIONS,
    ScreenState,
    SuicideScreen,
    build_suicide_analysis,
    screen_suicide,
)

pytestmark = pytest.mark.unit


class TestSuicideScreenStateMachine:
    """Tests for state transitions."""

    def test_gate_no_closes_branch(self) -> None:
        """Item 1 = no ends the screen."""
        screen = SuicideScreen()
        assert screen.state is ScreenState.INITIAL
        assert screen.answer_base(YesNo.YES, YesNo.NO) is ScreenState.BRANCH_CLOSED

    def test_gate_yes_opens_branch(self) -> None:
        """Item 1 = yes asks the follow-ups."""
        screen = SuicideScreen()
        assert screen.answer_base(YesNo.NO, YesNo.YES) is ScreenState.BRANCH_OPEN
        assert screen.answer_branch({}) is ScreenState.BRANCH_SCORED

    def test_branch_rejected_when_closed(self) -> None:
        """Follow-ups cannot be answered on a closed branch."""
        screen = SuicideScreen()
        screen.answer_base(YesNo.NO, YesNo.NO)
        with pytest.raises(ValidationError, match="not asked"):
            screen.answer_branch({})

    def test_base_answered_once(self) -> None:
        """Base items cannot be answered twice."""
        screen = SuicideScreen()
        screen.answer_base(YesNo.NO, YesNo.NO)
        with pytest.raises(ValidationError, match="already answered"):
            screen.answer_base(YesNo.NO, YesNo.NO)

    def test_result_requires_terminal_state(self) -> None:
        """An open branch is not a finished screen."""
        screen = SuicideScreen()
        with pytest.raises(ValidationError, match="incomplete"):
            screen.result()
        screen.answer_base(YesNo.YES, YesNo.YES)
        with pytest.raises(ValidationError, match="incomplete"):
            screen.result()


class TestScreenSuicide:
    """Tests for scoring encoded responses."""

    def test_closed_branch_ignores_follow_ups(self) -> None:
        """Item 1 = no excludes items 2-5 from the score."""
        encoded = {
            "wished_dead_or_sleep_not_wake_up": "yes",
            "actually_had_thoughts_killing_self": "no",
            "had_thoughts_and_some_intention": "yes",
            "started_worked_out_details_how_kill": "yes",
        }
        result = screen_suicide(encoded)
        assert result.risk_score == 1
        assert result.risk_level is SuicideRiskLevel.LOW
        assert not result.branch_open
        assert not result.requires_immediate_intervention
        assert len(result.scored_fields) == 2

    def test_all_no_is_low(self) -> None:
        """All-zero answers give the lowest band."""
        result = screen_suicide(encode_suicide({}))
        assert result.risk_score == 0
        assert result.risk_level is SuicideRiskLevel.LOW

    def test_all_yes_is_high_with_intervention(self) -> None:
        """Every item yes scores 6."""
        result = screen_suicide(encode_suicide(dict.fromkeys(range(6), 1)))
        assert result.risk_score == 6
        assert result.risk_level is SuicideRiskLevel.HIGH
        assert result.requires_immediate_intervention
        assert len(result.scored_fields) == 6

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ({1: 1, 2: 1}, False),
            ({1: 1, 3: 1}, True),
            ({1: 1, 4: 1}, True),
            ({1: 1, 5: 1, 6: 2}, True),
            ({1: 1, 5: 1, 6: 1}, False),
            ({1: 1, 5: 1}, False),
        ],
    )
    def test_intervention_rule(self, raw: dict[int, int], expected: bool) -> None:
        """Intention, plan, or recent preparation require intervention."""
        assert screen_suicide(encode_suicide(raw)).requires_immediate_intervention is expected

    def test_intervention_independent_of_band(self) -> None:
        """A moderate score can still require intervention."""
        result = screen_suicide(encode_suicide({1: 1, 3: 1}))
        assert result.risk_level is SuicideRiskLevel.MODERATE
        assert result.requires_immediate_intervention

    def test_timeframe_parsing(self) -> None:
        """Unknown timeframe codes count as never."""
        screen = SuicideScreen()
        screen.answer_base(YesNo.NO, YesNo.YES)
        screen.answer_branch(
            {"done_anything_started_prepared_end_life": YesNo.YES},
            BehaviorTimeframe.LIFETIME_BUT_NOT_RECENT,
        )
        assert not screen.requires_immediate_intervention()


class TestSuicideAnalysis:
    """Tests for the analysis payload."""

    def test_intervention_adds_crisis_recommendations(self) -> None:
        """Crisis protocol follows the intervention flag."""
        analysis = build_suicide_analysis(screen_suicide(encode_suicide({1: 1, 3: 1})))
        assert analysis.crisis_protocol_required
        assert analysis.safety_plan_needed
        assert analysis.requires_immediate_intervention
        assert analysis.recommendations is not None
        assert analysis.recommendations[: len(CRISIS_RECOMMENDATIONS)] == list(
            CRISIS_RECOMMENDATIONS
        )

    def test_low_risk(self) -> None:
        """Low risk needs no safety plan."""
        analysis = build_suicide_analysis(screen_suicide(encode_suicide({})))
        assert analysis.risk_level == "low"
        assert analysis.risk_score == 0
        assert not analysis.crisis_protocol_required
        assert not analysis.safety_plan_needed
        assert analysis.recommendations
