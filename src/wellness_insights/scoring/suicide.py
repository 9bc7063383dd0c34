"""Suicide-risk screener (C-SSRS screening version).

The screener is branching: the two base items are always asked, and the four
follow-up items are asked only when the student reports actual thoughts of
killing themself. The flow is modelled as an explicit state machine:

    initial ──answer_base──┬─> branch_closed
                           └─> branch_open ──answer_branch──> branch_scored

The risk score is the number of "yes" answers among the asked items. The
intervention flag is decided separately from the band, so a low score can
still require immediate intervention.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from wellness_insights.config.domain_constants import (
    SUICIDE_BASE_FIELDS,
    SUICIDE_BEHAVIOR_FIELD,
    SUICIDE_CONDITIONAL_FIELDS,
    SUICIDE_GATE_FIELD,
    SUICIDE_INTERVENTION_FIELDS,
    SUICIDE_TIMEFRAME_FIELD,
)
from wellness_insights.domain.entities import AnalysisSummary
from wellness_insights.domain.enums import BehaviorTimeframe, SuicideRiskLevel, YesNo
from wellness_insights.domain.exceptions import ValidationError
from wellness_insights.domain.value_objects import SuicideScreenResult
from wellness_insights.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)


class ScreenState(StrEnum):
    """Position in the screener flow."""

    INITIAL = "initial"
    BRANCH_CLOSED = "branch_closed"
    BRANCH_OPEN = "branch_open"
    BRANCH_SCORED = "branch_scored"


class SuicideScreen:
    """State machine for one pass through the screener."""

    def __init__(self) -> None:
        self._state = ScreenState.INITIAL
        self._answers: dict[str, YesNo] = {}
        self._timeframe = BehaviorTimeframe.NEVER

    @property
    def state(self) -> ScreenState:
        """Current state."""
        return self._state

    def answer_base(self, wished_dead: YesNo, had_thoughts: YesNo) -> ScreenState:
        """Record the two always-asked items.

        Raises:
            ValidationError: If the base items were already answered.
        """
        if self._state is not ScreenState.INITIAL:
            raise ValidationError(f"Base items already answered (state={self._state})")
        self._answers[SUICIDE_BASE_FIELDS[0]] = wished_dead
        self._answers[SUICIDE_GATE_FIELD] = had_thoughts
        self._state = (
            ScreenState.BRANCH_OPEN if had_thoughts is YesNo.YES else ScreenState.BRANCH_CLOSED
        )
        return self._state

    def answer_branch(
        self,
        answers: Mapping[str, YesNo],
        timeframe: BehaviorTimeframe = BehaviorTimeframe.NEVER,
    ) -> ScreenState:
        """Record the follow-up items.

        Args:
            answers: Follow-up field to answer; missing items count as "no".
            timeframe: When preparatory behaviour occurred.

        Raises:
            ValidationError: If the branch is not open.
        """
        if self._state is not ScreenState.BRANCH_OPEN:
            raise ValidationError(f"Follow-up items are not asked in state {self._state}")
        for name in SUICIDE_CONDITIONAL_FIELDS:
            self._answers[name] = answers.get(name, YesNo.NO)
        self._timeframe = timeframe
        self._state = ScreenState.BRANCH_SCORED
        return self._state

    def requires_immediate_intervention(self) -> bool:
        """Intention, a worked-out plan, or recent preparatory behaviour."""
        if self._state is not ScreenState.BRANCH_SCORED:
            return False
        if any(self._answers[name] is YesNo.YES for name in SUICIDE_INTERVENTION_FIELDS):
            return True
        return (
            self._answers[SUICIDE_BEHAVIOR_FIELD] is YesNo.YES
            and self._timeframe is BehaviorTimeframe.PAST_THREE_MONTHS
        )

    def result(self) -> SuicideScreenResult:
        """Summarize a completed screen.

        Raises:
            ValidationError: If the screen is not in a terminal state.
        """
        if self._state not in (ScreenState.BRANCH_CLOSED, ScreenState.BRANCH_SCORED):
            raise ValidationError(f"Screen is incomplete (state={self._state})")
        scored_fields = tuple(self._answers)
        risk_score = sum(answer.ordinal for answer in self._answers.values())
        return SuicideScreenResult(
            risk_score=risk_score,
            risk_level=SuicideRiskLevel.from_risk_score(risk_score),
            requires_immediate_intervention=self.requires_immediate_intervention(),
            branch_open=self._state is ScreenState.BRANCH_SCORED,
            scored_fields=scored_fields,
        )


def _yes_no(value: str | None) -> YesNo:
    return YesNo.parse(value) or YesNo.NO


def screen_suicide(encoded: Mapping[str, str]) -> SuicideScreenResult:
    """Run an encoded screener response through the state machine.

    Follow-up answers present when the gating item is "no" are ignored.

    Args:
        encoded: Field name to code value.

    Returns:
        The screen result.
    """
    screen = SuicideScreen()
    state = screen.answer_base(
        _yes_no(encoded.get(SUICIDE_BASE_FIELDS[0])),
        _yes_no(encoded.get(SUICIDE_GATE_FIELD)),
    )
    if state is ScreenState.BRANCH_OPEN:
        timeframe = (
            BehaviorTimeframe.parse(encoded.get(SUICIDE_TIMEFRAME_FIELD)) or BehaviorTimeframe.NEVER
        )
        screen.answer_branch(
            {name: _yes_no(encoded.get(name)) for name in SUICIDE_CONDITIONAL_FIELDS},
            timeframe,
        )
    elif any(name in encoded for name in SUICIDE_CONDITIONAL_FIELDS):
        logger.debug("Follow-up answers ignored on closed branch")
    return screen.result()


_RISK_DESCRIPTIONS: dict[SuicideRiskLevel, str] = {
    SuicideRiskLevel.LOW: "Low suicide risk based on your responses.",
    SuicideRiskLevel.MODERATE: (
        "Moderate suicide risk. Some thoughts of death or suicide were reported."
    ),
    SuicideRiskLevel.HIGH: (
        "High suicide risk. Thoughts of suicide with method or intent were reported."
    ),
}

_RISK_MESSAGES: dict[SuicideRiskLevel, str] = {
    SuicideRiskLevel.LOW: "Keep reaching out to people you trust whenever things feel heavy.",
    SuicideRiskLevel.MODERATE: (
        "Please talk with your guidance counselor soon about what you are going through."
    ),
    SuicideRiskLevel.HIGH: "Please contact your guidance counselor or a crisis line today.",
}

CRISIS_RECOMMENDATIONS: tuple[str, ...] = (
    "Contact your guidance counselor or a crisis hotline right now.",
    "If you are in immediate danger, call emergency services.",
    "Stay with someone you trust until you have spoken to a professional.",
)


def build_suicide_analysis(result: SuicideScreenResult) -> AnalysisSummary:
    """Describe a screen result for the backend payload.

    Args:
        result: Completed screen result.

    Returns:
        Analysis summary with crisis and safety-plan flags.
    """
    level = result.risk_level
    recommendations: list[str] = []
    if result.requires_immediate_intervention:
        recommendations.extend(CRISIS_RECOMMENDATIONS)
    if level.ordinal >= SuicideRiskLevel.MODERATE.ordinal:
        recommendations.append("Work with your guidance counselor on a personal safety plan.")
    if not recommendations:
        recommendations.append("Continue to check in on your wellbeing regularly.")

    return AnalysisSummary(
        risk_level=level.value,
        risk_score=result.risk_score,
        risk_description=_RISK_DESCRIPTIONS[level],
        recommendation_message=_RISK_MESSAGES[level],
        requires_immediate_intervention=result.requires_immediate_intervention,
        crisis_protocol_required=result.requires_immediate_intervention
        or level is SuicideRiskLevel.HIGH,
        safety_plan_needed=level.ordinal >= SuicideRiskLevel.MODERATE.ordinal,
        needs_professional_help=result.requires_immediate_intervention
        or level.ordinal >= SuicideRiskLevel.MODERATE.ordinal,
        recommendations=recommendations,
    )
