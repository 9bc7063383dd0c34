"""Assessment creation payloads.

Combines encoding and scoring into the body the backend expects when a
student submits a questionnaire: the encoded answer fields, the user id, and
the computed score, level and analysis.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wellness_insights.domain.enums import AssessmentType
from wellness_insights.domain.exceptions import UnknownInstrumentError
from wellness_insights.infrastructure.logging import get_logger
from wellness_insights.scoring.additive import get_scorer
from wellness_insights.scoring.checklist import ChecklistAnalyzer
from wellness_insights.scoring.encoding import encode, encode_checklist, resolve_instrument
from wellness_insights.scoring.suicide import build_suicide_analysis, screen_suicide

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

logger = get_logger(__name__)


def build_submission(
    instrument: AssessmentType | str,
    user_id: str,
    raw: Mapping[Any, Any],
    *,
    analyzer: ChecklistAnalyzer | None = None,
    analysis_date: datetime | None = None,
) -> dict[str, Any]:
    """Build the creation payload for one submission.

    Args:
        instrument: Assessment type.
        user_id: Submitting student.
        raw: Form answers keyed by question index (checklist: question id).
        analyzer: Checklist analyzer. If None, one is built from config.
        analysis_date: Timestamp for the checklist analysis. Left out of the
            payload when not given.

    Returns:
        JSON-serializable payload.

    Raises:
        UnknownInstrumentError: If the instrument is not tracked.
    """
    kind = resolve_instrument(instrument)

    if kind is AssessmentType.CHECKLIST:
        maps = encode_checklist(raw)
        analysis = (analyzer or ChecklistAnalyzer()).analyze(maps, analysis_date)
        payload: dict[str, Any] = {"userId": user_id, **maps}
        payload["checklist_analysis"] = analysis.to_payload()
        return payload

    encoded = encode(kind, raw)
    payload = {"userId": user_id, **encoded}

    if kind is AssessmentType.SUICIDE:
        result = screen_suicide(encoded)
        payload.update(
            {
                "riskLevel": result.risk_level.value,
                "riskScore": result.risk_score,
                "requires_immediate_intervention": result.requires_immediate_intervention,
                "analysis": build_suicide_analysis(result).to_payload(),
            }
        )
        if result.requires_immediate_intervention:
            logger.warning("Suicide screen requires immediate intervention")
        return payload

    scorer = get_scorer(kind)
    if scorer is None:
        raise UnknownInstrumentError(kind.value)
    score, analysis_summary = scorer.analyze(encoded)
    payload.update(
        {
            "totalScore": score.total_score,
            "severityLevel": score.level.value,
            "analysis": analysis_summary.to_payload(),
        }
    )
    return payload
