"""Response encoding and instrument scoring.

Modules:
    encoding: Raw form answers to named categorical codes
    additive: GAD-7, PHQ-9 and PSS-10 scorers
    suicide: Branching suicide-risk screener
    checklist: Personal-problems checklist analyzer
"""

from wellness_insights.scoring.additive import (
    AdditiveScorer,
    AnxietyScorer,
    DepressionScorer,
    StressScorer,
    get_scorer,
    score_anxiety,
    score_depression,
    score_stress,
)
from wellness_insights.scoring.checklist import ChecklistAnalyzer, analyze_checklist
from wellness_insights.scoring.encoding import (
    EncodedChecklist,
    EncodedResponse,
    encode,
    encode_anxiety,
    encode_checklist,
    encode_depression,
    encode_stress,
    encode_suicide,
    resolve_instrument,
)
from wellness_insights.scoring.suicide import (
    ScreenState,
    SuicideScreen,
    build_suicide_analysis,
    screen_suicide,
)

__all__ = [
    "AdditiveScorer",
    "AnxietyScorer",
    "ChecklistAnalyzer",
    "DepressionScorer",
    "EncodedChecklist",
    "EncodedResponse",
    "ScreenState",
    "StressScorer",
    "SuicideScreen",
    "analyze_checklist",
    "build_suicide_analysis",
    "encode",
    "encode_anxiety",
    "encode_checklist",
    "encode_depression",
    "encode_stress",
    "encode_suicide",
    "get_scorer",
    "resolve_instrument",
    "score_anxiety",
    "score_depression",
    "score_stress",
    "screen_suicide",
]
