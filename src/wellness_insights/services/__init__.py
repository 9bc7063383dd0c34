"""Business logic services.

This module provides the services that sit on top of scoring: submission
payloads, history retrieval, trend comparison, dashboard insights, personal
summaries and retake cooldowns.

Public API:
- build_submission: Encode, score and package a questionnaire submission
- HistoryProvider: Protocol for reading stored assessments
- InMemoryHistoryProvider: List-backed history provider
- TrendComparator: First-vs-last comparison of trend points
- InsightGenerator: Prioritized insights from trends and latest records
- InsightService: Loads history and produces insights for one student
- build_personal_summary / compute_stats: Counts and score statistics
- cooldown_status: Retake cooldown state after an assessment
"""

from wellness_insights.services.cooldown import cooldown_days, cooldown_status
from wellness_insights.services.history import (
    HistoryProvider,
    InMemoryHistoryProvider,
    build_trend_points,
    fetch_all,
    parse_time_range,
)
from wellness_insights.services.insights import InsightGenerator, InsightService, sort_insights
from wellness_insights.services.submission import build_submission
from wellness_insights.services.summary import build_personal_summary, compute_stats
from wellness_insights.services.trend import TrendComparator, level_rank

__all__ = [
    "HistoryProvider",
    "InMemoryHistoryProvider",
    "InsightGenerator",
    "InsightService",
    "TrendComparator",
    "build_personal_summary",
    "build_submission",
    "build_trend_points",
    "compute_stats",
    "cooldown_days",
    "cooldown_status",
    "fetch_all",
    "level_rank",
    "parse_time_range",
    "sort_insights",
]
