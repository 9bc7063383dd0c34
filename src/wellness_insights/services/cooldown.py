"""Retake cooldown policy.

After an additive assessment, the student waits before retaking it. The
wait depends on the band: the more severe the result, the sooner a retake is
offered so change can be tracked closely.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

from wellness_insights.config.domain_constants import COOLDOWN_DAYS, DEFAULT_COOLDOWN_DAYS
from wellness_insights.domain.enums import AssessmentType
from wellness_insights.domain.exceptions import UnknownInstrumentError
from wellness_insights.domain.value_objects import CooldownStatus

_SECONDS_PER_DAY = 86400


def cooldown_days(assessment_type: AssessmentType, level: str | None) -> int:
    """Cooldown length for a band.

    Args:
        assessment_type: Additive instrument.
        level: Band of the last assessment (case-insensitive).

    Returns:
        Days until a retake; the default for unknown levels.

    Raises:
        UnknownInstrumentError: If the instrument has no cooldown policy.
    """
    table = COOLDOWN_DAYS.get(assessment_type.value)
    if table is None:
        raise UnknownInstrumentError(assessment_type.value)
    if level is None:
        return DEFAULT_COOLDOWN_DAYS
    return table.get(level.strip().lower(), DEFAULT_COOLDOWN_DAYS)


def cooldown_status(
    assessment_type: AssessmentType,
    last_assessment_date: datetime,
    last_level: str,
    now: datetime | None = None,
) -> CooldownStatus:
    """Cooldown state after the last assessment.

    Args:
        assessment_type: Additive instrument.
        last_assessment_date: When the last assessment was completed.
        last_level: Band of the last assessment.
        now: Reference time (defaults to the current UTC time).

    Returns:
        The cooldown status; days remaining is rounded up.
    """
    period = cooldown_days(assessment_type, last_level)
    next_available = last_assessment_date + timedelta(days=period)
    current = now or datetime.now(UTC)
    if next_available.tzinfo is not None and current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    elif next_available.tzinfo is None and current.tzinfo is not None:
        current = current.astimezone(UTC).replace(tzinfo=None)

    remaining_seconds = (next_available - current).total_seconds()
    is_active = remaining_seconds > 0
    return CooldownStatus(
        is_active=is_active,
        days_remaining=math.ceil(remaining_seconds / _SECONDS_PER_DAY) if is_active else 0,
        cooldown_period_days=period,
        next_available_date=next_available,
        last_assessment_date=last_assessment_date,
        last_severity_level=last_level,
    )
