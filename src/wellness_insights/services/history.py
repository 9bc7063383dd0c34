"""Assessment history retrieval and trend-point reduction.

Records are owned by the backend. The core only reads them through a
``HistoryProvider``; ``InMemoryHistoryProvider`` serves tests and the CLI.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING, Protocol

from wellness_insights.domain.entities import AssessmentRecord, ChecklistRecord, TrendPoint
from wellness_insights.domain.enums import AssessmentType
from wellness_insights.domain.exceptions import HistoryUnavailableError, ValidationError
from wellness_insights.domain.value_objects import TimeWindow
from wellness_insights.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from wellness_insights.domain.entities import HistoryRecord

logger = get_logger(__name__)

TIME_RANGES: dict[str, timedelta] = {
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
    "1y": timedelta(days=365),
}

UNKNOWN_LEVEL = "unknown"


class HistoryProvider(Protocol):
    """Source of a student's stored assessments."""

    def fetch(
        self,
        user_id: str,
        assessment_type: AssessmentType,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[HistoryRecord]:
        """Return records of one type completed within [start, end].

        Raises:
            HistoryUnavailableError: If the records cannot be retrieved.
        """
        ...


def parse_time_range(time_range: str, now: datetime | None = None) -> TimeWindow:
    """Turn a range token into a window ending now.

    Args:
        time_range: One of "7d", "30d", "90d", "1y".
        now: Window end (defaults to the current UTC time).

    Returns:
        The time window.

    Raises:
        ValidationError: If the token is not supported.
    """
    span = TIME_RANGES.get(time_range)
    if span is None:
        raise ValidationError(f"Unsupported time range: {time_range}")
    end = now or datetime.now(UTC)
    return TimeWindow(start=end - span, end=end, label=time_range)


def as_utc(moment: datetime) -> datetime:
    """Aware UTC copy of a timestamp; naive values are read as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def record_type(record: HistoryRecord) -> AssessmentType | None:
    """Assessment type of a record (checklists carry no type field)."""
    if isinstance(record, ChecklistRecord):
        return AssessmentType.CHECKLIST
    return record.assessment_type


class InMemoryHistoryProvider:
    """History provider backed by a list of records.

    Records without a ``type`` field are grouped under ``default_type``
    when one is given.
    """

    def __init__(
        self,
        records: Iterable[HistoryRecord] = (),
        default_type: AssessmentType | None = None,
    ) -> None:
        self._records: dict[tuple[str, AssessmentType], list[HistoryRecord]] = defaultdict(list)
        self._default_type = default_type
        for record in records:
            self.add(record)

    def add(self, record: HistoryRecord) -> None:
        """Store one record.

        Raises:
            ValidationError: If the record's type cannot be determined.
        """
        kind = record_type(record) or self._default_type
        if kind is None:
            raise ValidationError(f"Record {record.id} has no assessment type")
        self._records[(record.user_id, kind)].append(record)

    def user_ids(self) -> list[str]:
        """Users with at least one stored record, sorted."""
        return sorted({user_id for user_id, _ in self._records})

    def fetch(
        self,
        user_id: str,
        assessment_type: AssessmentType,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[HistoryRecord]:
        records = self._records.get((user_id, assessment_type), [])
        lower = as_utc(start) if start is not None else None
        upper = as_utc(end) if end is not None else None
        return [
            record
            for record in records
            if (lower is None or as_utc(record.assessment_date) >= lower)
            and (upper is None or as_utc(record.assessment_date) <= upper)
        ]


def fetch_all(
    provider: HistoryProvider,
    user_id: str,
    window: TimeWindow | None = None,
) -> dict[AssessmentType, list[HistoryRecord]]:
    """Fetch every tracked type, treating an unavailable source as empty.

    Args:
        provider: History source.
        user_id: Student id.
        window: Optional window; None fetches all records.

    Returns:
        Records per assessment type, in tracked order.
    """
    start = window.start if window else None
    end = window.end if window else None
    histories: dict[AssessmentType, list[HistoryRecord]] = {}
    for assessment_type in AssessmentType.tracked():
        try:
            histories[assessment_type] = provider.fetch(user_id, assessment_type, start, end)
        except HistoryUnavailableError as e:
            logger.warning(
                "History unavailable, using empty window",
                assessment_type=assessment_type.value,
                reason=e.reason,
            )
            histories[assessment_type] = []
    return histories


def _requires_intervention(record: HistoryRecord) -> bool | None:
    if (
        not isinstance(record, AssessmentRecord)
        or record.assessment_type is not AssessmentType.SUICIDE
    ):
        return None
    analysis_flag = bool(record.analysis and record.analysis.requires_immediate_intervention)
    return record.requires_immediate_intervention or analysis_flag


def build_trend_points(records: Sequence[HistoryRecord]) -> list[TrendPoint]:
    """Reduce records to one trend point per calendar day.

    Points are in ascending date order. When several records share a day
    (UTC), the latest one supplies the point and ``count`` is the number of
    records that day.

    Args:
        records: Records of a single assessment type, in any order.

    Returns:
        Trend points in ascending order.
    """
    ordered = sorted(records, key=lambda record: as_utc(record.assessment_date))
    by_day: dict[date, list[HistoryRecord]] = {}
    for record in ordered:
        by_day.setdefault(as_utc(record.assessment_date).date(), []).append(record)

    points: list[TrendPoint] = []
    for day_records in by_day.values():
        last = day_records[-1]
        points.append(
            TrendPoint(
                score=last.total_score,
                level=last.level or UNKNOWN_LEVEL,
                date=last.assessment_date,
                requires_intervention=_requires_intervention(last),
                count=len(day_records),
            )
        )
    return points


def latest_records(
    histories: Mapping[AssessmentType, Sequence[HistoryRecord]],
) -> dict[AssessmentType, HistoryRecord | None]:
    """Most recent record per assessment type (None when a type has none)."""
    return {
        assessment_type: max(records, key=lambda r: as_utc(r.assessment_date)) if records else None
        for assessment_type, records in histories.items()
    }
