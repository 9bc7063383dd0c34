"""CLI entry point for Wellness Insights.

Usage:
    wellness-insights score depression responses.json --user-id u1
    wellness-insights insights history.json --window 90d

Results are written to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pydantic

import wellness_insights
from wellness_insights.config import get_settings
from wellness_insights.domain.entities import AssessmentRecord, ChecklistRecord
from wellness_insights.domain.enums import AssessmentType
from wellness_insights.domain.exceptions import DomainError
from wellness_insights.infrastructure.logging import get_logger, setup_logging
from wellness_insights.services.history import TIME_RANGES, InMemoryHistoryProvider
from wellness_insights.services.insights import InsightService
from wellness_insights.services.submission import build_submission

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wellness_insights.domain.entities import HistoryRecord

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 2


class InputError(Exception):
    """Input file could not be read or understood."""


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})") from e


def _load_responses(path: Path) -> dict[Any, Any]:
    data = _load_json(path)
    if isinstance(data, list):
        return dict(enumerate(data))
    if isinstance(data, dict):
        return data
    raise InputError(f"{path} must contain a JSON object or array of answers")


def parse_record(data: dict[str, Any]) -> HistoryRecord:
    """Parse one stored record; checklists are recognised by ``date_completed``."""
    if "date_completed" in data:
        return ChecklistRecord.model_validate(data)
    return AssessmentRecord.model_validate(data)


def _load_history(path: Path) -> list[HistoryRecord]:
    data = _load_json(path)
    if not isinstance(data, list):
        raise InputError(f"{path} must contain a JSON array of records")
    records: list[HistoryRecord] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise InputError(f"Record {index} in {path} is not an object")
        try:
            records.append(parse_record(item))
        except pydantic.ValidationError as e:
            raise InputError(
                f"Record {index} in {path} is invalid: {e.error_count()} error(s)"
            ) from e
    return records


def _emit(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def cmd_score(args: argparse.Namespace) -> int:
    """Encode and score one questionnaire submission."""
    raw = _load_responses(args.responses)
    _emit(build_submission(args.instrument, args.user_id, raw))
    return EXIT_OK


def cmd_insights(args: argparse.Namespace) -> int:
    """Generate dashboard insights from a history file."""
    records = _load_history(args.history)
    provider = InMemoryHistoryProvider(records)
    user_id = args.user_id
    if user_id is None:
        users = provider.user_ids()
        if len(users) > 1:
            raise InputError(f"{args.history} holds several users; pass --user-id")
        user_id = users[0] if users else "anonymous"

    now = datetime.fromisoformat(args.now) if args.now else None
    insights = InsightService(provider).progress_insights(user_id, args.window, now)
    _emit([insight.to_payload() for insight in insights])
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wellness-insights",
        description="Score student wellness assessments and generate progress insights",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {wellness_insights.__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser("score", help="Score one questionnaire submission")
    score.add_argument(
        "instrument",
        choices=[t.value for t in AssessmentType.tracked()],
        help="Assessment type",
    )
    score.add_argument("responses", type=Path, help="JSON answers keyed by question index")
    score.add_argument("--user-id", default="anonymous", help="Submitting student id")
    score.set_defaults(handler=cmd_score)

    insights = subparsers.add_parser("insights", help="Generate progress insights")
    insights.add_argument("history", type=Path, help="JSON array of stored records")
    insights.add_argument(
        "--window",
        choices=list(TIME_RANGES),
        default=None,
        help="Trend window (default from TREND_DEFAULT_WINDOW)",
    )
    insights.add_argument(
        "--user-id", default=None, help="Student id (required for multi-user files)"
    )
    insights.add_argument("--now", default=None, help="ISO timestamp used as the window end")
    insights.set_defaults(handler=cmd_insights)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the Wellness Insights CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(get_settings().logging, stream=sys.stderr)
    try:
        result: int = args.handler(args)
    except (InputError, DomainError, ValueError) as e:
        logger.error("Input rejected", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    return result


if __name__ == "__main__":
    sys.exit(main())
