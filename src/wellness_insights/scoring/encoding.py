"""Response encoding: raw form answers to named categorical codes.

The questionnaire forms submit ``{question_index: number}``. Each instrument
maps those numbers onto its closed code set (see ``domain.enums``) under the
backend field names. Encoding never raises into the caller:

- missing indices default to the lowest code
- out-of-range numbers clamp to the nearest valid code
- values that cannot be read as a number default to the lowest code

Inputs are never mutated; the same input always yields an equal output.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, TypeVar

from wellness_insights.config.checklist_taxonomy import FIELDS_BY_CATEGORY, ITEMS_BY_QUESTION
from wellness_insights.config.domain_constants import (
    ANXIETY_FIELDS,
    DEPRESSION_FIELDS,
    DIFFICULTY_FIELD,
    STRESS_FIELDS,
    SUICIDE_BASE_FIELDS,
    SUICIDE_BEHAVIOR_FIELD,
    SUICIDE_CONDITIONAL_FIELDS,
    SUICIDE_TIMEFRAME_FIELD,
    SUICIDE_TIMEFRAME_INDEX,
)
from wellness_insights.domain.enums import (
    AssessmentType,
    BehaviorTimeframe,
    ChecklistMark,
    Difficulty,
    Frequency,
    OrdinalCode,
    StressFrequency,
    YesNo,
)
from wellness_insights.domain.exceptions import UnknownInstrumentError
from wellness_insights.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)

C = TypeVar("C", bound=OrdinalCode)

EncodedResponse = dict[str, str]
"""Field name to code value for one instrument submission."""

EncodedChecklist = dict[str, dict[str, str]]
"""Category key to item map for a checklist submission."""

_SUICIDE_GATE_INDEX = 1
_SUICIDE_CONDITIONAL_OFFSET = 2


def coerce_answer(value: Any) -> int | None:
    """Read a raw answer as an integer.

    Args:
        value: Raw answer (int, float, numeric string or None).

    Returns:
        The integer value, or None when the answer is missing or unreadable.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            logger.warning("Non-finite answer defaulted", value_type="float")
            return None
        return round(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            logger.warning("Unreadable answer defaulted", value_type="str")
            return None
    logger.warning("Unsupported answer type defaulted", value_type=type(value).__name__)
    return None


def encode_answer(code_cls: type[C], value: Any) -> C:
    """Encode one raw answer with clamping.

    Args:
        code_cls: Ordered code enum of the instrument.
        value: Raw answer.

    Returns:
        The code at the clamped ordinal (lowest code when missing).
    """
    number = coerce_answer(value)
    if number is None:
        return code_cls.lowest()
    code = code_cls.from_int(number)
    if code.ordinal != number:
        logger.debug("Answer clamped", code_set=code_cls.__name__, raw=number, clamped=code.ordinal)
    return code


def _normalize_keys(raw: Mapping[Any, Any]) -> dict[int, Any]:
    """Return a copy keyed by integer index; non-numeric keys are dropped."""
    normalized: dict[int, Any] = {}
    for key, value in raw.items():
        index = coerce_answer(key)
        if index is None:
            continue
        normalized[index] = value
    return normalized


def _encode_items(
    fields: tuple[str, ...], code_cls: type[OrdinalCode], answers: Mapping[int, Any]
) -> EncodedResponse:
    return {
        name: encode_answer(code_cls, answers.get(index)).value
        for index, name in enumerate(fields)
    }


def encode_anxiety(raw: Mapping[Any, Any]) -> EncodedResponse:
    """Encode GAD-7 answers (indices 0-6, optional difficulty at 7)."""
    answers = _normalize_keys(raw)
    encoded = _encode_items(ANXIETY_FIELDS, Frequency, answers)
    difficulty_index = len(ANXIETY_FIELDS)
    if difficulty_index in answers:
        encoded[DIFFICULTY_FIELD] = encode_answer(Difficulty, answers[difficulty_index]).value
    return encoded


def encode_depression(raw: Mapping[Any, Any]) -> EncodedResponse:
    """Encode PHQ-9 answers (indices 0-8, optional difficulty at 9)."""
    answers = _normalize_keys(raw)
    encoded = _encode_items(DEPRESSION_FIELDS, Frequency, answers)
    difficulty_index = len(DEPRESSION_FIELDS)
    if difficulty_index in answers:
        encoded[DIFFICULTY_FIELD] = encode_answer(Difficulty, answers[difficulty_index]).value
    return encoded


def encode_stress(raw: Mapping[Any, Any]) -> EncodedResponse:
    """Encode PSS-10 answers (indices 0-9, 5-point scale)."""
    return _encode_items(STRESS_FIELDS, StressFrequency, _normalize_keys(raw))


def encode_suicide(raw: Mapping[Any, Any]) -> EncodedResponse:
    """Encode suicide-risk screener answers with skip logic.

    Items 0 and 1 are always encoded. Items 2-5 are encoded only when item 1
    is "yes"; otherwise they are omitted, not zero-filled. The behaviour
    timeframe (index 6) is encoded only when preparatory behaviour (item 5)
    is "yes".
    """
    answers = _normalize_keys(raw)
    encoded = _encode_items(SUICIDE_BASE_FIELDS, YesNo, answers)

    gate = encode_answer(YesNo, answers.get(_SUICIDE_GATE_INDEX))
    if gate is not YesNo.YES:
        skipped = [
            index
            for index in range(_SUICIDE_CONDITIONAL_OFFSET, SUICIDE_TIMEFRAME_INDEX + 1)
            if index in answers
        ]
        if skipped:
            logger.debug("Conditional answers ignored by skip logic", indices=skipped)
        return encoded

    for offset, name in enumerate(SUICIDE_CONDITIONAL_FIELDS):
        answer = answers.get(offset + _SUICIDE_CONDITIONAL_OFFSET)
        encoded[name] = encode_answer(YesNo, answer).value

    if encoded[SUICIDE_BEHAVIOR_FIELD] == YesNo.YES.value:
        encoded[SUICIDE_TIMEFRAME_FIELD] = encode_answer(
            BehaviorTimeframe, answers.get(SUICIDE_TIMEFRAME_INDEX)
        ).value
    return encoded


def encode_checklist(raw: Mapping[Any, Any]) -> EncodedChecklist:
    """Encode checklist answers keyed by question id (1-183).

    Every taxonomy field is present in the output; unanswered items are
    "not_checked". Question ids outside the taxonomy are ignored.
    """
    encoded: EncodedChecklist = {
        category.value: dict.fromkeys(fields, ChecklistMark.NOT_CHECKED.value)
        for category, fields in FIELDS_BY_CATEGORY.items()
    }
    unknown: list[int] = []
    for question_id, value in _normalize_keys(raw).items():
        item = ITEMS_BY_QUESTION.get(question_id)
        if item is None:
            unknown.append(question_id)
            continue
        encoded[item.category.value][item.field] = encode_answer(ChecklistMark, value).value
    if unknown:
        logger.debug("Unknown checklist question ids ignored", count=len(unknown))
    return encoded


def encode(
    instrument: AssessmentType | str, raw: Mapping[Any, Any]
) -> EncodedResponse | EncodedChecklist:
    """Encode a raw response set for any instrument.

    Args:
        instrument: Assessment type (enum or its string value).
        raw: Mapping of question index (or checklist question id) to answer.

    Returns:
        Encoded response; nested per category for the checklist.

    Raises:
        UnknownInstrumentError: If the instrument is not one of the five
            tracked assessments. This is a programming error, not bad input.
    """
    kind = _resolve(instrument)
    if kind is AssessmentType.ANXIETY:
        return encode_anxiety(raw)
    if kind is AssessmentType.DEPRESSION:
        return encode_depression(raw)
    if kind is AssessmentType.STRESS:
        return encode_stress(raw)
    if kind is AssessmentType.SUICIDE:
        return encode_suicide(raw)
    return encode_checklist(raw)


def _resolve(instrument: AssessmentType | str) -> AssessmentType:
    try:
        kind = AssessmentType(instrument)
    except ValueError as e:
        raise UnknownInstrumentError(str(instrument)) from e
    if kind is AssessmentType.OVERALL:
        raise UnknownInstrumentError(kind.value)
    return kind


def resolve_instrument(instrument: AssessmentType | str) -> AssessmentType:
    """Resolve an instrument name to a tracked AssessmentType.

    Raises:
        UnknownInstrumentError: If the name is not a tracked assessment.
    """
    return _resolve(instrument)
