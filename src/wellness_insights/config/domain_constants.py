"""Domain constants for the screening instruments.

Centralizes band thresholds, backend field names and fixed item positions so
scorers, trend comparison and insight generation read the same numbers.
Field names must match the backend validation schema field-for-field.
"""

from __future__ import annotations

# Band tables: (inclusive upper bound, band value), checked in order.
# A score above every bound falls into the instrument's top band.
ANXIETY_BANDS: tuple[tuple[int, str], ...] = ((4, "minimal"), (9, "mild"), (14, "moderate"))
ANXIETY_TOP_BAND = "severe"

DEPRESSION_BANDS: tuple[tuple[int, str], ...] = (
    (4, "minimal"),
    (9, "mild"),
    (14, "moderate"),
    (19, "moderately_severe"),
)
DEPRESSION_TOP_BAND = "severe"

STRESS_BANDS: tuple[tuple[int, str], ...] = ((13, "low"), (26, "moderate"))
STRESS_TOP_BAND = "high"

SUICIDE_RISK_BANDS: tuple[tuple[int, str], ...] = ((1, "low"), (3, "moderate"))
SUICIDE_RISK_TOP_BAND = "high"

# GAD-7 items, in questionnaire order (raw index == position).
ANXIETY_FIELDS: tuple[str, ...] = (
    "feeling_nervous_anxious_edge",
    "not_able_stop_control_worrying",
    "worrying_too_much_different_things",
    "trouble_relaxing",
    "restless_hard_sit_still",
    "easily_annoyed_irritable",
    "feeling_afraid_awful_happen",
)

# PHQ-9 items, in questionnaire order. The last item is self-harm ideation.
DEPRESSION_FIELDS: tuple[str, ...] = (
    "little_interest_pleasure_doing_things",
    "feeling_down_depressed_hopeless",
    "trouble_falling_staying_asleep_too_much",
    "feeling_tired_having_little_energy",
    "poor_appetite_overeating",
    "feeling_bad_about_yourself_failure",
    "trouble_concentrating_things",
    "moving_speaking_slowly_fidgety_restless",
    "thoughts_better_off_dead_hurting_yourself",
)
DEPRESSION_SELF_HARM_FIELD = "thoughts_better_off_dead_hurting_yourself"

# Optional functional-impairment question, asked after the scored items.
DIFFICULTY_FIELD = "difficulty_level"

# PSS-10 items, in questionnaire order.
STRESS_FIELDS: tuple[str, ...] = (
    "upset_because_something_unexpected",
    "unable_control_important_things",
    "feeling_nervous_and_stressed",
    "confident_handle_personal_problems",
    "feeling_things_going_your_way",
    "unable_cope_with_all_things",
    "able_control_irritations",
    "feeling_on_top_of_things",
    "angered_things_outside_control",
    "difficulties_piling_up_cant_overcome",
)
STRESS_REVERSED_POSITIONS: frozenset[int] = frozenset({3, 4, 6, 7})
STRESS_SCALE_MAX = 4

# C-SSRS screener. Index 1 gates the conditional items.
SUICIDE_BASE_FIELDS: tuple[str, ...] = (
    "wished_dead_or_sleep_not_wake_up",
    "actually_had_thoughts_killing_self",
)
SUICIDE_GATE_FIELD = "actually_had_thoughts_killing_self"
SUICIDE_CONDITIONAL_FIELDS: tuple[str, ...] = (
    "thinking_about_how_might_do_this",
    "had_thoughts_and_some_intention",
    "started_worked_out_details_how_kill",
    "done_anything_started_prepared_end_life",
)
SUICIDE_TIMEFRAME_FIELD = "behavior_timeframe"
SUICIDE_TIMEFRAME_INDEX = 6

# Conditional items that trigger immediate intervention on their own.
SUICIDE_INTERVENTION_FIELDS: frozenset[str] = frozenset(
    {"had_thoughts_and_some_intention", "started_worked_out_details_how_kill"}
)
# Preparatory behaviour triggers intervention only when recent.
SUICIDE_BEHAVIOR_FIELD = "done_anything_started_prepared_end_life"

# Retake cooldown, in days, keyed by band value.
COOLDOWN_DAYS: dict[str, dict[str, int]] = {
    "anxiety": {"minimal": 30, "mild": 25, "moderate": 14, "severe": 2},
    "depression": {
        "minimal": 30,
        "mild": 25,
        "moderate": 14,
        "moderately_severe": 7,
        "severe": 2,
    },
    "stress": {"low": 30, "moderate": 14, "high": 7},
}
DEFAULT_COOLDOWN_DAYS = 30

CHECKLIST_DISCLAIMER = (
    "This analysis is generated from self-reported checklist items and is not a "
    "clinical diagnosis. Please discuss the results with your guidance counselor."
)


def band_for(score: int, bands: tuple[tuple[int, str], ...], top: str) -> str:
    """Return the band value for a score.

    Args:
        score: Total or risk score.
        bands: Ordered (inclusive upper bound, value) pairs.
        top: Value for scores above every bound.

    Returns:
        The band value.
    """
    for upper, value in bands:
        if score <= upper:
            return value
    return top
