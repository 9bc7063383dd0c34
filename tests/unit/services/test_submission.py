"""Tests for submission payloads."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from wellness_insights.domain.exceptions import UnknownInstrumentError
from wellness_insights.services.submission import build_submission

pytestmark = pytest.mark.unit

WHEN = datetime(2025, 3, 1, tzinfo=UTC)


class TestAdditiveSubmission:
    """Tests for additive instrument payloads."""

    def test_depression_payload(self, moderate_depression_answers: dict[int, int]) -> None:
        """Encoded fields plus score, level and analysis."""
        payload = build_submission("depression", "student-1", moderate_depression_answers)
        assert payload["userId"] == "student-1"
        assert payload["feeling_down_depressed_hopeless"] == "nearly_every_day"
        assert payload["totalScore"] == 14
        assert payload["severityLevel"] == "moderate"
        assert payload["analysis"]["needsProfessionalHelp"] is True
        assert payload["analysis"]["requiresImmediateAttention"] is False

    def test_json_serializable(self, stress_fixed_vector: dict[int, int]) -> None:
        """Payloads cross the network as JSON."""
        payload = build_submission("stress", "student-1", stress_fixed_vector)
        assert json.loads(json.dumps(payload)) == payload
        assert payload["totalScore"] == 40

    def test_idempotent(self) -> None:
        """Encode-and-score twice yields identical payloads."""
        raw = {0: 2, 1: "3", 2: 9, 5: None}
        assert build_submission("anxiety", "u", raw) == build_submission("anxiety", "u", raw)


class TestSuicideSubmission:
    """Tests for screener payloads."""

    def test_intervention_payload(self) -> None:
        """Risk fields and the intervention flag are top-level."""
        payload = build_submission("suicide", "student-1", {0: 1, 1: 1, 4: 1})
        assert payload["riskLevel"] == "moderate"
        assert payload["riskScore"] == 3
        assert payload["requires_immediate_intervention"] is True
        assert payload["analysis"]["crisisProtocolRequired"] is True
        assert "totalScore" not in payload

    def test_closed_branch_payload(self) -> None:
        """Follow-up fields are absent when item 1 is no."""
        payload = build_submission("suicide", "student-1", {0: 1, 1: 0, 3: 1})
        assert "had_thoughts_and_some_intention" not in payload
        assert payload["riskScore"] == 1
        assert payload["requires_immediate_intervention"] is False


class TestChecklistSubmission:
    """Tests for checklist payloads."""

    def test_checklist_payload(self) -> None:
        """Category maps plus the stored analysis."""
        payload = build_submission("checklist", "student-1", {69: 2}, analysis_date=WHEN)
        assert payload["family_home_problems"]["brother_or_sister_being_sick"] == (
            "circled_most_important"
        )
        analysis = payload["checklist_analysis"]
        assert analysis["riskLevel"] == "high"
        assert analysis["urgencyLevel"] == "schedule"
        assert analysis["needsAttention"] is True
        assert json.loads(json.dumps(payload)) == payload

    def test_idempotent_without_date(self) -> None:
        """Without a caller date the payload carries no timestamp and repeats exactly."""
        raw = {1: 1, 153: 2}
        first = build_submission("checklist", "u", raw)
        assert first == build_submission("checklist", "u", raw)
        assert "analysisDate" not in first["checklist_analysis"]

    def test_caller_date_is_stored(self) -> None:
        """A caller-supplied date is serialized into the analysis."""
        payload = build_submission("checklist", "u", {1: 1}, analysis_date=WHEN)
        assert datetime.fromisoformat(payload["checklist_analysis"]["analysisDate"]) == WHEN


class TestUnknownInstrument:
    """Tests for unsupported instruments."""

    def test_rejected(self) -> None:
        """Unknown instruments raise."""
        with pytest.raises(UnknownInstrumentError):
            build_submission("sleep", "u", {})
