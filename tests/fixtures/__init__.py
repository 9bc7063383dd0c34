"""Test fixtures module.

Record factories shaped like the backend's stored assessments. These MUST NOT
be imported from production code (src/).
"""

from __future__ import annotations

from tests.fixtures.records import (
    FailingHistoryProvider,
    make_assessment,
    make_checklist,
    make_suicide,
)

__all__ = ["FailingHistoryProvider", "make_assessment", "make_checklist", "make_suicide"]
