"""Domain-specific exceptions for Wellness Insights.

This module defines a hierarchical exception system for domain errors:

    DomainError (base)
    ├── ValidationError
    ├── TaxonomyError
    ├── AssessmentError
    │   ├── UnknownInstrumentError
    │   └── ChecklistSchemaError
    └── HistoryError
        └── HistoryUnavailableError

Encoding never raises: malformed answers are clamped or defaulted instead.
These errors cover contract breaks with the backend schema and failures of
the history source.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain errors.

    All domain-specific exceptions should inherit from this class
    to allow for catching all domain errors with a single except clause.
    """


class ValidationError(DomainError):
    """Raised when domain validation fails.

    Used for general validation errors that don't fit into more
    specific exception categories.
    """


class TaxonomyError(DomainError):
    """Raised when the static checklist taxonomy is inconsistent.

    The taxonomy must match the backend schema field-for-field, so this
    is a contract break rather than a recoverable condition.
    """


class AssessmentError(DomainError):
    """Errors during scoring or analysis of an assessment."""


class UnknownInstrumentError(AssessmentError):
    """Raised when an operation is asked for an instrument it does not support."""

    def __init__(self, instrument: str) -> None:
        """Initialize with the unsupported instrument name.

        Args:
            instrument: The instrument or assessment type that was requested.
        """
        self.instrument = instrument
        super().__init__(f"Unsupported instrument: {instrument}")


class ChecklistSchemaError(AssessmentError):
    """Raised when a checklist record names a category or field outside the taxonomy."""

    def __init__(self, category: str, field: str | None = None) -> None:
        """Initialize with the offending category and optional field.

        Args:
            category: Category key found in the record.
            field: Item field name found in the record, if the category is known.
        """
        self.category = category
        self.field = field
        location = category if field is None else f"{category}.{field}"
        super().__init__(f"Checklist field not in taxonomy: {location}")


class HistoryError(DomainError):
    """Errors while retrieving assessment history."""


class HistoryUnavailableError(HistoryError):
    """Raised by a history provider when records cannot be retrieved.

    Insight generation treats this as an empty history window.
    """

    def __init__(self, assessment_type: str, reason: str) -> None:
        """Initialize with the affected assessment type and cause.

        Args:
            assessment_type: The assessment type whose history failed to load.
            reason: Description of the failure.
        """
        self.assessment_type = assessment_type
        self.reason = reason
        super().__init__(f"History unavailable for {assessment_type}: {reason}")
