"""Domain exceptions for the blog bounded context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldViolation:
    """A single field that failed validation and the reason why."""

    field: str
    reason: str

    def as_dict(self) -> dict[str, str]:
        """Return the violation as a JSON-friendly dictionary."""
        return {"field": self.field, "reason": self.reason}


class ValidationFailedError(ValueError):
    """Raised when an aggregate would be constructed in an invalid state.

    Carries every violated field so callers can report them all at once.
    No aggregate is ever produced when this is raised, so a failed update
    leaves the stored entity untouched.
    """

    def __init__(self, violations: list[FieldViolation]):
        self.violations = list(violations)
        summary = "; ".join(f"{v.field}: {v.reason}" for v in self.violations)
        super().__init__(f"Validation failed: {summary}")
