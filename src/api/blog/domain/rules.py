"""Field rules shared by blog aggregates.

Each rule appends to a list of violations instead of raising, so an
aggregate can report every invalid field in a single error.
"""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email

from blog.domain.exceptions import FieldViolation

# Lengths mirror the column sizes of the users and posts tables.
FIRST_NAME_MAX_LENGTH = 50
LAST_NAME_MAX_LENGTH = 100
USERNAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
IMAGE_MAX_LENGTH = 500
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 255


def require_text(
    violations: list[FieldViolation], field: str, value: object, max_length: int
) -> None:
    """Check that a required text field is a non-blank string within bounds."""
    if not isinstance(value, str) or not value.strip():
        violations.append(FieldViolation(field, "must not be blank"))
        return
    if len(value) > max_length:
        violations.append(
            FieldViolation(field, f"must be at most {max_length} characters")
        )


def optional_text(
    violations: list[FieldViolation], field: str, value: object, max_length: int
) -> None:
    """Check that an optional text field, when present, is within bounds."""
    if value is None:
        return
    if not isinstance(value, str):
        violations.append(FieldViolation(field, "must be a string"))
        return
    if len(value) > max_length:
        violations.append(
            FieldViolation(field, f"must be at most {max_length} characters")
        )


def require_email(violations: list[FieldViolation], field: str, value: object) -> None:
    """Check that a required field holds a well-formed email address."""
    if not isinstance(value, str) or not value.strip():
        violations.append(FieldViolation(field, "must not be blank"))
        return
    if len(value) > EMAIL_MAX_LENGTH:
        violations.append(
            FieldViolation(field, f"must be at most {EMAIL_MAX_LENGTH} characters")
        )
        return
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        violations.append(FieldViolation(field, "must be a valid email address"))
