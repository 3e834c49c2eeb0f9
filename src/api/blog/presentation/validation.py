"""Request validation helpers for the blog API.

Every validation failure, whether raised by a request model or by an
aggregate invariant, is reported as HTTP 400 with the full list of failing
fields:

    {"detail": [{"field": "email", "reason": "..."}]}
"""

from __future__ import annotations

from typing import Annotated, Any, Sequence

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import AfterValidator, StringConstraints
from pydantic_core import PydanticCustomError

from blog.domain.exceptions import FieldViolation, ValidationFailedError

# Request locations that are not part of the field name
_LOCATION_PREFIXES = {"body", "path", "query"}


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank", "must not be blank")
    return value


def non_blank(max_length: int) -> Any:
    """Build a string type that is length-limited and not only whitespace."""
    return Annotated[
        str, StringConstraints(max_length=max_length), AfterValidator(_reject_blank)
    ]


def violations_from_errors(errors: Sequence[Any]) -> list[FieldViolation]:
    """Convert pydantic error dictionaries into field violations."""
    violations = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) or "body"
        violations.append(FieldViolation(field=field, reason=error.get("msg", "")))
    return violations


def validation_failed(error: ValidationFailedError) -> HTTPException:
    """Build the 400 response for a failed aggregate invariant."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[violation.as_dict() for violation in error.violations],
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request payloads as 400 with every failing field."""
    violations = violations_from_errors(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": [violation.as_dict() for violation in violations]},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the blog API exception handlers on the application."""
    app.add_exception_handler(
        RequestValidationError,
        request_validation_exception_handler,  # type: ignore[arg-type]
    )
