"""Database-specific exceptions shared by all bounded contexts."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when the database cannot be reached."""

    pass


class SchemaCreationError(DatabaseError):
    """Raised when the ORM tables cannot be created at startup."""

    pass


def violated_constraint(error: IntegrityError) -> str | None:
    """Return the name of the constraint the database reported as violated.

    asyncpg attaches ``constraint_name`` to its own exception, which SQLAlchemy
    chains as the cause of the DBAPI error in ``error.orig``. The rendered
    message is never inspected since it also carries the bound parameters.
    """
    for candidate in (error.orig, getattr(error.orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if isinstance(name, str):
            return name
    return None
