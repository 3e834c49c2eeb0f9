"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    SchemaCreationError,
)

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "SchemaCreationError",
]
