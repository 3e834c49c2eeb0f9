"""Value objects for the blog domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and partial updates.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from ulid import ULID


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Args:
            value: ULID string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class PostId:
    """Identifier for a Post aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> PostId:
        """Generate a new PostId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> PostId:
        """Create PostId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid PostId: {value}") from e

        return cls(value=value)


class _Patch:
    """Shared behaviour for partial-update value objects.

    A field left as None means "not supplied" and is never merged.
    """

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields, keyed by aggregate attribute."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        """Check whether no field was supplied."""
        return not self.changes()


@dataclass(frozen=True)
class UserPatch(_Patch):
    """Partial update for a User aggregate."""

    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    email: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class PostPatch(_Patch):
    """Partial update for a Post aggregate.

    The author and view counter are not patchable.
    """

    title: str | None = None
    description: str | None = None
    image: str | None = None
    body: Any = None
