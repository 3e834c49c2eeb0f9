"""User aggregate for the blog context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from blog.domain import rules
from blog.domain.exceptions import FieldViolation, ValidationFailedError
from blog.domain.value_objects import UserId, UserPatch


@dataclass(frozen=True)
class User:
    """User aggregate representing an author in the system.

    Business rules:
    - first_name is required, non-blank, at most 50 characters
    - username is required, non-blank, at most 100 characters
    - email is required, well-formed, at most 255 characters
    - last_name (100) and image (500) are optional

    Email uniqueness is a store-wide rule and is enforced by the service
    and the repository, not by the aggregate.

    Timestamps are None until the user has been persisted; the repository
    stamps them on save.
    """

    id: UserId
    first_name: str
    username: str
    email: str
    last_name: str | None = None
    image: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        violations: list[FieldViolation] = []
        rules.require_text(
            violations, "first_name", self.first_name, rules.FIRST_NAME_MAX_LENGTH
        )
        rules.optional_text(
            violations, "last_name", self.last_name, rules.LAST_NAME_MAX_LENGTH
        )
        rules.require_text(
            violations, "username", self.username, rules.USERNAME_MAX_LENGTH
        )
        rules.require_email(violations, "email", self.email)
        rules.optional_text(violations, "image", self.image, rules.IMAGE_MAX_LENGTH)
        if violations:
            raise ValidationFailedError(violations)

    @classmethod
    def create(
        cls,
        first_name: str,
        username: str,
        email: str,
        last_name: str | None = None,
        image: str | None = None,
    ) -> User:
        """Factory method for creating a new user.

        Generates the identifier. Timestamps are assigned when saved.

        Raises:
            ValidationFailedError: If any field breaks a business rule
        """
        return cls(
            id=UserId.generate(),
            first_name=first_name,
            username=username,
            email=email,
            last_name=last_name,
            image=image,
        )

    def with_changes(self, patch: UserPatch) -> User:
        """Return a copy of this user with the supplied patch fields merged.

        Unsupplied fields keep their current values. The original instance is
        never modified, so a rejected patch leaves nothing half-applied.

        Raises:
            ValidationFailedError: If the merged user breaks a business rule
        """
        return replace(self, **patch.changes())

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
