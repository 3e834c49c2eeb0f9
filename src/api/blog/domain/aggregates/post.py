"""Post aggregate for the blog context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from blog.domain import rules
from blog.domain.exceptions import FieldViolation, ValidationFailedError
from blog.domain.value_objects import PostId, PostPatch, UserId


@dataclass(frozen=True)
class Post:
    """Post aggregate representing a piece of published content.

    A post references its author by identifier only. The author is a
    separate aggregate shared by any number of posts, and must be resolved
    through the user repository when needed.

    Business rules:
    - title is required, non-blank, at most 100 characters
    - description is required, non-blank, at most 255 characters
    - image is optional, at most 500 characters
    - body is required and treated as an opaque JSON document
    - views starts at 0 and is never negative
    """

    id: PostId
    title: str
    description: str
    body: Any
    author_id: UserId
    image: str | None = None
    views: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        violations: list[FieldViolation] = []
        rules.require_text(violations, "title", self.title, rules.TITLE_MAX_LENGTH)
        rules.require_text(
            violations,
            "description",
            self.description,
            rules.DESCRIPTION_MAX_LENGTH,
        )
        rules.optional_text(violations, "image", self.image, rules.IMAGE_MAX_LENGTH)
        if self.body is None:
            violations.append(FieldViolation("body", "is required"))
        if not isinstance(self.views, int) or self.views < 0:
            violations.append(FieldViolation("views", "must be a non-negative integer"))
        if violations:
            raise ValidationFailedError(violations)

    @classmethod
    def create(
        cls,
        title: str,
        description: str,
        body: Any,
        author_id: UserId,
        image: str | None = None,
    ) -> Post:
        """Factory method for creating a new post with zero views.

        Raises:
            ValidationFailedError: If any field breaks a business rule
        """
        return cls(
            id=PostId.generate(),
            title=title,
            description=description,
            body=body,
            author_id=author_id,
            image=image,
            views=0,
        )

    def with_changes(self, patch: PostPatch) -> Post:
        """Return a copy of this post with the supplied patch fields merged.

        Raises:
            ValidationFailedError: If the merged post breaks a business rule
        """
        return replace(self, **patch.changes())

    def __str__(self) -> str:
        """Return string representation."""
        return f"Post({self.title})"

    def __eq__(self, other: object) -> bool:
        """Posts are equal if they have the same ID."""
        if not isinstance(other, Post):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID."""
        return hash(self.id)
