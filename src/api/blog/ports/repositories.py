"""Repository protocols (ports) for the blog bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations never commit: they flush inside the caller's
transaction so a uniqueness check and the write that depends on it share
one transaction boundary.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from blog.domain.aggregates import Post, User
from blog.domain.value_objects import PostId, UserId


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence."""

    async def save(self, user: User) -> User:
        """Persist a user aggregate.

        Creates a new user or updates an existing one. On insert both
        timestamps are set to the same instant; on update only updated_at
        is refreshed.

        Args:
            user: The User aggregate to persist

        Returns:
            The stored User with timestamps populated

        Raises:
            DuplicateEmailError: If the email is already used by another user
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Retrieve several users at once.

        Returns:
            Mapping of id to User for every id that exists
        """
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether any user is registered with the given email."""
        ...

    async def list_all(self) -> list[User]:
        """List every user."""
        ...

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user by ID.

        Returns:
            True if a row was removed, False if not found

        Raises:
            UserHasPostsError: If the user still authors posts
        """
        ...


@runtime_checkable
class IPostRepository(Protocol):
    """Repository for Post aggregate persistence."""

    async def save(self, post: Post) -> Post:
        """Persist a post aggregate.

        Creates a new post or updates an existing one.

        Returns:
            The stored Post with timestamps populated

        Raises:
            DuplicatePostTitleError: If the title is already used by another post
            UserNotFoundError: If the referenced author does not exist
        """
        ...

    async def get_by_id(self, post_id: PostId) -> Post | None:
        """Retrieve a post by its ID.

        Returns:
            The Post aggregate, or None if not found
        """
        ...

    async def exists_by_title(self, title: str) -> bool:
        """Check whether any post uses the given title."""
        ...

    async def list_all(self) -> list[Post]:
        """List every post, newest first."""
        ...

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post by ID.

        Returns:
            True if a row was removed, False if not found
        """
        ...
