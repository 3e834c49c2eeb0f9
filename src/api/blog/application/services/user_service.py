"""User application service for the blog bounded context.

Handles user management operations (create, read, list, update, delete).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from blog.application.observability import DefaultUserServiceProbe, UserServiceProbe
from blog.domain.aggregates import User
from blog.domain.value_objects import UserId, UserPatch
from blog.ports.exceptions import (
    DuplicateEmailError,
    UserHasPostsError,
    UserNotFoundError,
)
from blog.ports.repositories import IUserRepository


class UserService:
    """Application service for user management.

    Every mutation runs inside one transaction so the email uniqueness
    pre-check and the write it guards share a transaction boundary. The
    unique constraint reported by the repository remains authoritative.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._session = session
        self._probe = probe or DefaultUserServiceProbe()

    async def create_user(
        self,
        first_name: str,
        username: str,
        email: str,
        last_name: str | None = None,
        image: str | None = None,
    ) -> User:
        """Create a new user.

        Args:
            first_name: Given name of the user
            username: Display handle
            email: Email address, unique across all users
            last_name: Optional family name
            image: Optional profile image URI

        Returns:
            The stored User aggregate

        Raises:
            DuplicateEmailError: If the email is already registered
            ValidationFailedError: If any field breaks a business rule
        """
        async with self._session.begin():
            try:
                if await self._user_repository.exists_by_email(email):
                    raise DuplicateEmailError(
                        f"There is already a user with email {email}"
                    )

                user = User.create(
                    first_name=first_name,
                    username=username,
                    email=email,
                    last_name=last_name,
                    image=image,
                )
                stored = await self._user_repository.save(user)

                self._probe.user_created(user_id=stored.id.value)
                return stored

            except DuplicateEmailError:
                self._probe.duplicate_email(email=email)
                raise

    async def get_user(self, user_id: UserId) -> User:
        """Retrieve a user by ID.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            self._probe.user_not_found(user_id=user_id.value)
            raise UserNotFoundError(user_id.value)

        self._probe.user_retrieved(user_id=user_id.value)
        return user

    async def list_users(self) -> list[User]:
        """List every user."""
        users = await self._user_repository.list_all()
        self._probe.users_listed(count=len(users))
        return users

    async def update_user(self, user_id: UserId, patch: UserPatch) -> User:
        """Apply a partial update to a user.

        Only the fields supplied in the patch change. The email is checked
        for uniqueness only when it differs from the stored one.

        Args:
            user_id: The user to update
            patch: Fields to merge onto the stored user

        Returns:
            The stored User after the update

        Raises:
            UserNotFoundError: If the user does not exist
            DuplicateEmailError: If the new email belongs to another user
            ValidationFailedError: If the merged user breaks a business rule
        """
        async with self._session.begin():
            user = await self._user_repository.get_by_id(user_id)
            if user is None:
                self._probe.user_not_found(user_id=user_id.value)
                raise UserNotFoundError(user_id.value)

            try:
                if (
                    patch.email is not None
                    and patch.email != user.email
                    and await self._user_repository.exists_by_email(patch.email)
                ):
                    raise DuplicateEmailError(
                        f"There is already a user with email {patch.email}"
                    )

                updated = user.with_changes(patch)
                stored = await self._user_repository.save(updated)

            except DuplicateEmailError:
                self._probe.duplicate_email(email=patch.email or user.email)
                raise

            self._probe.user_updated(
                user_id=user_id.value, fields=sorted(patch.changes())
            )
            return stored

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user by ID.

        Raises:
            UserNotFoundError: If the user does not exist
            UserHasPostsError: If the user still authors posts
        """
        async with self._session.begin():
            try:
                deleted = await self._user_repository.delete(user_id)
            except UserHasPostsError:
                self._probe.user_has_posts(user_id=user_id.value)
                raise

            if not deleted:
                self._probe.user_not_found(user_id=user_id.value)
                raise UserNotFoundError(user_id.value)

            self._probe.user_deleted(user_id=user_id.value)
