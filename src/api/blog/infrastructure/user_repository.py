"""PostgreSQL implementation of IUserRepository.

The repository never commits. It flushes inside the caller's transaction and
translates constraint violations raised at flush time into port exceptions,
so the database constraint stays the final word on uniqueness.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.aggregates import User
from blog.domain.value_objects import UserId
from blog.infrastructure.models import UserModel
from blog.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from blog.ports.exceptions import DuplicateEmailError, UserHasPostsError
from blog.ports.repositories import IUserRepository
from infrastructure.database.exceptions import violated_constraint
from infrastructure.database.models import utc_now

EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"
POST_AUTHOR_FOREIGN_KEY = "fk_posts_author_id_users"


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates."""

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def save(self, user: User) -> User:
        """Persist a user aggregate.

        Creates a new user or updates an existing one.

        Args:
            user: The User aggregate to persist

        Returns:
            The stored User with timestamps populated

        Raises:
            DuplicateEmailError: If the email is already used by another user
        """
        now = utc_now()
        stmt = select(UserModel).where(UserModel.id == user.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        created = model is None

        if model:
            # Update existing user, created_at is never touched
            model.first_name = user.first_name
            model.last_name = user.last_name
            model.username = user.username
            model.email = user.email
            model.image = user.image
            model.updated_at = now
        else:
            model = UserModel(
                id=user.id.value,
                first_name=user.first_name,
                last_name=user.last_name,
                username=user.username,
                email=user.email,
                image=user.image,
                created_at=now,
                updated_at=now,
            )
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if violated_constraint(e) == EMAIL_UNIQUE_CONSTRAINT:
                self._probe.duplicate_email(user.email)
                raise DuplicateEmailError(
                    f"Email already exists: {user.email}"
                ) from e
            raise

        self._probe.user_saved(user.id.value, created=created)
        return self._to_domain(model)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return self._to_domain(model)

    async def get_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Retrieve several users in one query.

        Args:
            user_ids: Identifiers to look up (duplicates are ignored)

        Returns:
            Mapping of id to User for every id that exists
        """
        values = {user_id.value for user_id in user_ids}
        if not values:
            return {}

        stmt = select(UserModel).where(UserModel.id.in_(values))
        result = await self._session.execute(stmt)
        users = [self._to_domain(model) for model in result.scalars().all()]
        return {user.id: user for user in users}

    async def exists_by_email(self, email: str) -> bool:
        """Check whether any user is registered with the given email."""
        stmt = select(exists().where(UserModel.email == email))
        return bool(await self._session.scalar(stmt))

    async def list_all(self) -> list[User]:
        """List every user, oldest first."""
        stmt = select(UserModel).order_by(UserModel.created_at)
        result = await self._session.execute(stmt)
        users = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.users_listed(len(users))
        return users

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user by ID.

        Args:
            user_id: The user to delete

        Returns:
            True if deleted, False if not found

        Raises:
            UserHasPostsError: If posts still reference the user
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return False

        await self._session.delete(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if violated_constraint(e) == POST_AUTHOR_FOREIGN_KEY:
                self._probe.user_still_referenced(user_id.value)
                raise UserHasPostsError(user_id.value) from e
            raise

        self._probe.user_deleted(user_id.value)
        return True

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        """Reconstitute a User aggregate from its ORM model."""
        return User(
            id=UserId(value=model.id),
            first_name=model.first_name,
            last_name=model.last_name,
            username=model.username,
            email=model.email,
            image=model.image,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
