"""PostgreSQL implementation of IPostRepository.

Posts reference their author by identifier only. The foreign key on
posts.author_id is what finally guarantees the author exists, and a
violation of it at flush time is reported as a missing user.
"""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.aggregates import Post
from blog.domain.value_objects import PostId, UserId
from blog.infrastructure.models import PostModel
from blog.infrastructure.observability import (
    DefaultPostRepositoryProbe,
    PostRepositoryProbe,
)
from blog.ports.exceptions import DuplicatePostTitleError, UserNotFoundError
from blog.ports.repositories import IPostRepository
from infrastructure.database.exceptions import violated_constraint
from infrastructure.database.models import utc_now

TITLE_UNIQUE_CONSTRAINT = "uq_posts_title"
AUTHOR_FOREIGN_KEY = "fk_posts_author_id_users"


class PostRepository(IPostRepository):
    """PostgreSQL-backed repository for Post aggregates."""

    def __init__(
        self, session: AsyncSession, probe: PostRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultPostRepositoryProbe()

    async def save(self, post: Post) -> Post:
        """Persist a post aggregate.

        Creates a new post or updates an existing one. The author and the
        view counter of an existing row are left as stored.

        Args:
            post: The Post aggregate to persist

        Returns:
            The stored Post with timestamps populated

        Raises:
            DuplicatePostTitleError: If the title is already used by another post
            UserNotFoundError: If the referenced author does not exist
        """
        now = utc_now()
        stmt = select(PostModel).where(PostModel.id == post.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        created = model is None

        if model:
            model.title = post.title
            model.description = post.description
            model.image = post.image
            model.body = post.body
            model.updated_at = now
        else:
            model = PostModel(
                id=post.id.value,
                title=post.title,
                description=post.description,
                image=post.image,
                views=post.views,
                body=post.body,
                author_id=post.author_id.value,
                created_at=now,
                updated_at=now,
            )
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            constraint = violated_constraint(e)
            if constraint == TITLE_UNIQUE_CONSTRAINT:
                self._probe.duplicate_title(post.title)
                raise DuplicatePostTitleError(
                    f"This post already exists: {post.title}"
                ) from e
            if constraint == AUTHOR_FOREIGN_KEY:
                self._probe.author_missing(post.id.value, post.author_id.value)
                raise UserNotFoundError(post.author_id.value) from e
            raise

        self._probe.post_saved(post.id.value, created=created)
        return self._to_domain(model)

    async def get_by_id(self, post_id: PostId) -> Post | None:
        """Retrieve a post by its ID.

        Returns:
            The Post aggregate, or None if not found
        """
        stmt = select(PostModel).where(PostModel.id == post_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.post_not_found(post_id.value)
            return None

        self._probe.post_retrieved(post_id.value)
        return self._to_domain(model)

    async def exists_by_title(self, title: str) -> bool:
        """Check whether any post uses the given title."""
        stmt = select(exists().where(PostModel.title == title))
        return bool(await self._session.scalar(stmt))

    async def list_all(self) -> list[Post]:
        """List every post, newest first."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        result = await self._session.execute(stmt)
        posts = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.posts_listed(len(posts))
        return posts

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post by ID. The author is never touched.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(PostModel).where(PostModel.id == post_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.post_not_found(post_id.value)
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.post_deleted(post_id.value)
        return True

    @staticmethod
    def _to_domain(model: PostModel) -> Post:
        """Reconstitute a Post aggregate from its ORM model."""
        return Post(
            id=PostId(value=model.id),
            title=model.title,
            description=model.description,
            image=model.image,
            views=model.views,
            body=model.body,
            author_id=UserId(value=model.author_id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
