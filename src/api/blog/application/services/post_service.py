"""Post application service for the blog bounded context.

Handles post management operations and serves posts to readers as
projections that carry the author's display name instead of the user.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from blog.application.observability import DefaultPostServiceProbe, PostServiceProbe
from blog.application.projections import PostProjection, project_post
from blog.domain.aggregates import Post, User
from blog.domain.value_objects import PostId, PostPatch, UserId
from blog.ports.exceptions import (
    DuplicatePostTitleError,
    PostNotFoundError,
    UserNotFoundError,
)
from blog.ports.repositories import IPostRepository, IUserRepository


class PostService:
    """Application service for post management.

    Posts reference their author by identifier. The author is resolved
    through the user repository when a post is created and again whenever
    a projection is built.
    """

    def __init__(
        self,
        post_repository: IPostRepository,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: PostServiceProbe | None = None,
    ):
        """Initialize PostService with dependencies.

        Args:
            post_repository: Repository for post persistence
            user_repository: Repository used to resolve post authors
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._post_repository = post_repository
        self._user_repository = user_repository
        self._session = session
        self._probe = probe or DefaultPostServiceProbe()

    async def create_post(
        self,
        title: str,
        description: str,
        author_id: UserId,
        body: Any,
        image: str | None = None,
    ) -> Post:
        """Create a new post with zero views.

        Args:
            title: Title, unique across all posts
            description: Short summary
            author_id: The user who authors the post
            body: Opaque JSON document
            image: Optional image URI

        Returns:
            The stored Post aggregate

        Raises:
            DuplicatePostTitleError: If the title is already used
            UserNotFoundError: If the author does not exist
            ValidationFailedError: If any field breaks a business rule
        """
        async with self._session.begin():
            try:
                if await self._post_repository.exists_by_title(title):
                    raise DuplicatePostTitleError(f"This post already exists: {title}")

                author = await self._user_repository.get_by_id(author_id)
                if author is None:
                    raise UserNotFoundError(author_id.value)

                post = Post.create(
                    title=title,
                    description=description,
                    body=body,
                    author_id=author.id,
                    image=image,
                )
                stored = await self._post_repository.save(post)

                self._probe.post_created(
                    post_id=stored.id.value, author_id=author_id.value
                )
                return stored

            except DuplicatePostTitleError:
                self._probe.duplicate_title(title=title)
                raise
            except UserNotFoundError:
                self._probe.author_not_found(author_id=author_id.value)
                raise

    async def get_post(self, post_id: PostId) -> PostProjection:
        """Retrieve a post as a projection.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        post = await self._post_repository.get_by_id(post_id)
        if post is None:
            self._probe.post_not_found(post_id=post_id.value)
            raise PostNotFoundError(post_id.value)

        author = await self._user_repository.get_by_id(post.author_id)
        projection = self._project(post, author)

        self._probe.post_retrieved(post_id=post_id.value)
        return projection

    async def list_posts(self) -> list[PostProjection]:
        """List every post as a projection, newest first.

        Authors are resolved in a single batch lookup.
        """
        posts = await self._post_repository.list_all()
        authors = await self._user_repository.get_by_ids(
            {post.author_id for post in posts}
        )
        projections = [
            self._project(post, authors.get(post.author_id)) for post in posts
        ]

        self._probe.posts_listed(count=len(projections))
        return projections

    async def update_post(self, post_id: PostId, patch: PostPatch) -> Post:
        """Apply a partial update to a post.

        Title, description, image and body may change. The title is checked
        for uniqueness only when it differs from the stored one.

        Raises:
            PostNotFoundError: If the post does not exist
            DuplicatePostTitleError: If the new title belongs to another post
            ValidationFailedError: If the merged post breaks a business rule
        """
        async with self._session.begin():
            post = await self._post_repository.get_by_id(post_id)
            if post is None:
                self._probe.post_not_found(post_id=post_id.value)
                raise PostNotFoundError(post_id.value)

            try:
                if (
                    patch.title is not None
                    and patch.title != post.title
                    and await self._post_repository.exists_by_title(patch.title)
                ):
                    raise DuplicatePostTitleError(
                        f"This post already exists: {patch.title}"
                    )

                updated = post.with_changes(patch)
                stored = await self._post_repository.save(updated)

            except DuplicatePostTitleError:
                self._probe.duplicate_title(title=patch.title or post.title)
                raise

            self._probe.post_updated(
                post_id=post_id.value, fields=sorted(patch.changes())
            )
            return stored

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post by ID. The author is left in place.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        async with self._session.begin():
            deleted = await self._post_repository.delete(post_id)
            if not deleted:
                self._probe.post_not_found(post_id=post_id.value)
                raise PostNotFoundError(post_id.value)

            self._probe.post_deleted(post_id=post_id.value)

    @staticmethod
    def _project(post: Post, author: User | None) -> PostProjection:
        # The restricting foreign key keeps every stored post's author alive.
        if author is None:
            raise RuntimeError(
                f"Invariant violated: author {post.author_id} "
                f"of post {post.id} is missing"
            )
        return project_post(post, author)
