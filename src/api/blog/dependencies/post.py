"""Post dependency providers for the blog bounded context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog.application.observability import (
    DefaultPostServiceProbe,
    PostServiceProbe,
)
from blog.application.services import PostService
from blog.dependencies.user import get_user_repository
from blog.infrastructure.post_repository import PostRepository
from blog.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session


def get_post_service_probe() -> PostServiceProbe:
    """Get PostServiceProbe instance."""
    return DefaultPostServiceProbe()


def get_post_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostRepository:
    """Get PostRepository instance bound to the request session."""
    return PostRepository(session=session)


def get_post_service(
    post_repo: Annotated[PostRepository, Depends(get_post_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[PostServiceProbe, Depends(get_post_service_probe)],
) -> PostService:
    """Get PostService instance.

    The post and user repositories share the request session, so author
    resolution and the post write happen in one transaction.
    """
    return PostService(
        post_repository=post_repo,
        user_repository=user_repo,
        session=session,
        probe=probe,
    )
