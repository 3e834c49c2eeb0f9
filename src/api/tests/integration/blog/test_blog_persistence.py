"""Integration tests for blog services against PostgreSQL.

Exercise the unique constraints, the author foreign key and JSON body
storage through the real repositories.
"""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog.application.services import PostService, UserService
from blog.domain.value_objects import PostPatch, UserId, UserPatch
from blog.infrastructure.post_repository import PostRepository
from blog.infrastructure.user_repository import UserRepository
from blog.ports.exceptions import (
    DuplicateEmailError,
    DuplicatePostTitleError,
    UserHasPostsError,
    UserNotFoundError,
)

pytestmark = pytest.mark.integration


def _user_service(session: AsyncSession) -> UserService:
    return UserService(user_repository=UserRepository(session), session=session)


def _post_service(session: AsyncSession) -> PostService:
    return PostService(
        post_repository=PostRepository(session),
        user_repository=UserRepository(session),
        session=session,
    )


@pytest.mark.asyncio
async def test_create_and_read_back_user(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    async with sessionmaker() as session:
        created = await _user_service(session).create_user(
            first_name="Dave", username="dave1", email="dave@x.com"
        )

    assert created.created_at == created.updated_at

    async with sessionmaker() as session:
        fetched = await _user_service(session).get_user(created.id)

    assert fetched.email == "dave@x.com"
    assert fetched.created_at == created.created_at


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    async with sessionmaker() as session:
        await _user_service(session).create_user(
            first_name="Dave", username="dave1", email="dave@x.com"
        )

    async with sessionmaker() as session:
        with pytest.raises(DuplicateEmailError):
            await _user_service(session).create_user(
                first_name="Other", username="other", email="dave@x.com"
            )


@pytest.mark.asyncio
async def test_concurrent_creates_with_same_email_yield_one_user(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    """The unique constraint decides when both pre-checks pass."""

    async def create():
        async with sessionmaker() as session:
            return await _user_service(session).create_user(
                first_name="Dave", username="dave1", email="race@x.com"
            )

    results = await asyncio.gather(create(), create(), return_exceptions=True)

    assert sum(isinstance(r, DuplicateEmailError) for r in results) == 1
    assert sum(not isinstance(r, Exception) for r in results) == 1


@pytest.mark.asyncio
async def test_post_round_trip_keeps_body_and_projects_author(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    body = {"z": 1, "a": [1, 2, {"nested": None}], "text": "héllo"}

    async with sessionmaker() as session:
        dave = await _user_service(session).create_user(
            first_name="Dave", username="dave1", email="dave@x.com"
        )
    async with sessionmaker() as session:
        post = await _post_service(session).create_post(
            title="Hello", description="World", author_id=dave.id, body=body
        )

    async with sessionmaker() as session:
        projection = await _post_service(session).get_post(post.id)

    assert projection.body == body
    assert list(projection.body) == ["z", "a", "text"]
    assert projection.author_id == dave.id
    assert projection.author_name == "Dave"
    assert projection.views == 0


@pytest.mark.asyncio
async def test_post_with_unknown_author_is_rejected(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    async with sessionmaker() as session:
        with pytest.raises(UserNotFoundError):
            await _post_service(session).create_post(
                title="Hello",
                description="World",
                author_id=UserId.generate(),
                body={},
            )

    async with sessionmaker() as session:
        assert await _post_service(session).list_posts() == []


@pytest.mark.asyncio
async def test_duplicate_title_and_delete_rules(
    sessionmaker: async_sessionmaker[AsyncSession],
):
    async with sessionmaker() as session:
        dave = await _user_service(session).create_user(
            first_name="Dave", username="dave1", email="dave@x.com"
        )
    async with sessionmaker() as session:
        post = await _post_service(session).create_post(
            title="Hello", description="World", author_id=dave.id, body={}
        )
    async with sessionmaker() as session:
        with pytest.raises(DuplicatePostTitleError):
            await _post_service(session).create_post(
                title="Hello", description="Again", author_id=dave.id, body={}
            )
    async with sessionmaker() as session:
        with pytest.raises(UserHasPostsError):
            await _user_service(session).delete_user(dave.id)

    async with sessionmaker() as session:
        await _post_service(session).delete_post(post.id)
    async with sessionmaker() as session:
        await _user_service(session).delete_user(dave.id)


@pytest.mark.asyncio
async def test_partial_updates(sessionmaker: async_sessionmaker[AsyncSession]):
    async with sessionmaker() as session:
        dave = await _user_service(session).create_user(
            first_name="Dave", username="dave1", email="dave@x.com"
        )
    async with sessionmaker() as session:
        updated = await _user_service(session).update_user(
            dave.id, UserPatch(image="https://img/dave.png")
        )

    assert updated.first_name == "Dave"
    assert updated.created_at == dave.created_at
    assert updated.updated_at > dave.updated_at

    async with sessionmaker() as session:
        post = await _post_service(session).create_post(
            title="Hello", description="World", author_id=dave.id, body={"v": 1}
        )
    async with sessionmaker() as session:
        edited = await _post_service(session).update_post(
            post.id, PostPatch(body={"v": 2})
        )

    assert edited.title == "Hello"
    assert edited.body == {"v": 2}
