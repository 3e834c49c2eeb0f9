"""Unit tests for PostService."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from blog.application.projections import PostProjection
from blog.application.services import PostService
from blog.domain.aggregates import Post, User
from blog.domain.value_objects import PostId, PostPatch, UserId
from blog.ports.exceptions import (
    DuplicatePostTitleError,
    PostNotFoundError,
    UserNotFoundError,
)
from blog.ports.repositories import IPostRepository, IUserRepository


@pytest.fixture
def author() -> User:
    return User.create(first_name="Dave", username="dave1", email="dave@x.com")


@pytest.fixture
def stored_post(author) -> Post:
    return Post.create(
        title="Hello", description="World", body={"a": 1}, author_id=author.id
    )


@pytest.fixture
def mock_post_repo():
    """Mock PostRepository that echoes saved posts."""
    repo = Mock(spec=IPostRepository)
    repo.exists_by_title = AsyncMock(return_value=False)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock(side_effect=lambda post: post)
    repo.list_all = AsyncMock(return_value=[])
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_user_repo(author):
    """Mock UserRepository that knows a single author."""
    repo = Mock(spec=IUserRepository)
    repo.get_by_id = AsyncMock(
        side_effect=lambda user_id: author if user_id == author.id else None
    )
    repo.get_by_ids = AsyncMock(
        side_effect=lambda ids: {i: author for i in ids if i == author.id}
    )
    return repo


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def post_service(mock_post_repo, mock_user_repo, mock_session, mock_probe):
    """Create PostService with mocked dependencies."""
    return PostService(
        post_repository=mock_post_repo,
        user_repository=mock_user_repo,
        session=mock_session,
        probe=mock_probe,
    )


class TestCreatePost:
    """Tests for PostService.create_post()."""

    @pytest.mark.asyncio
    async def test_creates_post_with_zero_views(
        self, post_service, mock_post_repo, mock_session, author
    ):
        post = await post_service.create_post(
            title="Hello",
            description="World",
            author_id=author.id,
            body={"a": 1},
        )

        assert post.views == 0
        assert post.author_id == author.id
        assert post.body == {"a": 1}
        mock_post_repo.save.assert_awaited_once()
        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_author_writes_nothing(
        self, post_service, mock_post_repo, mock_probe
    ):
        missing = UserId.generate()

        with pytest.raises(UserNotFoundError) as exc_info:
            await post_service.create_post(
                title="Hello", description="World", author_id=missing, body={}
            )

        assert exc_info.value.user_id == missing.value
        mock_post_repo.save.assert_not_awaited()
        mock_probe.author_not_found.assert_called_once_with(author_id=missing.value)

    @pytest.mark.asyncio
    async def test_rejects_title_already_in_use(
        self, post_service, mock_post_repo, mock_probe, author
    ):
        mock_post_repo.exists_by_title.return_value = True

        with pytest.raises(DuplicatePostTitleError):
            await post_service.create_post(
                title="Hello", description="Again", author_id=author.id, body={}
            )

        mock_post_repo.save.assert_not_awaited()
        mock_probe.duplicate_title.assert_called_once_with(title="Hello")

    @pytest.mark.asyncio
    async def test_author_removed_concurrently_is_reported_as_missing(
        self, post_service, mock_post_repo, author
    ):
        """The foreign key failure at save time maps to the same error."""
        mock_post_repo.save.side_effect = UserNotFoundError(author.id.value)

        with pytest.raises(UserNotFoundError):
            await post_service.create_post(
                title="Hello", description="World", author_id=author.id, body={}
            )


class TestReadPosts:
    """Tests for get_post() and list_posts()."""

    @pytest.mark.asyncio
    async def test_get_post_returns_projection(
        self, post_service, mock_post_repo, stored_post, author
    ):
        mock_post_repo.get_by_id.return_value = stored_post

        projection = await post_service.get_post(stored_post.id)

        assert isinstance(projection, PostProjection)
        assert projection.author_id == author.id
        assert projection.author_name == "Dave"
        assert projection.title == "Hello"

    @pytest.mark.asyncio
    async def test_get_post_raises_when_missing(self, post_service, mock_probe):
        post_id = PostId.generate()

        with pytest.raises(PostNotFoundError):
            await post_service.get_post(post_id)

        mock_probe.post_not_found.assert_called_once_with(post_id=post_id.value)

    @pytest.mark.asyncio
    async def test_list_posts_resolves_authors_in_one_batch(
        self, post_service, mock_post_repo, mock_user_repo, author
    ):
        posts = [
            Post.create(
                title=f"Post {i}", description="d", body=i, author_id=author.id
            )
            for i in range(3)
        ]
        mock_post_repo.list_all.return_value = posts

        projections = await post_service.list_posts()

        assert [p.title for p in projections] == ["Post 0", "Post 1", "Post 2"]
        assert {p.author_name for p in projections} == {"Dave"}
        mock_user_repo.get_by_ids.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, post_service):
        assert await post_service.list_posts() == []


class TestUpdatePost:
    """Tests for PostService.update_post()."""

    @pytest.mark.asyncio
    async def test_merges_supplied_fields(
        self, post_service, mock_post_repo, stored_post
    ):
        mock_post_repo.get_by_id.return_value = stored_post

        updated = await post_service.update_post(
            stored_post.id, PostPatch(description="Updated", body=[1])
        )

        assert updated.description == "Updated"
        assert updated.body == [1]
        assert updated.title == "Hello"
        mock_post_repo.exists_by_title.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_title_held_by_another_post(
        self, post_service, mock_post_repo, stored_post
    ):
        mock_post_repo.get_by_id.return_value = stored_post
        mock_post_repo.exists_by_title.return_value = True

        with pytest.raises(DuplicatePostTitleError):
            await post_service.update_post(stored_post.id, PostPatch(title="Taken"))

        mock_post_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_raises_when_missing(self, post_service, mock_post_repo):
        with pytest.raises(PostNotFoundError):
            await post_service.update_post(PostId.generate(), PostPatch(title="New"))

        mock_post_repo.save.assert_not_awaited()


class TestDeletePost:
    """Tests for PostService.delete_post()."""

    @pytest.mark.asyncio
    async def test_deletes_post(self, post_service, mock_post_repo, mock_user_repo):
        post_id = PostId.generate()

        await post_service.delete_post(post_id)

        mock_post_repo.delete.assert_awaited_once_with(post_id)

    @pytest.mark.asyncio
    async def test_raises_when_missing(self, post_service, mock_post_repo):
        mock_post_repo.delete.return_value = False

        with pytest.raises(PostNotFoundError):
            await post_service.delete_post(PostId.generate())
