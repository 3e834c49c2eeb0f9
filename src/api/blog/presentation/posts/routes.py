"""Post management routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from blog.application.services import PostService
from blog.dependencies.post import get_post_service
from blog.dependencies.request import get_request_probe
from blog.domain.exceptions import ValidationFailedError
from blog.domain.value_objects import PostId, UserId
from blog.ports.exceptions import (
    DuplicatePostTitleError,
    PostNotFoundError,
    UserNotFoundError,
)
from blog.presentation.posts.models import (
    CreatePostRequest,
    PostProjectionResponse,
    PostResponse,
    UpdatePostRequest,
)
from blog.presentation.validation import validation_failed
from infrastructure.observability import RequestProbe

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
)


def _parse_post_id(post_id: str) -> PostId:
    try:
        return PostId.from_string(post_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid post ID format",
        )


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a post",
    description="""
Publish a new post on behalf of an existing user.

Titles are unique across all posts. The body is stored exactly as sent.
""",
    responses={
        201: {"description": "Post created successfully"},
        400: {"description": "Validation error"},
        404: {"description": "Author not found"},
        409: {"description": "Title already used"},
        500: {"description": "Internal server error"},
    },
)
async def create_post(
    request: CreatePostRequest,
    service: Annotated[PostService, Depends(get_post_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> PostResponse:
    """Publish a new post."""
    try:
        post = await service.create_post(
            title=request.title,
            description=request.description,
            author_id=UserId.from_string(request.author_id),
            body=request.body,
            image=request.image,
        )

        return PostResponse.from_domain(post)

    except DuplicatePostTitleError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValidationFailedError as e:
        raise validation_failed(e)
    except Exception as e:
        probe.operation_failed(operation="create_post", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post",
        )


@router.get(
    "",
    response_model=list[PostProjectionResponse],
    summary="List posts",
    description="""
List every post, newest first.

Each post carries its author's ID and first name, never the full user.
""",
    responses={
        200: {"description": "Posts listed successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> list[PostProjectionResponse]:
    """List every post."""
    try:
        projections = await service.list_posts()
        return [
            PostProjectionResponse.from_projection(projection)
            for projection in projections
        ]

    except Exception as e:
        probe.operation_failed(operation="list_posts", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list posts",
        )


@router.get(
    "/{post_id}",
    response_model=PostProjectionResponse,
    summary="Get post by ID",
    responses={
        200: {"description": "Post found and returned"},
        400: {"description": "Malformed post ID"},
        404: {"description": "Post not found"},
        500: {"description": "Internal server error"},
    },
)
async def get_post(
    post_id: str,
    service: Annotated[PostService, Depends(get_post_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> PostProjectionResponse:
    """Get post by ID."""
    post_id_obj = _parse_post_id(post_id)

    try:
        projection = await service.get_post(post_id_obj)
        return PostProjectionResponse.from_projection(projection)

    except PostNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        probe.operation_failed(operation="get_post", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve post",
        )


@router.patch(
    "/{post_id}",
    response_model=PostResponse,
    summary="Update post",
    description="""
Partially update a post.

Title, description, image and body may change. The author and view counter
cannot.
""",
    responses={
        200: {"description": "Post updated successfully"},
        400: {"description": "Malformed post ID or validation error"},
        404: {"description": "Post not found"},
        409: {"description": "Title already used"},
        500: {"description": "Internal server error"},
    },
)
async def update_post(
    post_id: str,
    request: UpdatePostRequest,
    service: Annotated[PostService, Depends(get_post_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> PostResponse:
    """Partially update a post."""
    post_id_obj = _parse_post_id(post_id)

    try:
        post = await service.update_post(post_id_obj, request.to_patch())
        return PostResponse.from_domain(post)

    except PostNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DuplicatePostTitleError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except ValidationFailedError as e:
        raise validation_failed(e)
    except Exception as e:
        probe.operation_failed(operation="update_post", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update post",
        )


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete post",
    responses={
        204: {"description": "Post deleted successfully"},
        400: {"description": "Malformed post ID"},
        404: {"description": "Post not found"},
        500: {"description": "Internal server error"},
    },
)
async def delete_post(
    post_id: str,
    service: Annotated[PostService, Depends(get_post_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> None:
    """Delete a post. Its author is left in place."""
    post_id_obj = _parse_post_id(post_id)

    try:
        await service.delete_post(post_id_obj)

    except PostNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        probe.operation_failed(operation="delete_post", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete post",
        )
