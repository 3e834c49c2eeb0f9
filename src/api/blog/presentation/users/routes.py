"""User management routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from blog.application.services import UserService
from blog.dependencies.request import get_request_probe
from blog.dependencies.user import get_user_service
from blog.domain.exceptions import ValidationFailedError
from blog.domain.value_objects import UserId
from blog.ports.exceptions import (
    DuplicateEmailError,
    UserHasPostsError,
    UserNotFoundError,
)
from blog.presentation.users.models import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)
from blog.presentation.validation import validation_failed
from infrastructure.observability import RequestProbe

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


def _parse_user_id(user_id: str) -> UserId:
    try:
        return UserId.from_string(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format",
        )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    description="""
Register a new user.

Email addresses are unique across all users.
""",
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "Validation error"},
        409: {"description": "Email already registered"},
        500: {"description": "Internal server error"},
    },
)
async def create_user(
    request: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> UserResponse:
    """Register a new user."""
    try:
        user = await service.create_user(
            first_name=request.first_name,
            last_name=request.last_name,
            username=request.username,
            email=request.email,
            image=request.image,
        )

        return UserResponse.from_domain(user)

    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except ValidationFailedError as e:
        raise validation_failed(e)
    except Exception as e:
        probe.operation_failed(operation="create_user", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    responses={
        200: {"description": "Users listed successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> list[UserResponse]:
    """List every registered user."""
    try:
        users = await service.list_users()
        return [UserResponse.from_domain(user) for user in users]

    except Exception as e:
        probe.operation_failed(operation="list_users", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list users",
        )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
    responses={
        200: {"description": "User found and returned"},
        400: {"description": "Malformed user ID"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)
async def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> UserResponse:
    """Get user by ID."""
    user_id_obj = _parse_user_id(user_id)

    try:
        user = await service.get_user(user_id_obj)
        return UserResponse.from_domain(user)

    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        probe.operation_failed(operation="get_user", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve user",
        )


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="""
Partially update a user.

Only the supplied fields change. Changing the email to one that another
user already holds is rejected.
""",
    responses={
        200: {"description": "User updated successfully"},
        400: {"description": "Malformed user ID or validation error"},
        404: {"description": "User not found"},
        409: {"description": "Email already registered"},
        500: {"description": "Internal server error"},
    },
)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> UserResponse:
    """Partially update a user."""
    user_id_obj = _parse_user_id(user_id)

    try:
        user = await service.update_user(user_id_obj, request.to_patch())
        return UserResponse.from_domain(user)

    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except ValidationFailedError as e:
        raise validation_failed(e)
    except Exception as e:
        probe.operation_failed(operation="update_user", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user",
        )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="""
Delete a user.

A user who still authors posts cannot be deleted; delete their posts first.
""",
    responses={
        204: {"description": "User deleted successfully"},
        400: {"description": "Malformed user ID"},
        404: {"description": "User not found"},
        409: {"description": "User still authors posts"},
        500: {"description": "Internal server error"},
    },
)
async def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    probe: Annotated[RequestProbe, Depends(get_request_probe)],
) -> None:
    """Delete a user."""
    user_id_obj = _parse_user_id(user_id)

    try:
        await service.delete_user(user_id_obj)

    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except UserHasPostsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except Exception as e:
        probe.operation_failed(operation="delete_user", error=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user",
        )
