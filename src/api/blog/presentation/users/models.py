"""Request and response models for user API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from blog.domain import rules
from blog.domain.aggregates import User
from blog.domain.value_objects import UserPatch
from blog.presentation.validation import non_blank

FirstName = non_blank(rules.FIRST_NAME_MAX_LENGTH)
Username = non_blank(rules.USERNAME_MAX_LENGTH)


class CreateUserRequest(BaseModel):
    """Request to register a user.

    Attributes:
        first_name: Given name (1-50 characters)
        last_name: Optional family name (up to 100 characters)
        username: Display handle (1-100 characters)
        email: Email address, unique across users
        image: Optional profile image URI (up to 500 characters)
    """

    first_name: FirstName = Field(
        ...,
        description="Given name",
        examples=["Dave"],
    )
    last_name: str | None = Field(
        default=None,
        max_length=rules.LAST_NAME_MAX_LENGTH,
        description="Family name",
    )
    username: Username = Field(
        ...,
        description="Display handle",
        examples=["dave1"],
    )
    email: EmailStr = Field(
        ...,
        description="Email address",
        examples=["dave@example.com"],
    )
    image: str | None = Field(
        default=None,
        max_length=rules.IMAGE_MAX_LENGTH,
        description="Profile image URI",
    )


class UpdateUserRequest(BaseModel):
    """Request to partially update a user.

    Every field is optional. Omitted or null fields keep their stored value.
    """

    first_name: FirstName | None = None
    last_name: str | None = Field(default=None, max_length=rules.LAST_NAME_MAX_LENGTH)
    username: Username | None = None
    email: EmailStr | None = None
    image: str | None = Field(default=None, max_length=rules.IMAGE_MAX_LENGTH)

    def to_patch(self) -> UserPatch:
        """Convert the request into a domain patch."""
        return UserPatch(
            first_name=self.first_name,
            last_name=self.last_name,
            username=self.username,
            email=self.email,
            image=self.image,
        )


class UserResponse(BaseModel):
    """Response containing user details."""

    id: str = Field(..., description="User ID (ULID format)")
    first_name: str
    last_name: str | None
    username: str
    email: str
    image: str | None
    created_at: datetime | None = Field(..., description="Creation timestamp")
    updated_at: datetime | None = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response."""
        return cls(
            id=user.id.value,
            first_name=user.first_name,
            last_name=user.last_name,
            username=user.username,
            email=user.email,
            image=user.image,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
