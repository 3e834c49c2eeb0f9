"""Request and response models for post API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from blog.application.projections import PostProjection
from blog.domain import rules
from blog.domain.aggregates import Post
from blog.domain.value_objects import PostPatch, UserId
from blog.presentation.validation import non_blank

Title = non_blank(rules.TITLE_MAX_LENGTH)
Description = non_blank(rules.DESCRIPTION_MAX_LENGTH)


class CreatePostRequest(BaseModel):
    """Request to publish a post.

    Attributes:
        title: Title, unique across posts (1-100 characters)
        description: Short summary (1-255 characters)
        image: Optional image URI (up to 500 characters)
        author_id: ID of an existing user (ULID format)
        body: Arbitrary JSON document, stored as given
    """

    title: Title = Field(..., description="Post title", examples=["Hello"])
    description: Description = Field(
        ..., description="Short summary", examples=["World"]
    )
    image: str | None = Field(
        default=None,
        max_length=rules.IMAGE_MAX_LENGTH,
        description="Image URI",
    )
    author_id: str = Field(
        ...,
        description="Author user ID (ULID)",
        examples=["01HN3XQ7K2XYZ123456789ABCD"],
    )
    body: Any = Field(..., description="Post content as a JSON document")

    @field_validator("author_id")
    @classmethod
    def _author_id_is_ulid(cls, value: str) -> str:
        try:
            UserId.from_string(value)
        except ValueError:
            raise PydanticCustomError("invalid_id", "must be a valid identifier")
        return value

    @field_validator("body")
    @classmethod
    def _body_is_present(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("missing_body", "is required")
        return value


class UpdatePostRequest(BaseModel):
    """Request to partially update a post.

    Every field is optional. Omitted or null fields keep their stored value.
    The author cannot be changed.
    """

    title: Title | None = None
    description: Description | None = None
    image: str | None = Field(default=None, max_length=rules.IMAGE_MAX_LENGTH)
    body: Any = None

    def to_patch(self) -> PostPatch:
        """Convert the request into a domain patch."""
        return PostPatch(
            title=self.title,
            description=self.description,
            image=self.image,
            body=self.body,
        )


class PostResponse(BaseModel):
    """Response containing a stored post, as returned by writes."""

    id: str = Field(..., description="Post ID (ULID format)")
    title: str
    description: str
    image: str | None
    views: int
    body: Any
    author_id: str = Field(..., description="Author user ID")
    created_at: datetime | None = Field(..., description="Creation timestamp")
    updated_at: datetime | None = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_domain(cls, post: Post) -> PostResponse:
        """Convert domain Post aggregate to API response."""
        return cls(
            id=post.id.value,
            title=post.title,
            description=post.description,
            image=post.image,
            views=post.views,
            body=post.body,
            author_id=post.author_id.value,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostProjectionResponse(PostResponse):
    """Display-safe view of a post with the author's first name."""

    author_name: str = Field(..., description="Author's first name")

    @classmethod
    def from_projection(cls, projection: PostProjection) -> PostProjectionResponse:
        """Convert a post projection to API response."""
        return cls(
            id=projection.id.value,
            title=projection.title,
            description=projection.description,
            image=projection.image,
            views=projection.views,
            body=projection.body,
            author_id=projection.author_id.value,
            author_name=projection.author_name,
            created_at=projection.created_at,
            updated_at=projection.updated_at,
        )
