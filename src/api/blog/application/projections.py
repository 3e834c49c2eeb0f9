"""Read-side projections for the blog context.

A projection is the display-safe view of a post. It carries the author's
identifier and first name instead of the full User, so post endpoints
never expose user records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from blog.domain.aggregates import Post, User
from blog.domain.value_objects import PostId, UserId


@dataclass(frozen=True)
class PostProjection:
    """Display-safe, read-only view of a post."""

    id: PostId
    title: str
    description: str
    image: str | None
    views: int
    body: Any
    author_id: UserId
    author_name: str
    created_at: datetime | None
    updated_at: datetime | None


def project_post(post: Post, author: User) -> PostProjection:
    """Build the projection of a post from the post and its author.

    Pure function: copies the post's scalar fields and denormalizes the
    author's first name as the display name.
    """
    return PostProjection(
        id=post.id,
        title=post.title,
        description=post.description,
        image=post.image,
        views=post.views,
        body=post.body,
        author_id=author.id,
        author_name=author.first_name,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )
