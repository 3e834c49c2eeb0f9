"""Domain aggregates for the blog context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from blog.domain.aggregates.post import Post
from blog.domain.aggregates.user import User

__all__ = [
    "Post",
    "User",
]
