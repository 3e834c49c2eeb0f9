"""SQLAlchemy ORM models for the blog bounded context.

These models map to database tables and are used by repository implementations.
"""

from blog.infrastructure.models.post import PostModel
from blog.infrastructure.models.user import UserModel

__all__ = [
    "PostModel",
    "UserModel",
]
