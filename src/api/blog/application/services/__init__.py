"""Application services for the blog bounded context.

Application services orchestrate domain aggregates and repositories to
fulfill use cases. They are the "front door" to the blog context.
"""

from blog.application.services.post_service import PostService
from blog.application.services.user_service import UserService

__all__ = [
    "PostService",
    "UserService",
]
