"""Ports (interfaces) for the blog bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and makes the
domain layer independent of infrastructure.
"""

from blog.ports.exceptions import (
    DuplicateEmailError,
    DuplicatePostTitleError,
    PostNotFoundError,
    UserHasPostsError,
    UserNotFoundError,
)
from blog.ports.repositories import IPostRepository, IUserRepository

__all__ = [
    "IPostRepository",
    "IUserRepository",
    "DuplicateEmailError",
    "DuplicatePostTitleError",
    "PostNotFoundError",
    "UserHasPostsError",
    "UserNotFoundError",
]
