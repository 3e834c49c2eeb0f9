"""Blog presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate (users, posts). Each
aggregate package contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from blog.presentation import posts, users

router = APIRouter(prefix="/api")

router.include_router(users.router)
router.include_router(posts.router)

__all__ = ["router"]
