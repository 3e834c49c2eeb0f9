"""User presentation: routes and models for the User aggregate."""

from blog.presentation.users.routes import router

__all__ = ["router"]
