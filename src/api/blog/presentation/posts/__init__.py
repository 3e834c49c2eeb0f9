"""Post presentation: routes and models for the Post aggregate."""

from blog.presentation.posts.routes import router

__all__ = ["router"]
