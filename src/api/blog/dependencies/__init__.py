"""FastAPI dependency providers for the blog bounded context."""
