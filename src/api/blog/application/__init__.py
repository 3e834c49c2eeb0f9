"""Application layer for the blog bounded context."""
