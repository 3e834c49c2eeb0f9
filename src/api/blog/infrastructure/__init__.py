"""Infrastructure layer for the blog bounded context.

PostgreSQL-backed repository implementations and their ORM models.
"""
