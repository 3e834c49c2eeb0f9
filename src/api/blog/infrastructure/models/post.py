"""SQLAlchemy ORM model for the posts table."""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PostModel(Base, TimestampMixin):
    """ORM model for posts table.

    Foreign Key Constraints:
    - author_id references users.id with RESTRICT delete
      A user cannot be deleted while they still author posts

    The body is stored in a JSON (not JSONB) column so the document is kept
    exactly as submitted, including key order.
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    views: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    body: Mapped[Any] = mapped_column(JSON, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<PostModel(id={self.id}, title={self.title}, "
            f"author_id={self.author_id})>"
        )
