"""Protocol for post application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PostServiceProbe(Protocol):
    """Domain probe for post application service operations."""

    def post_created(self, post_id: str, author_id: str) -> None:
        """Record that a post was created."""
        ...

    def post_updated(self, post_id: str, fields: list[str]) -> None:
        """Record that a post was updated."""
        ...

    def post_deleted(self, post_id: str) -> None:
        """Record that a post was deleted."""
        ...

    def post_retrieved(self, post_id: str) -> None:
        """Record that a post projection was served."""
        ...

    def post_not_found(self, post_id: str) -> None:
        """Record that a requested post does not exist."""
        ...

    def posts_listed(self, count: int) -> None:
        """Record that post projections were listed."""
        ...

    def duplicate_title(self, title: str) -> None:
        """Record that a title was rejected as already used."""
        ...

    def author_not_found(self, author_id: str) -> None:
        """Record that a post referenced a user that does not exist."""
        ...

    def with_context(self, context: ObservationContext) -> PostServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPostServiceProbe:
    """Default implementation of PostServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultPostServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultPostServiceProbe(logger=self._logger, context=context)

    def post_created(self, post_id: str, author_id: str) -> None:
        """Record that a post was created."""
        self._logger.info(
            "post_created",
            post_id=post_id,
            author_id=author_id,
            **self._get_context_kwargs(),
        )

    def post_updated(self, post_id: str, fields: list[str]) -> None:
        """Record that a post was updated."""
        self._logger.info(
            "post_updated",
            post_id=post_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def post_deleted(self, post_id: str) -> None:
        """Record that a post was deleted."""
        self._logger.info(
            "post_deleted",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def post_retrieved(self, post_id: str) -> None:
        """Record that a post projection was served."""
        self._logger.debug(
            "post_retrieved",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def post_not_found(self, post_id: str) -> None:
        """Record that a requested post does not exist."""
        self._logger.info(
            "post_not_found",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def posts_listed(self, count: int) -> None:
        """Record that post projections were listed."""
        self._logger.debug(
            "posts_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_title(self, title: str) -> None:
        """Record that a title was rejected as already used."""
        self._logger.warning(
            "duplicate_post_title",
            title=title,
            **self._get_context_kwargs(),
        )

    def author_not_found(self, author_id: str) -> None:
        """Record that a post referenced a user that does not exist."""
        self._logger.warning(
            "post_author_not_found",
            author_id=author_id,
            **self._get_context_kwargs(),
        )
