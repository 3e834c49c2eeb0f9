"""Domain probes for blog repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to user and post persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

from shared_kernel.redaction import mask_email

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_saved(self, user_id: str, created: bool) -> None:
        """Record that a user was inserted or updated."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def users_listed(self, count: int) -> None:
        """Record that users were listed."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was deleted."""
        ...

    def duplicate_email(self, email: str) -> None:
        """Record that the store rejected a duplicate email."""
        ...

    def user_still_referenced(self, user_id: str) -> None:
        """Record that deleting a user was blocked by their posts."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class PostRepositoryProbe(Protocol):
    """Domain probe for post repository operations."""

    def post_saved(self, post_id: str, created: bool) -> None:
        """Record that a post was inserted or updated."""
        ...

    def post_retrieved(self, post_id: str) -> None:
        """Record that a post was retrieved."""
        ...

    def post_not_found(self, post_id: str) -> None:
        """Record that a post was not found."""
        ...

    def posts_listed(self, count: int) -> None:
        """Record that posts were listed."""
        ...

    def post_deleted(self, post_id: str) -> None:
        """Record that a post was deleted."""
        ...

    def duplicate_title(self, title: str) -> None:
        """Record that the store rejected a duplicate title."""
        ...

    def author_missing(self, post_id: str, author_id: str) -> None:
        """Record that the store rejected a post whose author is missing."""
        ...

    def with_context(self, context: ObservationContext) -> PostRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_saved(self, user_id: str, created: bool) -> None:
        """Record that a user was inserted or updated."""
        self._logger.info(
            "user_saved",
            user_id=user_id,
            created=created,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def users_listed(self, count: int) -> None:
        """Record that users were listed."""
        self._logger.debug(
            "users_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, email: str) -> None:
        """Record that the store rejected a duplicate email."""
        self._logger.warning(
            "duplicate_email_rejected_by_store",
            email=mask_email(email),
            **self._get_context_kwargs(),
        )

    def user_still_referenced(self, user_id: str) -> None:
        """Record that deleting a user was blocked by their posts."""
        self._logger.warning(
            "user_still_referenced",
            user_id=user_id,
            **self._get_context_kwargs(),
        )


class DefaultPostRepositoryProbe:
    """Default implementation of PostRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPostRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultPostRepositoryProbe(logger=self._logger, context=context)

    def post_saved(self, post_id: str, created: bool) -> None:
        """Record that a post was inserted or updated."""
        self._logger.info(
            "post_saved",
            post_id=post_id,
            created=created,
            **self._get_context_kwargs(),
        )

    def post_retrieved(self, post_id: str) -> None:
        """Record that a post was retrieved."""
        self._logger.debug(
            "post_retrieved",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def post_not_found(self, post_id: str) -> None:
        """Record that a post was not found."""
        self._logger.debug(
            "post_not_found",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def posts_listed(self, count: int) -> None:
        """Record that posts were listed."""
        self._logger.debug(
            "posts_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def post_deleted(self, post_id: str) -> None:
        """Record that a post was deleted."""
        self._logger.info(
            "post_deleted",
            post_id=post_id,
            **self._get_context_kwargs(),
        )

    def duplicate_title(self, title: str) -> None:
        """Record that the store rejected a duplicate title."""
        self._logger.warning(
            "duplicate_title_rejected_by_store",
            title=title,
            **self._get_context_kwargs(),
        )

    def author_missing(self, post_id: str, author_id: str) -> None:
        """Record that the store rejected a post whose author is missing."""
        self._logger.warning(
            "post_author_missing",
            post_id=post_id,
            author_id=author_id,
            **self._get_context_kwargs(),
        )
