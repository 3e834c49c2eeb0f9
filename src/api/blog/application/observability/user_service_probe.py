"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

from shared_kernel.redaction import mask_email

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_created(self, user_id: str) -> None:
        """Record that a user was created."""
        ...

    def user_updated(self, user_id: str, fields: list[str]) -> None:
        """Record that a user was updated."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was deleted."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a requested user does not exist."""
        ...

    def users_listed(self, count: int) -> None:
        """Record that users were listed."""
        ...

    def duplicate_email(self, email: str) -> None:
        """Record that an email was rejected as already registered."""
        ...

    def user_has_posts(self, user_id: str) -> None:
        """Record that a user could not be deleted because they author posts."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str, fields: list[str]) -> None:
        """Record that a user was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
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
        """Record that a requested user does not exist."""
        self._logger.info(
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

    def duplicate_email(self, email: str) -> None:
        """Record that an email was rejected as already registered."""
        self._logger.warning(
            "duplicate_email",
            email=mask_email(email),
            **self._get_context_kwargs(),
        )

    def user_has_posts(self, user_id: str) -> None:
        """Record that a user could not be deleted because they author posts."""
        self._logger.warning(
            "user_has_posts",
            user_id=user_id,
            **self._get_context_kwargs(),
        )
