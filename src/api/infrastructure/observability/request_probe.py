"""Probe for HTTP request handling.

Records one event per served request, and every failure that would otherwise
disappear behind a generic 500 response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RequestProbe(Protocol):
    """Probe for HTTP request handling."""

    def request_completed(
        self, method: str, path: str, status_code: int, duration_ms: float
    ) -> None:
        """Record that a request was answered."""
        ...

    def request_failed(self, method: str, path: str, error: Exception) -> None:
        """Record that a request raised an unhandled exception."""
        ...

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record an unexpected error that a route turned into a 500."""
        ...

    def with_context(self, context: ObservationContext) -> RequestProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRequestProbe:
    """Default implementation of RequestProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultRequestProbe:
        """Create a new probe with observation context bound."""
        return DefaultRequestProbe(logger=self._logger, context=context)

    def request_completed(
        self, method: str, path: str, status_code: int, duration_ms: float
    ) -> None:
        """Record that a request was answered.

        Server errors log at error level, client errors at warning level.
        """
        if status_code >= 500:
            log = self._logger.error
        elif status_code >= 400:
            log = self._logger.warning
        else:
            log = self._logger.info

        log(
            "http_request",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
            **self._get_context_kwargs(),
        )

    def request_failed(self, method: str, path: str, error: Exception) -> None:
        """Record that a request raised an unhandled exception."""
        self._logger.error(
            "http_request_failed",
            method=method,
            path=path,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record an unexpected error that a route turned into a 500."""
        self._logger.error(
            "operation_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )
