"""ASGI middleware shared by all bounded contexts."""

from __future__ import annotations

import time

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from infrastructure.observability.request_probe import (
    DefaultRequestProbe,
    RequestProbe,
)


class RequestLoggingMiddleware:
    """Log every HTTP request and recover from unhandled exceptions.

    Each request produces one ``http_request`` event carrying method, path,
    status code and duration. An exception escaping the application is
    recorded with its traceback and answered with a generic 500, unless the
    response had already started, in which case it is re-raised.
    """

    def __init__(self, app: ASGIApp, probe: RequestProbe | None = None):
        self.app = app
        self._probe = probe or DefaultRequestProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope["method"]
        path = scope["path"]
        start = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, response_started
            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            self._probe.request_failed(method=method, path=path, error=e)
            if response_started:
                raise
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"},
            )
            await response(scope, receive, send_wrapper)
        finally:
            self._probe.request_completed(
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
