"""Unit tests for the request logging middleware."""

from unittest.mock import ANY, MagicMock

import pytest
from fastapi import FastAPI, HTTPException, status
from fastapi.testclient import TestClient

from infrastructure.middleware import RequestLoggingMiddleware
from infrastructure.observability import RequestProbe


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=RequestProbe)


@pytest.fixture
def test_client(mock_probe) -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware, probe=mock_probe)

    @app.get("/ok")
    def ok():
        return {"status": "ok"}

    @app.get("/missing")
    def missing():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/boom")
    def boom():
        raise RuntimeError("Invariant violated")

    return TestClient(app)


class TestRequestLogging:
    """Tests for per-request events."""

    def test_logs_successful_request(self, test_client, mock_probe):
        response = test_client.get("/ok")

        assert response.status_code == status.HTTP_200_OK
        mock_probe.request_completed.assert_called_once_with(
            method="GET", path="/ok", status_code=200, duration_ms=ANY
        )
        mock_probe.request_failed.assert_not_called()

    def test_logs_client_error_status(self, test_client, mock_probe):
        test_client.get("/missing")

        mock_probe.request_completed.assert_called_once_with(
            method="GET", path="/missing", status_code=404, duration_ms=ANY
        )

    def test_duration_is_non_negative(self, test_client, mock_probe):
        test_client.get("/ok")

        duration = mock_probe.request_completed.call_args.kwargs["duration_ms"]
        assert duration >= 0


class TestErrorRecovery:
    """Tests for unhandled exceptions escaping the application."""

    def test_unhandled_exception_becomes_generic_500(self, test_client):
        response = test_client.get("/boom")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Internal server error"}

    def test_unhandled_exception_is_recorded(self, test_client, mock_probe):
        test_client.get("/boom")

        mock_probe.request_failed.assert_called_once()
        kwargs = mock_probe.request_failed.call_args.kwargs
        assert kwargs["path"] == "/boom"
        assert isinstance(kwargs["error"], RuntimeError)
        mock_probe.request_completed.assert_called_once_with(
            method="GET", path="/boom", status_code=500, duration_ms=ANY
        )
