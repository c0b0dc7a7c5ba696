"""Tests for global exception handlers.

Domain errors map to 500 with their stable code and every error body has the same
envelope; unexpected exceptions never leak details.
"""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from clock_api.core.errors import AppError, ConfigurationAppError, RateLimitBackendError
from clock_api.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/configuration")
    async def raise_configuration():
        raise ConfigurationAppError(code="rate_limit_invalid_parameter", message="limit must be a positive integer")

    @app.get("/backend")
    async def raise_backend():
        raise RateLimitBackendError(code="rate_limit_backend_unavailable", message="redis down")

    @app.get("/backend-details")
    async def raise_backend_with_details():
        raise RateLimitBackendError(
            code="rate_limit_backend_unavailable",
            message="Redis INCR failed",
            details={"backend": "redis", "hint": "check REDIS_URL"},
        )

    @app.get("/boom")
    async def raise_unexpected():
        raise RuntimeError("database connection failed at 10.0.0.3")

    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    def test_configuration_error_returns_500(self, client: TestClient) -> None:
        resp = client.get("/configuration")

        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == "rate_limit_invalid_parameter"
        assert "details" not in resp.json()["error"]

    def test_backend_error_returns_500(self, client: TestClient) -> None:
        resp = client.get("/backend")

        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == "rate_limit_backend_unavailable"

    def test_details_are_rendered_when_present(self, client: TestClient) -> None:
        resp = client.get("/backend-details")

        assert resp.status_code == 500
        error = resp.json()["error"]
        assert error["message"] == "Redis INCR failed"
        assert error["details"] == {"backend": "redis", "hint": "check REDIS_URL"}
        assert "request_id" in error

    def test_app_error_str_is_message(self) -> None:
        assert str(AppError(code="x", message="readable")) == "readable"


class TestGeneralExceptionHandler:
    def test_unexpected_error_returns_generic_500(self, client: TestClient) -> None:
        resp = client.get("/boom")

        assert resp.status_code == 500
        error = resp.json()["error"]
        assert error["code"] == "internal_server_error"
        assert "10.0.0.3" not in resp.text

    def test_handler_never_leaks_stack_trace(self) -> None:
        request = MagicMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("Test error with details")))

        body = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert "Traceback" not in json.dumps(body)
        assert "ValueError" not in json.dumps(body)
        assert "request_id" in body["error"]

    def test_handlers_registered(self, app_with_handlers: FastAPI) -> None:
        assert AppError in app_with_handlers.exception_handlers
        assert Exception in app_with_handlers.exception_handlers
