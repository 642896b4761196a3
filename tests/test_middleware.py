"""
Tests for API middleware.

Tests:
- Request ID middleware
- Request logging middleware
"""

from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from backend.app.middleware.request_id import RequestIDMiddleware
from core.logging import RequestLoggingMiddleware


def _app_with(*middleware):
    async def echo(request):
        return JSONResponse({"request_id": request.scope["state"].get("request_id")})

    app = Starlette(routes=[Route("/test", echo)])
    for cls in middleware:
        app.add_middleware(cls)
    return app


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    def test_echoes_client_request_id(self):
        client = TestClient(_app_with(RequestIDMiddleware))

        response = client.get("/test", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.json()["request_id"] == "abc-123"

    def test_generates_request_id(self):
        client = TestClient(_app_with(RequestIDMiddleware))

        first = client.get("/test").headers["X-Request-ID"]
        second = client.get("/test").headers["X-Request-ID"]

        assert len(first) == 32
        assert first != second

    def test_works_inside_logging_middleware(self):
        client = TestClient(_app_with(RequestIDMiddleware, RequestLoggingMiddleware))

        response = client.get("/test", headers={"X-Request-ID": "trace-me"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "trace-me"
