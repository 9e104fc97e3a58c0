"""Tests for Request ID middleware."""

from __future__ import annotations

import re

import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ratedesk.observability.middleware import SERVICE_NAME, RequestIdMiddleware

UUID4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _make_app() -> FastAPI:
    """Create a minimal FastAPI app with RequestIdMiddleware."""
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    @app.get("/echo-context")
    async def echo_context():
        return structlog.contextvars.get_contextvars()

    return app


def test_response_has_generated_request_id() -> None:
    resp = TestClient(_make_app()).get("/echo-context")

    assert resp.status_code == 200
    request_id = resp.headers.get("X-Request-ID", "")
    assert UUID4_PATTERN.match(request_id), f"Expected UUID4 format, got: {request_id}"


def test_response_echoes_client_request_id() -> None:
    resp = TestClient(_make_app()).get("/echo-context", headers={"X-Request-ID": "desk-42"})

    assert resp.headers["X-Request-ID"] == "desk-42"


def test_request_id_bound_for_logging() -> None:
    resp = TestClient(_make_app()).get("/echo-context", headers={"X-Request-ID": "desk-7"})

    assert resp.json() == {
        "request_id": "desk-7",
        "service": SERVICE_NAME,
        "method": "GET",
        "path": "/echo-context",
    }
