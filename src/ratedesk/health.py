"""Liveness and readiness probes.

``GET /health`` answers as long as the process serves requests.
``GET /ready`` answers 200 only when the rate desk datastore responds to a
trivial query; otherwise 503 with the failing check named.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ratedesk.domain.errors import DataStoreError

logger = structlog.get_logger()


async def _check_datastore(services: dict[str, Any]) -> str:
    repository = services.get("repository")
    if repository is None:
        return "fail"
    try:
        await asyncio.to_thread(repository.ping)
    except DataStoreError as exc:
        logger.warning("readiness_datastore_failed", error=str(exc))
        return "fail"
    return "ok"


def register_health_routes(app: FastAPI) -> None:
    """Add ``/health`` and ``/ready`` to *app*."""

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        checks = {"datastore": await _check_datastore(request.app.state.services)}
        is_ready = all(result == "ok" for result in checks.values())
        return JSONResponse(
            content={"status": "ready" if is_ready else "not_ready", "checks": checks},
            status_code=200 if is_ready else 503,
        )
