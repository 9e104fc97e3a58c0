"""Rate desk HTTP service.

``main()`` wires everything in order: settings, Sentry, structlog, the
startup file check, the SQLite datastore (seeded from ``SEED_PATH`` when
set), and the FastAPI app served by uvicorn.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from ratedesk.api.routes import router as rate_desk_router
from ratedesk.config import Settings, get_settings, validate_settings
from ratedesk.health import register_health_routes
from ratedesk.observability.metrics import setup_metrics
from ratedesk.observability.middleware import SERVICE_NAME, RequestIdMiddleware
from ratedesk.observability.sentry import get_sentry_processor, init_sentry
from ratedesk.store.repository import RateDeskRepository
from ratedesk.store.schema import close_rate_desk_db, init_rate_desk_db
from ratedesk.store.seed import apply_seed, load_seed_file

logger = structlog.get_logger()

IN_MEMORY_DB = ":memory:"


def configure_logging(production: bool = False, sentry_enabled: bool = False) -> None:
    """Set up structlog for the service.

    Production logs are JSON from INFO up; development logs are rendered for
    the console from DEBUG up.  With *sentry_enabled*, ERROR events are also
    sent to Sentry.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
    ]
    if sentry_enabled:
        processors.append(get_sentry_processor())
    processors += [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        processors.append(structlog.processors.JSONRenderer())
        min_level = logging.INFO
    else:
        processors.append(structlog.dev.ConsoleRenderer())
        min_level = logging.DEBUG

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)


def initialize_services(settings: Settings | None = None) -> dict[str, Any]:
    """Open the datastore and build the shared repository.

    Args:
        settings: Settings to use; ``get_settings()`` when omitted.

    Returns:
        ``db_conn``, ``repository`` and ``_settings`` keyed by name.

    Raises:
        SeedError: If ``seed_path`` is set and the file cannot be loaded.
        DataStoreError: If writing the seed fails.
    """
    settings = settings or get_settings()

    db_path = settings.rate_desk_db_path
    if str(db_path) != IN_MEMORY_DB:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = init_rate_desk_db(db_path)
    repository = RateDeskRepository(conn)

    if settings.seed_path is not None:
        counts = apply_seed(repository, load_seed_file(settings.seed_path))
        logger.info("startup_seed_applied", path=str(settings.seed_path), **counts)

    return {"db_conn": conn, "repository": repository, "_settings": settings}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Close the rate desk database when the app shuts down."""
    logger.info("rate_desk_api_starting")
    yield
    conn = app.state.services.get("db_conn")
    if conn is not None:
        close_rate_desk_db(conn)
        logger.info("rate_desk_db_closed")


def create_app(services: dict[str, Any]) -> FastAPI:
    """Build the FastAPI app around already-initialized *services*."""
    app = FastAPI(title="Seeksy Rate Desk", lifespan=lifespan)
    app.state.services = services
    app.state.settings = services.get("_settings") or get_settings()

    app.add_middleware(RequestIdMiddleware)
    app.include_router(rate_desk_router)
    register_health_routes(app)
    setup_metrics(app)
    return app


def main() -> None:
    """Run the rate desk API under uvicorn."""
    settings = get_settings()
    sentry_enabled = init_sentry(
        settings.sentry_dsn.get_secret_value(),
        environment="production" if settings.production else "development",
    )
    configure_logging(production=settings.production, sentry_enabled=sentry_enabled)
    logger.info("rate_desk_starting", host=settings.api_host, port=settings.api_port)

    validate_settings(settings)
    app = create_app(initialize_services(settings))

    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level="info")


if __name__ == "__main__":
    main()
