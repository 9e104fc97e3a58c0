"""Tests for application entry point: structlog config, service initialization, and app creation."""

from __future__ import annotations

import inspect
import sqlite3
from pathlib import Path

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient
from structlog_sentry import SentryProcessor

from ratedesk.app import configure_logging, create_app, initialize_services
from ratedesk.config import Settings
from ratedesk.domain.errors import SeedError
from ratedesk.store.repository import RateDeskRepository
from ratedesk.store.schema import close_rate_desk_db
from ratedesk.store.seed import DEFAULT_SEED_PATH


def _reset_structlog() -> None:
    """Reset structlog so cached loggers don't leak between tests."""
    structlog.reset_defaults()


def _base_settings(tmp_path: Path, **overrides) -> Settings:
    """Build a Settings instance pointing the database at tmp_path."""
    defaults = {"rate_desk_db_path": tmp_path / "desk.db"}
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)  # type: ignore[call-arg]


class TestConfigureLogging:
    """Tests for structlog configuration in dev and production modes."""

    def test_development_mode_uses_console_renderer(self) -> None:
        _reset_structlog()
        configure_logging(production=False)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.dev.ConsoleRenderer) for p in processors)

    def test_production_mode_uses_json_renderer(self) -> None:
        _reset_structlog()
        configure_logging(production=True)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.processors.JSONRenderer) for p in processors)

    def test_sentry_processor_added_when_enabled(self) -> None:
        _reset_structlog()
        configure_logging(production=True, sentry_enabled=True)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, SentryProcessor) for p in processors)

    def test_no_sentry_processor_by_default(self) -> None:
        _reset_structlog()
        configure_logging()
        processors = structlog.get_config()["processors"]
        assert not any(isinstance(p, SentryProcessor) for p in processors)


class TestInitializeServices:
    """Tests for datastore and repository initialization."""

    def test_creates_database_and_repository(self, tmp_path: Path) -> None:
        _reset_structlog()
        db_path = tmp_path / "nested" / "desk.db"

        services = initialize_services(_base_settings(tmp_path, rate_desk_db_path=db_path))

        assert db_path.exists()
        assert isinstance(services["db_conn"], sqlite3.Connection)
        assert isinstance(services["repository"], RateDeskRepository)
        assert services["repository"].list_active_inventory() == []

        close_rate_desk_db(services["db_conn"])

    def test_applies_seed_file(self, tmp_path: Path) -> None:
        _reset_structlog()

        services = initialize_services(_base_settings(tmp_path, seed_path=DEFAULT_SEED_PATH))

        repository = services["repository"]
        assert repository.find_scenario_by_name("Base") is not None
        assert repository.list_active_inventory()

        close_rate_desk_db(services["db_conn"])

    def test_missing_seed_file_raises(self, tmp_path: Path) -> None:
        _reset_structlog()

        with pytest.raises(SeedError):
            initialize_services(_base_settings(tmp_path, seed_path=tmp_path / "absent.yaml"))

    def test_in_memory_database(self, tmp_path: Path) -> None:
        _reset_structlog()

        services = initialize_services(
            _base_settings(tmp_path, rate_desk_db_path=Path(":memory:"))
        )

        services["repository"].ping()
        close_rate_desk_db(services["db_conn"])


class TestCreateApp:
    """Tests for FastAPI app creation."""

    def test_returns_fastapi_instance(self, tmp_path: Path) -> None:
        _reset_structlog()
        services = initialize_services(_base_settings(tmp_path))

        app = create_app(services)

        assert isinstance(app, FastAPI)
        close_rate_desk_db(services["db_conn"])

    def test_no_deprecated_on_event(self) -> None:
        source = inspect.getsource(create_app)
        assert "on_event" not in source

    def test_routes_registered(self, tmp_path: Path) -> None:
        _reset_structlog()
        services = initialize_services(_base_settings(tmp_path))

        route_paths = [route.path for route in create_app(services).routes]

        for path in ("/rate-desk", "/rate-desk/proposals", "/health", "/ready", "/metrics"):
            assert path in route_paths
        close_rate_desk_db(services["db_conn"])

    def test_settings_stored_on_app_state(self, tmp_path: Path) -> None:
        _reset_structlog()
        settings = _base_settings(tmp_path)
        services = initialize_services(settings)

        app = create_app(services)

        assert app.state.settings is settings
        close_rate_desk_db(services["db_conn"])

    def test_serves_seeded_rate_desk_and_closes_on_shutdown(self, tmp_path: Path) -> None:
        _reset_structlog()
        services = initialize_services(_base_settings(tmp_path, seed_path=DEFAULT_SEED_PATH))

        with TestClient(create_app(services)) as client:
            response = client.get("/rate-desk")
            assert response.status_code == 200
            assert response.json()["scenario"]["description"] == "Base scenario"
            assert response.headers["X-Request-ID"]
            assert client.get("/ready").status_code == 200

        with pytest.raises(sqlite3.ProgrammingError):
            services["db_conn"].execute("SELECT 1")


class TestMainImport:
    """Test that main() can be imported without side effects."""

    def test_main_importable(self) -> None:
        from ratedesk.app import main

        assert callable(main)
