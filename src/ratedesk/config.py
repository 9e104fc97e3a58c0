"""Rate desk settings, read from the environment and an optional ``.env``.

Nothing here imports from the rest of ``ratedesk``, so any module can depend
on it.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Service, datastore and observability settings.

    Environment variable names are the upper-cased field names
    (``RATE_DESK_DB_PATH``, ``SEED_PATH``, ``SENTRY_DSN``, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    production: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # SQLite file holding scenarios, assumptions and inventory
    rate_desk_db_path: Path = Path("data/rate_desk.db")
    # Applied at startup when set
    seed_path: Path | None = None

    sentry_dsn: SecretStr = SecretStr("")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Tests reset the cache with ``get_settings.cache_clear()``.  Invalid
    values terminate the process with exit code 1.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # errors() omits input values, so secrets stay out of the log
        logger.error(
            "settings_validation_failed",
            errors=exc.errors(include_input=False, include_url=False),
        )
        sys.exit(1)


def _missing_files(settings: Settings) -> list[str]:
    problems = []
    if not settings.rate_desk_db_path.exists():
        problems.append(f"Rate desk database not found: {settings.rate_desk_db_path}")
    if settings.seed_path is not None and not settings.seed_path.exists():
        problems.append(f"Seed file not found: {settings.seed_path}")
    return problems


def validate_settings(settings: Settings) -> None:
    """Check the configured files before the service starts.

    A missing database or seed file stops a production start with exit code
    1 and a summary on stderr.  In development the same problems are only
    logged, and the database is created on first use.
    """
    problems = _missing_files(settings)
    if not problems:
        logger.info("settings_validation_passed")
        return

    if not settings.production:
        for problem in problems:
            logger.warning("settings_invalid_dev", detail=problem)
        return

    for problem in problems:
        logger.error("settings_invalid", detail=problem)
    lines = ["", "=== STARTUP FAILED ===", "Rate desk configuration is incomplete:"]
    lines.extend(f"  - {problem}" for problem in problems)
    lines.extend(["======================", ""])
    print("\n".join(lines), file=sys.stderr)
    sys.exit(1)
