"""SQLite-backed repository for rate desk records.

Accepts a sqlite3.Connection, uses parameterized queries exclusively, and
commits synchronously after writes.  Every row read is validated into its
pydantic model before it leaves the repository, so shape mismatches fail
here rather than at the point of use.
"""

from __future__ import annotations

import sqlite3
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from ratedesk.domain.errors import DataStoreError, RecordValidationError
from ratedesk.domain.models import InventoryUnit, Scenario, ScenarioAssumptions

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)


def _validate_row(model: type[M], table: str, row: sqlite3.Row) -> M:
    """Validate a database row into *model*, raising RecordValidationError on mismatch."""
    data = dict(row)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        row_id = data.get("id", data.get("scenario_id"))
        raise RecordValidationError(
            table, None if row_id is None else str(row_id), str(exc)
        ) from exc


class RateDeskRepository:
    """Read and write scenarios, assumptions and inventory units.

    The pricing engine only calls the read operations; the ``upsert_*``
    methods exist for administrative seeding.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize with an open database connection.

        Args:
            conn: An open sqlite3.Connection whose database already has the
                  rate desk tables (see ``init_rate_desk_tables``).
        """
        self._conn = conn

    def _fetch(self, operation: str, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        """Run a SELECT with ``sqlite3.Row`` rows, translating driver errors."""
        prev_factory = self._conn.row_factory
        self._conn.row_factory = sqlite3.Row
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            logger.error("datastore_read_failed", operation=operation, error=str(exc))
            raise DataStoreError(operation, str(exc)) from exc
        finally:
            self._conn.row_factory = prev_factory

    def _write(self, operation: str, sql: str, params: tuple[Any, ...]) -> None:
        """Run a write statement and commit, translating driver errors."""
        try:
            # Commits on success, rolls back on error
            with self._conn:
                self._conn.execute(sql, params)
        except sqlite3.Error as exc:
            logger.error("datastore_write_failed", operation=operation, error=str(exc))
            raise DataStoreError(operation, str(exc)) from exc

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def find_scenario_by_name(self, name: str) -> Scenario | None:
        """Return the first scenario whose name matches exactly.

        Args:
            name: The scenario name, compared case-sensitively.

        Returns:
            The first matching scenario in insertion order, or ``None``.
        """
        rows = self._fetch(
            "find_scenario_by_name",
            "SELECT id, name, description FROM scenarios WHERE name = ? ORDER BY rowid LIMIT 1",
            (name,),
        )
        if not rows:
            return None
        return _validate_row(Scenario, "scenarios", rows[0])

    def get_scenario_assumptions(self, scenario_id: str) -> ScenarioAssumptions | None:
        """Return the assumptions record for a scenario, if one exists."""
        rows = self._fetch(
            "get_scenario_assumptions",
            """
            SELECT scenario_id, baseline_midroll_cpm, creator_rev_share
            FROM scenario_assumptions WHERE scenario_id = ? LIMIT 1
            """,
            (scenario_id,),
        )
        if not rows:
            return None
        return _validate_row(ScenarioAssumptions, "scenario_assumptions", rows[0])

    def list_active_inventory(self) -> list[InventoryUnit]:
        """Return every active inventory unit, ordered by type ascending.

        Returns:
            Validated inventory units; empty when nothing is active.
        """
        rows = self._fetch(
            "list_active_inventory",
            """
            SELECT id, name, slug, type, placement, target_cpm, floor_cpm,
                   ceiling_cpm, expected_monthly_impressions,
                   seasonality_factor, is_active
            FROM inventory_units
            WHERE is_active = 1
            ORDER BY type ASC, rowid ASC
            """,
        )
        return [_validate_row(InventoryUnit, "inventory_units", row) for row in rows]

    def ping(self) -> None:
        """Run a trivial query to confirm the connection is usable."""
        self._fetch("ping", "SELECT 1")

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def upsert_scenario(self, scenario: Scenario) -> None:
        """Insert or update a scenario definition, keeping its insertion order."""
        self._write(
            "upsert_scenario",
            """
            INSERT INTO scenarios (id, name, description) VALUES (?, ?, ?)
            ON CONFLICT (id) DO UPDATE SET
                name = excluded.name,
                description = excluded.description
            """,
            (scenario.id, scenario.name, scenario.description),
        )

    def upsert_assumptions(self, assumptions: ScenarioAssumptions) -> None:
        """Insert or replace the assumptions attached to a scenario."""
        self._write(
            "upsert_assumptions",
            """
            INSERT INTO scenario_assumptions (
                scenario_id, baseline_midroll_cpm, creator_rev_share
            ) VALUES (?, ?, ?)
            ON CONFLICT (scenario_id) DO UPDATE SET
                baseline_midroll_cpm = excluded.baseline_midroll_cpm,
                creator_rev_share = excluded.creator_rev_share,
                updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
            """,
            (
                assumptions.scenario_id,
                str(assumptions.baseline_midroll_cpm),
                str(assumptions.creator_rev_share),
            ),
        )

    def upsert_inventory_unit(self, unit: InventoryUnit) -> None:
        """Insert or update an inventory unit."""
        self._write(
            "upsert_inventory_unit",
            """
            INSERT INTO inventory_units (
                id, name, slug, type, placement, target_cpm, floor_cpm,
                ceiling_cpm, expected_monthly_impressions, seasonality_factor,
                is_active
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (id) DO UPDATE SET
                name = excluded.name,
                slug = excluded.slug,
                type = excluded.type,
                placement = excluded.placement,
                target_cpm = excluded.target_cpm,
                floor_cpm = excluded.floor_cpm,
                ceiling_cpm = excluded.ceiling_cpm,
                expected_monthly_impressions = excluded.expected_monthly_impressions,
                seasonality_factor = excluded.seasonality_factor,
                is_active = excluded.is_active,
                updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
            """,
            (
                unit.id,
                unit.name,
                unit.slug,
                unit.type,
                unit.placement,
                str(unit.target_cpm),
                str(unit.floor_cpm),
                str(unit.ceiling_cpm),
                unit.expected_monthly_impressions,
                str(unit.seasonality_factor),
                int(unit.is_active),
            ),
        )
