"""Shared pytest fixtures for the rate desk test suite."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from decimal import Decimal
from typing import Any

import pytest

from ratedesk.domain.models import InventoryUnit, Scenario, ScenarioAssumptions
from ratedesk.store.repository import RateDeskRepository
from ratedesk.store.schema import init_rate_desk_db


def build_unit(**overrides: Any) -> InventoryUnit:
    """Build an inventory unit from the reference podcast example."""
    fields: dict[str, Any] = {
        "id": "inv-podcast",
        "name": "Morning Show Mid-roll",
        "slug": "morning-show-midroll",
        "type": "podcast",
        "placement": "mid-roll",
        "target_cpm": Decimal("20"),
        "floor_cpm": Decimal("15"),
        "ceiling_cpm": Decimal("30"),
        "expected_monthly_impressions": 100000,
        "seasonality_factor": Decimal("1.0"),
    }
    fields.update(overrides)
    return InventoryUnit(**fields)


@pytest.fixture
def make_unit() -> Callable[..., InventoryUnit]:
    """Factory for inventory units; keyword arguments override the defaults."""
    return build_unit


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite connection with the rate desk tables initialized."""
    connection = init_rate_desk_db(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def repository(conn: sqlite3.Connection) -> RateDeskRepository:
    """RateDeskRepository backed by the in-memory connection."""
    return RateDeskRepository(conn)


@pytest.fixture
def seeded_repository(repository: RateDeskRepository) -> RateDeskRepository:
    """Repository with the three standard scenarios and two active units.

    The Aggressive scenario has no assumptions row.
    """
    repository.upsert_scenario(
        Scenario(id="scn-conservative", name="Conservative", description="Soft market")
    )
    repository.upsert_scenario(Scenario(id="scn-base", name="Base", description="Base plan"))
    repository.upsert_scenario(
        Scenario(id="scn-aggressive", name="Aggressive", description="Hot market")
    )
    repository.upsert_assumptions(
        ScenarioAssumptions(
            scenario_id="scn-conservative",
            baseline_midroll_cpm=Decimal("22"),
            creator_rev_share=Decimal("0.75"),
        )
    )
    repository.upsert_assumptions(
        ScenarioAssumptions(
            scenario_id="scn-base",
            baseline_midroll_cpm=Decimal("25"),
            creator_rev_share=Decimal("0.7"),
        )
    )
    repository.upsert_inventory_unit(build_unit())
    repository.upsert_inventory_unit(
        build_unit(
            id="inv-event",
            name="Summit Stage Mention",
            slug="summit-stage-mention",
            type="event",
            placement="stage",
            target_cpm=Decimal("40"),
            floor_cpm=Decimal("30"),
            ceiling_cpm=Decimal("60"),
            expected_monthly_impressions=20000,
        )
    )
    return repository
