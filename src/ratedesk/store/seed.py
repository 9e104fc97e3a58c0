"""YAML seed files for administratively-defined scenarios and inventory.

Example layout::

    scenarios:
      - id: scn-base
        name: Base
        description: Base scenario
        assumptions:
          baseline_midroll_cpm: 25.0
          creator_rev_share: 0.7
    inventory:
      - id: inv-001
        name: Morning Show Mid-roll
        slug: morning-show-midroll
        type: podcast
        placement: mid-roll
        target_cpm: 20
        floor_cpm: 15
        ceiling_cpm: 30
        expected_monthly_impressions: 100000
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError, field_validator

from ratedesk.domain.errors import SeedError
from ratedesk.domain.models import (
    DEFAULT_BASELINE_MIDROLL_CPM,
    DEFAULT_CREATOR_REV_SHARE,
    Amount,
    InventoryUnit,
    Scenario,
    ScenarioAssumptions,
)
from ratedesk.store.repository import RateDeskRepository

logger = structlog.get_logger()

DEFAULT_SEED_PATH = Path(__file__).resolve().parents[3] / "config" / "rate_desk_seed.yaml"


class SeedAssumptions(BaseModel):
    """Assumption values nested under a seeded scenario."""

    baseline_midroll_cpm: Amount = DEFAULT_BASELINE_MIDROLL_CPM
    creator_rev_share: Amount = DEFAULT_CREATOR_REV_SHARE

    @field_validator("creator_rev_share")
    @classmethod
    def share_must_be_fraction(cls, v: Decimal) -> Decimal:
        """Reject shares outside [0, 1] at load time."""
        if not Decimal("0") <= v <= Decimal("1"):
            raise ValueError(f"creator_rev_share must be between 0 and 1, got {v}")
        return v


class SeedScenario(BaseModel):
    """A scenario entry in a seed file.  ``assumptions`` may be omitted."""

    id: str
    name: str
    description: str = ""
    assumptions: SeedAssumptions | None = None


class SeedData(BaseModel):
    """Validated contents of a seed file."""

    scenarios: list[SeedScenario] = Field(default_factory=list)
    inventory: list[InventoryUnit] = Field(default_factory=list)


def load_seed_file(path: Path = DEFAULT_SEED_PATH) -> SeedData:
    """Load and validate a seed file.

    Args:
        path: Path to the YAML seed file.

    Returns:
        The validated seed data.  An empty file yields empty lists.

    Raises:
        SeedError: If the file is missing, is not valid YAML, or does not
            match the seed schema.
    """
    if not path.exists():
        raise SeedError(f"Seed file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SeedError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        return SeedData()

    try:
        return SeedData.model_validate(raw)
    except ValidationError as exc:
        raise SeedError(f"Invalid seed data in {path}: {exc}") from exc


def apply_seed(repository: RateDeskRepository, seed: SeedData) -> dict[str, int]:
    """Write seed data through the repository.

    Args:
        repository: The repository to write to.
        seed: Validated seed data.

    Returns:
        Counts of written scenarios, assumptions and inventory units.
    """
    counts = {"scenarios": 0, "assumptions": 0, "inventory": 0}

    for entry in seed.scenarios:
        repository.upsert_scenario(
            Scenario(id=entry.id, name=entry.name, description=entry.description)
        )
        counts["scenarios"] += 1
        if entry.assumptions is not None:
            repository.upsert_assumptions(
                ScenarioAssumptions(
                    scenario_id=entry.id,
                    baseline_midroll_cpm=entry.assumptions.baseline_midroll_cpm,
                    creator_rev_share=entry.assumptions.creator_rev_share,
                )
            )
            counts["assumptions"] += 1

    for unit in seed.inventory:
        repository.upsert_inventory_unit(unit)
        counts["inventory"] += 1

    logger.info("seed_applied", **counts)
    return counts
