"""Tests for YAML seed loading and application."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from ratedesk.domain.errors import SeedError
from ratedesk.store.repository import RateDeskRepository
from ratedesk.store.seed import DEFAULT_SEED_PATH, SeedData, apply_seed, load_seed_file

VALID_SEED = """\
scenarios:
  - id: scn-base
    name: Base
    description: Base scenario
    assumptions:
      baseline_midroll_cpm: 25.0
      creator_rev_share: 0.7
  - id: scn-aggressive
    name: Aggressive
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
  - id: inv-002
    name: Retired Banner
    slug: retired-banner
    type: creator_page
    target_cpm: 10
    floor_cpm: 5
    ceiling_cpm: 12
    expected_monthly_impressions: 5000
    is_active: false
"""


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "seed.yaml"
    path.write_text(VALID_SEED, encoding="utf-8")
    return path


class TestLoadSeedFile:
    def test_valid_file(self, seed_file: Path):
        seed = load_seed_file(seed_file)

        assert [s.id for s in seed.scenarios] == ["scn-base", "scn-aggressive"]
        assert seed.scenarios[0].assumptions is not None
        assert seed.scenarios[0].assumptions.creator_rev_share == Decimal("0.7")
        assert seed.scenarios[1].assumptions is None
        assert seed.scenarios[1].description == ""
        assert len(seed.inventory) == 2
        assert seed.inventory[0].target_cpm == Decimal("20")
        assert seed.inventory[1].is_active is False

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SeedError, match="not found"):
            load_seed_file(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("scenarios: [unclosed\n", encoding="utf-8")

        with pytest.raises(SeedError, match="Invalid YAML"):
            load_seed_file(path)

    def test_share_out_of_range(self, tmp_path: Path):
        path = tmp_path / "share.yaml"
        path.write_text(
            "scenarios:\n"
            "  - id: scn-x\n"
            "    name: Base\n"
            "    assumptions:\n"
            "      creator_rev_share: 1.5\n",
            encoding="utf-8",
        )

        with pytest.raises(SeedError, match="Invalid seed data"):
            load_seed_file(path)

    def test_unit_missing_required_field(self, tmp_path: Path):
        path = tmp_path / "unit.yaml"
        path.write_text(
            "inventory:\n  - id: inv-x\n    name: No Prices\n    slug: no-prices\n    type: event\n",
            encoding="utf-8",
        )

        with pytest.raises(SeedError):
            load_seed_file(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_seed_file(path) == SeedData()

    def test_bundled_seed_loads(self):
        seed = load_seed_file(DEFAULT_SEED_PATH)

        assert {s.name for s in seed.scenarios} == {"Conservative", "Base", "Aggressive"}
        assert seed.inventory


class TestApplySeed:
    def test_counts_and_persistence(self, repository: RateDeskRepository, seed_file: Path):
        counts = apply_seed(repository, load_seed_file(seed_file))

        assert counts == {"scenarios": 2, "assumptions": 1, "inventory": 2}
        base = repository.find_scenario_by_name("Base")
        assert base is not None
        assert repository.get_scenario_assumptions(base.id) is not None
        assert repository.get_scenario_assumptions("scn-aggressive") is None
        assert [u.id for u in repository.list_active_inventory()] == ["inv-001"]

    def test_reapplying_is_idempotent(self, repository: RateDeskRepository, seed_file: Path):
        seed = load_seed_file(seed_file)
        apply_seed(repository, seed)
        apply_seed(repository, seed)

        assert len(repository.list_active_inventory()) == 1

    def test_empty_seed(self, repository: RateDeskRepository):
        assert apply_seed(repository, SeedData()) == {
            "scenarios": 0,
            "assumptions": 0,
            "inventory": 0,
        }
