"""Inventory loading and filtering for the rate desk."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from ratedesk.domain.models import InventoryUnit
from ratedesk.store.repository import RateDeskRepository

ALL_TYPES = "all"

U = TypeVar("U", bound=InventoryUnit)


def load_active_inventory(repository: RateDeskRepository) -> list[InventoryUnit]:
    """Fetch every active inventory unit, ordered by type.

    The same inventory is priced under every scenario.  An empty list is a
    valid result.

    Raises:
        DataStoreError: If the datastore read fails.
    """
    return repository.list_active_inventory()


def filter_inventory(units: Sequence[U], inventory_type: str | None = None) -> list[U]:
    """Keep only units of *inventory_type*; ``None`` or ``"all"`` keeps everything."""
    if not inventory_type or inventory_type == ALL_TYPES:
        return list(units)
    return [unit for unit in units if unit.type == inventory_type]
