"""Advertiser proposal builder.

A proposal is a list of line items picked from priced inventory.  Each item
starts at the unit's recommended CPM and expected monthly impressions; both
can be edited, and the line total is recomputed on every change.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ratedesk.domain.errors import ProposalError
from ratedesk.domain.models import (
    DEFAULT_CREATOR_REV_SHARE,
    PricedInventoryUnit,
    quantize_money,
)
from ratedesk.pricing.projections import project_revenue


@dataclass(frozen=True)
class ProposalLineItem:
    """One inventory unit in a proposal.

    Attributes:
        id: The inventory unit's ID.
        name: Display name of the unit.
        type: Inventory type.
        placement: Placement within the unit.
        cpm: Quoted CPM.
        impressions: Quoted impressions.
        total: ``impressions / 1000 * cpm``, quantized to 2 places.
    """

    id: str
    name: str
    type: str
    placement: str
    cpm: Decimal
    impressions: int
    total: Decimal


@dataclass(frozen=True)
class ProposalTotals:
    """Proposal subtotal split between the platform and creators."""

    subtotal: Decimal
    seeksy_revenue: Decimal
    creator_payouts: Decimal


def _line_total(impressions: int, cpm: Decimal) -> Decimal:
    return project_revenue(impressions, cpm).revenue_30d


def _check_quote(cpm: Decimal, impressions: int) -> None:
    if cpm < 0:
        raise ProposalError(f"cpm must not be negative, got {cpm}")
    if impressions < 0:
        raise ProposalError(f"impressions must not be negative, got {impressions}")


class Proposal:
    """An editable advertiser proposal built from priced inventory."""

    def __init__(self, creator_rev_share: Decimal = DEFAULT_CREATOR_REV_SHARE) -> None:
        """Initialize an empty proposal.

        Args:
            creator_rev_share: Fraction of the subtotal paid out to creators.
        """
        self.creator_rev_share = creator_rev_share
        self._items: list[ProposalLineItem] = []

    @property
    def items(self) -> list[ProposalLineItem]:
        """The line items in insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, unit_id: object) -> bool:
        return any(item.id == unit_id for item in self._items)

    def add_unit(
        self,
        unit: PricedInventoryUnit,
        *,
        cpm: Decimal | None = None,
        impressions: int | None = None,
    ) -> ProposalLineItem:
        """Add a priced unit, quoting its recommended CPM and monthly impressions.

        Args:
            unit: The priced inventory unit.
            cpm: Optional CPM override.
            impressions: Optional impressions override.

        Returns:
            The new line item.

        Raises:
            ProposalError: If the unit is already in the proposal or an
                override is negative.
        """
        if unit.id in self:
            raise ProposalError(f"Unit {unit.id!r} is already in the proposal")

        quoted_cpm = unit.recommended_cpm if cpm is None else cpm
        quoted_impressions = (
            unit.expected_monthly_impressions if impressions is None else impressions
        )
        _check_quote(quoted_cpm, quoted_impressions)

        item = ProposalLineItem(
            id=unit.id,
            name=unit.name,
            type=unit.type,
            placement=unit.placement,
            cpm=quoted_cpm,
            impressions=quoted_impressions,
            total=_line_total(quoted_impressions, quoted_cpm),
        )
        self._items.append(item)
        return item

    def remove_item(self, unit_id: str) -> None:
        """Remove a line item by unit ID.

        Raises:
            ProposalError: If no line item has that ID.
        """
        if unit_id not in self:
            raise ProposalError(f"Unit {unit_id!r} is not in the proposal")
        self._items = [item for item in self._items if item.id != unit_id]

    def update_item(
        self,
        unit_id: str,
        *,
        cpm: Decimal | None = None,
        impressions: int | None = None,
    ) -> ProposalLineItem:
        """Change the quoted CPM and/or impressions of a line item.

        Args:
            unit_id: The line item's unit ID.
            cpm: New CPM, or ``None`` to keep the current one.
            impressions: New impressions, or ``None`` to keep the current value.

        Returns:
            The updated line item with its total recomputed.

        Raises:
            ProposalError: If the item does not exist or a value is negative.
        """
        for index, item in enumerate(self._items):
            if item.id != unit_id:
                continue
            new_cpm = item.cpm if cpm is None else cpm
            new_impressions = item.impressions if impressions is None else impressions
            _check_quote(new_cpm, new_impressions)
            updated = ProposalLineItem(
                id=item.id,
                name=item.name,
                type=item.type,
                placement=item.placement,
                cpm=new_cpm,
                impressions=new_impressions,
                total=_line_total(new_impressions, new_cpm),
            )
            self._items[index] = updated
            return updated
        raise ProposalError(f"Unit {unit_id!r} is not in the proposal")

    def totals(self) -> ProposalTotals:
        """Sum line totals and split them by the creator revenue share."""
        subtotal = sum((item.total for item in self._items), Decimal("0"))
        return ProposalTotals(
            subtotal=quantize_money(subtotal),
            seeksy_revenue=quantize_money(subtotal * (Decimal("1") - self.creator_rev_share)),
            creator_payouts=quantize_money(subtotal * self.creator_rev_share),
        )
