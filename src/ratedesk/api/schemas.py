"""Request and response bodies for the rate desk HTTP API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ratedesk.domain.models import Amount, RateDeskView, ScenarioDescriptor, WindowTotals
from ratedesk.proposals.builder import Proposal


class RateDeskResponse(RateDeskView):
    """A rate desk view plus the totals for the requested window."""

    window_totals: WindowTotals


class ProposalItemRequest(BaseModel):
    """One requested proposal line; omitted values use the unit's pricing."""

    unit_id: str
    cpm: Amount | None = None
    impressions: int | None = None


class ProposalRequest(BaseModel):
    """A proposal to price under a scenario."""

    scenario: str = "base"
    items: list[ProposalItemRequest] = Field(min_length=1)


class ProposalLineItemBody(BaseModel):
    id: str
    name: str
    type: str
    placement: str
    cpm: Amount
    impressions: int
    total: Amount


class ProposalTotalsBody(BaseModel):
    subtotal: Amount
    seeksy_revenue: Amount
    creator_payouts: Amount


class ProposalResponse(BaseModel):
    """Priced proposal line items and totals."""

    scenario: ScenarioDescriptor
    items: list[ProposalLineItemBody]
    totals: ProposalTotalsBody

    @classmethod
    def from_proposal(cls, scenario: ScenarioDescriptor, proposal: Proposal) -> ProposalResponse:
        """Build the response body from a built proposal."""
        totals = proposal.totals()
        return cls(
            scenario=scenario,
            items=[
                ProposalLineItemBody(
                    id=item.id,
                    name=item.name,
                    type=item.type,
                    placement=item.placement,
                    cpm=item.cpm,
                    impressions=item.impressions,
                    total=item.total,
                )
                for item in proposal.items
            ],
            totals=ProposalTotalsBody(
                subtotal=totals.subtotal,
                seeksy_revenue=totals.seeksy_revenue,
                creator_payouts=totals.creator_payouts,
            ),
        )


ProposalFormat = Literal["json", "csv", "text"]
