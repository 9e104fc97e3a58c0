"""Pydantic v2 models for rate desk records and views."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)

from ratedesk.domain.types import HealthStatus, TimeWindow

# Precision: all monetary values quantized to 2 decimal places
TWO_PLACES = Decimal("0.01")

DEFAULT_BASELINE_MIDROLL_CPM = Decimal("25.0")
DEFAULT_CREATOR_REV_SHARE = Decimal("0.7")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary value to 2 decimal places, half-up."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _to_decimal(v: object) -> object:
    """Convert floats via ``str()`` so ``0.7`` becomes ``Decimal("0.7")``."""
    if isinstance(v, float):
        return Decimal(str(v))
    return v


# Decimal in Python, plain number in JSON output
Amount = Annotated[
    Decimal,
    BeforeValidator(_to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Scenario(BaseModel):
    """A named set of pricing assumptions (conservative / base / aggressive)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""


class ScenarioAssumptions(BaseModel):
    """Financial assumptions attached to a scenario."""

    model_config = ConfigDict(frozen=True)

    scenario_id: str
    baseline_midroll_cpm: Amount = DEFAULT_BASELINE_MIDROLL_CPM
    creator_rev_share: Amount = DEFAULT_CREATOR_REV_SHARE

    @field_validator("creator_rev_share")
    @classmethod
    def share_must_be_fraction(cls, v: Decimal) -> Decimal:
        """Ensure the creator share is within [0, 1]."""
        if not Decimal("0") <= v <= Decimal("1"):
            raise ValueError(f"creator_rev_share must be between 0 and 1, got {v}")
        return v

    @property
    def platform_rev_share(self) -> Decimal:
        """The fraction of gross spend the platform keeps."""
        return Decimal("1") - self.creator_rev_share


class InventoryUnit(BaseModel):
    """A sellable ad placement as stored in the datastore.

    ``type`` is kept as a plain string: unknown types are priced with the
    neutral multiplier rather than rejected.  Floor above ceiling is allowed
    and resolved floor-first by the pricing clamp.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str
    type: str
    placement: str = ""
    target_cpm: Amount
    floor_cpm: Amount
    ceiling_cpm: Amount
    expected_monthly_impressions: int = Field(ge=0)
    seasonality_factor: Amount = Decimal("1.0")
    is_active: bool = True


class PricedInventoryUnit(InventoryUnit):
    """An inventory unit with its computed pricing and projections."""

    recommended_cpm: Amount
    adjusted_floor_cpm: Amount
    adjusted_ceiling_cpm: Amount
    potential_revenue_30d: Amount
    potential_revenue_90d: Amount
    potential_revenue_12m: Amount
    health_status: HealthStatus

    def revenue_for_window(self, window: TimeWindow) -> Decimal:
        """Return the projected revenue for a time window."""
        if window == TimeWindow.DAYS_90:
            return self.potential_revenue_90d
        if window == TimeWindow.MONTHS_12:
            return self.potential_revenue_12m
        return self.potential_revenue_30d


class WindowTotals(BaseModel):
    """Portfolio totals for a single time window."""

    model_config = ConfigDict(frozen=True)

    window: TimeWindow
    sellable_impressions: int
    potential_gross_spend: Amount
    seeksy_revenue: Amount


class PortfolioSummary(BaseModel):
    """Totals across every priced unit in the view."""

    model_config = ConfigDict(frozen=True)

    total_sellable_impressions_30d: int = 0
    total_sellable_impressions_90d: int = 0
    total_sellable_impressions_12m: int = 0
    potential_gross_spend_30d: Amount = Decimal("0.00")
    potential_gross_spend_90d: Amount = Decimal("0.00")
    potential_gross_spend_12m: Amount = Decimal("0.00")
    seeksy_revenue_30d: Amount = Decimal("0.00")
    seeksy_revenue_90d: Amount = Decimal("0.00")
    seeksy_revenue_12m: Amount = Decimal("0.00")
    average_recommended_cpm: Amount = Decimal("0.00")

    def for_window(self, window: TimeWindow) -> WindowTotals:
        """Select the impressions, spend and revenue totals for *window*."""
        suffix = window.value
        return WindowTotals(
            window=window,
            sellable_impressions=getattr(self, f"total_sellable_impressions_{suffix}"),
            potential_gross_spend=getattr(self, f"potential_gross_spend_{suffix}"),
            seeksy_revenue=getattr(self, f"seeksy_revenue_{suffix}"),
        )


class ScenarioDescriptor(BaseModel):
    """The scenario fields echoed back in a rate desk view."""

    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    description: str


class RateDeskOptions(BaseModel):
    """Options accepted by the rate desk entry point.

    ``months`` is accepted for compatibility but does not change any
    computed value.
    """

    model_config = ConfigDict(frozen=True)

    scenario_slug: str = "base"
    months: int = 1


class RateDeskView(BaseModel):
    """The composed rate desk response."""

    model_config = ConfigDict(frozen=True)

    scenario: ScenarioDescriptor
    summary: PortfolioSummary
    inventory: list[PricedInventoryUnit]
