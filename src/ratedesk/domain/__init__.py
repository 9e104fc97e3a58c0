"""Domain types, models, and errors for the rate desk."""

from ratedesk.domain.errors import (
    DataStoreError,
    ProposalError,
    RateDeskError,
    RecordValidationError,
    SeedError,
)
from ratedesk.domain.models import (
    InventoryUnit,
    PortfolioSummary,
    PricedInventoryUnit,
    RateDeskOptions,
    RateDeskView,
    Scenario,
    ScenarioAssumptions,
    ScenarioDescriptor,
    WindowTotals,
)
from ratedesk.domain.types import HealthStatus, InventoryType, ScenarioSlug, TimeWindow

__all__ = [
    "DataStoreError",
    "HealthStatus",
    "InventoryType",
    "InventoryUnit",
    "PortfolioSummary",
    "PricedInventoryUnit",
    "ProposalError",
    "RateDeskError",
    "RateDeskOptions",
    "RateDeskView",
    "RecordValidationError",
    "Scenario",
    "ScenarioAssumptions",
    "ScenarioDescriptor",
    "ScenarioSlug",
    "SeedError",
    "TimeWindow",
    "WindowTotals",
]
