"""Per-unit CPM pricing for the rate desk.

All monetary calculations use Decimal arithmetic to avoid floating-point errors.
Prices are quantized to two decimal places with ROUND_HALF_UP rounding.
"""

from decimal import Decimal

from ratedesk.domain.models import InventoryUnit, PricedInventoryUnit, quantize_money
from ratedesk.domain.types import HealthStatus, InventoryType, ScenarioSlug
from ratedesk.pricing.projections import project_revenue

NEUTRAL_MULTIPLIER = Decimal("1.0")

TYPE_MULTIPLIERS: dict[str, Decimal] = {
    InventoryType.PODCAST: Decimal("1.0"),
    InventoryType.LIVESTREAM: Decimal("1.2"),
    InventoryType.EVENT: Decimal("1.4"),
    InventoryType.CREATOR_PAGE: Decimal("0.8"),
    InventoryType.NEWSLETTER: Decimal("0.9"),
    InventoryType.OTHER: Decimal("1.0"),
}

SCENARIO_MULTIPLIERS: dict[str, Decimal] = {
    ScenarioSlug.CONSERVATIVE: Decimal("0.85"),
    ScenarioSlug.BASE: Decimal("1.0"),
    ScenarioSlug.AGGRESSIVE: Decimal("1.15"),
}

# Health bands relative to target CPM (strict on both sides)
UNDERPRICED_RATIO = Decimal("0.9")
PREMIUM_RATIO = Decimal("1.2")


def get_type_multiplier(inventory_type: str) -> Decimal:
    """Look up the CPM multiplier for an inventory type.

    Args:
        inventory_type: The unit's type string.

    Returns:
        The type's multiplier, or 1.0 for types outside the known set.
    """
    return TYPE_MULTIPLIERS.get(inventory_type, NEUTRAL_MULTIPLIER)


def get_scenario_multiplier(slug: str) -> Decimal:
    """Look up the CPM multiplier for a scenario slug, defaulting to 1.0."""
    return SCENARIO_MULTIPLIERS.get(slug, NEUTRAL_MULTIPLIER)


def clamp_cpm(value: Decimal, floor: Decimal, ceiling: Decimal) -> Decimal:
    """Clamp *value* into ``[floor, ceiling]``.

    Evaluated as ``max(floor, min(ceiling, value))``, so when floor exceeds
    ceiling the floor wins.
    """
    return max(floor, min(ceiling, value))


def classify_health(recommended_cpm: Decimal, target_cpm: Decimal) -> HealthStatus:
    """Classify a recommended CPM against the unit's target.

    Boundary logic (strict inequalities, boundaries are Healthy):
    1. recommended < target * 0.9: UNDERPRICED
    2. recommended > target * 1.2: PREMIUM
    3. Otherwise: HEALTHY

    Args:
        recommended_cpm: The rounded recommended CPM.
        target_cpm: The unit's target CPM.

    Returns:
        The health classification.
    """
    if recommended_cpm < target_cpm * UNDERPRICED_RATIO:
        return HealthStatus.UNDERPRICED
    if recommended_cpm > target_cpm * PREMIUM_RATIO:
        return HealthStatus.PREMIUM
    return HealthStatus.HEALTHY


def calculate_recommended_cpm(unit: InventoryUnit, scenario_multiplier: Decimal) -> Decimal:
    """Calculate the recommended CPM for a unit under a scenario.

    Formula: clamp(target * type multiplier * scenario multiplier * seasonality,
    floor, ceiling), quantized to 2 decimal places.

    Args:
        unit: The inventory unit to price.
        scenario_multiplier: Multiplier of the active scenario.

    Returns:
        The recommended CPM as a Decimal with exactly 2 decimal places.
    """
    raw = (
        unit.target_cpm
        * get_type_multiplier(unit.type)
        * scenario_multiplier
        * unit.seasonality_factor
    )
    return quantize_money(clamp_cpm(raw, unit.floor_cpm, unit.ceiling_cpm))


def price_unit(unit: InventoryUnit, scenario_multiplier: Decimal) -> PricedInventoryUnit:
    """Price a single inventory unit and project its revenue.

    The adjusted floor and ceiling scale with the scenario multiplier only;
    the type multiplier and seasonality apply to the recommended CPM alone.

    Args:
        unit: The inventory unit to price.
        scenario_multiplier: Multiplier of the active scenario.

    Returns:
        A PricedInventoryUnit carrying the unit's fields plus computed pricing.
    """
    recommended = calculate_recommended_cpm(unit, scenario_multiplier)
    projection = project_revenue(unit.expected_monthly_impressions, recommended)

    return PricedInventoryUnit(
        **unit.model_dump(),
        recommended_cpm=recommended,
        adjusted_floor_cpm=quantize_money(unit.floor_cpm * scenario_multiplier),
        adjusted_ceiling_cpm=quantize_money(unit.ceiling_cpm * scenario_multiplier),
        potential_revenue_30d=projection.revenue_30d,
        potential_revenue_90d=projection.revenue_90d,
        potential_revenue_12m=projection.revenue_12m,
        health_status=classify_health(recommended, unit.target_cpm),
    )
