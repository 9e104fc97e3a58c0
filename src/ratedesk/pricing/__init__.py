"""Pricing engine for scenario-based CPM recommendations.

Re-exports key functions and types for convenient access:
    from ratedesk.pricing import price_unit, summarize_portfolio, format_currency
"""

from ratedesk.pricing.engine import (
    SCENARIO_MULTIPLIERS,
    TYPE_MULTIPLIERS,
    calculate_recommended_cpm,
    clamp_cpm,
    classify_health,
    get_scenario_multiplier,
    get_type_multiplier,
    price_unit,
)
from ratedesk.pricing.formatting import format_compact_number, format_currency
from ratedesk.pricing.projections import (
    RevenueProjection,
    project_revenue,
    summarize_portfolio,
)

__all__ = [
    "SCENARIO_MULTIPLIERS",
    "TYPE_MULTIPLIERS",
    "RevenueProjection",
    "calculate_recommended_cpm",
    "clamp_cpm",
    "classify_health",
    "format_compact_number",
    "format_currency",
    "get_scenario_multiplier",
    "get_type_multiplier",
    "price_unit",
    "project_revenue",
    "summarize_portfolio",
]
