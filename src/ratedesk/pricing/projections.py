"""Revenue projections and portfolio aggregation.

The 90-day and 12-month figures are straight multiples of the 30-day figure;
no seasonality beyond the unit's own factor is modelled.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ratedesk.domain.models import PortfolioSummary, PricedInventoryUnit, quantize_money

QUARTER_MONTHS = 3
YEAR_MONTHS = 12


@dataclass(frozen=True)
class RevenueProjection:
    """Projected revenue for one unit at each horizon.

    Attributes:
        revenue_30d: Revenue over the next 30 days.
        revenue_90d: Three times the 30-day figure.
        revenue_12m: Twelve times the 30-day figure.
    """

    revenue_30d: Decimal
    revenue_90d: Decimal
    revenue_12m: Decimal


def project_revenue(expected_monthly_impressions: int, recommended_cpm: Decimal) -> RevenueProjection:
    """Project a unit's revenue from its monthly impressions and CPM.

    Formula: (impressions / 1000) * cpm for 30 days, then x3 and x12.

    Args:
        expected_monthly_impressions: Impressions the unit sells per month.
        recommended_cpm: The unit's recommended CPM.

    Returns:
        RevenueProjection with all three horizons quantized to 2 places.
    """
    impressions_in_thousands = Decimal(expected_monthly_impressions) / Decimal("1000")
    revenue_30d = quantize_money(impressions_in_thousands * recommended_cpm)
    return RevenueProjection(
        revenue_30d=revenue_30d,
        revenue_90d=quantize_money(revenue_30d * QUARTER_MONTHS),
        revenue_12m=quantize_money(revenue_30d * YEAR_MONTHS),
    )


def summarize_portfolio(
    units: Sequence[PricedInventoryUnit],
    creator_rev_share: Decimal,
) -> PortfolioSummary:
    """Aggregate priced units into a portfolio summary.

    The platform's revenue is the gross spend times ``1 - creator_rev_share``,
    using the single scenario-level share for every unit.  The average
    recommended CPM is an unweighted mean over units, 0 for an empty
    portfolio.

    Args:
        units: The priced inventory units.
        creator_rev_share: Fraction of gross spend paid out to creators.

    Returns:
        PortfolioSummary with money totals quantized to 2 places.
    """
    if not units:
        return PortfolioSummary()

    monthly_impressions = sum(u.expected_monthly_impressions for u in units)
    gross_30d = sum((u.potential_revenue_30d for u in units), Decimal("0"))
    gross_90d = sum((u.potential_revenue_90d for u in units), Decimal("0"))
    gross_12m = sum((u.potential_revenue_12m for u in units), Decimal("0"))
    total_cpm = sum((u.recommended_cpm for u in units), Decimal("0"))

    platform_share = Decimal("1") - creator_rev_share

    return PortfolioSummary(
        total_sellable_impressions_30d=monthly_impressions,
        total_sellable_impressions_90d=monthly_impressions * QUARTER_MONTHS,
        total_sellable_impressions_12m=monthly_impressions * YEAR_MONTHS,
        potential_gross_spend_30d=quantize_money(gross_30d),
        potential_gross_spend_90d=quantize_money(gross_90d),
        potential_gross_spend_12m=quantize_money(gross_12m),
        seeksy_revenue_30d=quantize_money(gross_30d * platform_share),
        seeksy_revenue_90d=quantize_money(gross_90d * platform_share),
        seeksy_revenue_12m=quantize_money(gross_12m * platform_share),
        average_recommended_cpm=quantize_money(total_cpm / len(units)),
    )
