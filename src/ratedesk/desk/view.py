"""Rate desk view assembly.

Runs the pipeline in order: resolve scenario, load inventory, price each unit,
then aggregate the portfolio summary.  Every call recomputes from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from ratedesk.desk.inventory import load_active_inventory
from ratedesk.desk.scenarios import ResolvedScenario, resolve_scenario
from ratedesk.domain.models import RateDeskOptions, RateDeskView
from ratedesk.domain.types import ScenarioSlug
from ratedesk.observability.metrics import RATE_DESK_VIEWS
from ratedesk.pricing.engine import price_unit
from ratedesk.pricing.projections import summarize_portfolio
from ratedesk.store.repository import RateDeskRepository

logger = structlog.get_logger()


@dataclass(frozen=True)
class RateDeskBuild:
    """A built view together with the scenario it was priced under."""

    resolved: ResolvedScenario
    view: RateDeskView


def build_rate_desk(
    repository: RateDeskRepository,
    options: RateDeskOptions | None = None,
) -> RateDeskBuild:
    """Resolve, load, price and aggregate, keeping the resolved scenario.

    Args:
        repository: Datastore access.
        options: Scenario slug and month count; defaults to the base scenario.

    Returns:
        The resolved scenario and the composed view.

    Raises:
        DataStoreError: If any datastore read fails.  No partial view is
            returned.
    """
    if options is None:
        options = RateDeskOptions()

    resolved = resolve_scenario(repository, options.scenario_slug, options.months)
    units = load_active_inventory(repository)

    priced = [price_unit(unit, resolved.multiplier) for unit in units]
    summary = summarize_portfolio(priced, resolved.assumptions.creator_rev_share)

    # Bounded label set: unknown slugs share one series
    label = resolved.slug if resolved.slug in set(ScenarioSlug) else "other"
    RATE_DESK_VIEWS.labels(scenario=label).inc()
    logger.info(
        "rate_desk_view_built",
        scenario=resolved.slug,
        units=len(priced),
        gross_spend_30d=str(summary.potential_gross_spend_30d),
    )

    view = RateDeskView(
        scenario=resolved.descriptor(),
        summary=summary,
        inventory=priced,
    )
    return RateDeskBuild(resolved=resolved, view=view)


def get_rate_desk_view(
    repository: RateDeskRepository,
    options: RateDeskOptions | None = None,
) -> RateDeskView:
    """Build the rate desk view for a scenario.

    Args:
        repository: Datastore access.
        options: Scenario slug and month count; defaults to the base scenario.

    Returns:
        The scenario descriptor, portfolio summary and priced inventory.

    Raises:
        DataStoreError: If any datastore read fails.
    """
    return build_rate_desk(repository, options).view
