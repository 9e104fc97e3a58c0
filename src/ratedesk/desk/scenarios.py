"""Scenario resolution: named scenario, its assumptions and its multiplier.

A slug that matches no stored scenario is not an error; a default "Base"
descriptor is substituted.  Missing assumptions are also absorbed, with a
warning, by falling back to the default baseline CPM and creator share.
Datastore failures propagate unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog

from ratedesk.domain.models import Scenario, ScenarioAssumptions, ScenarioDescriptor
from ratedesk.domain.types import ScenarioSlug
from ratedesk.observability.metrics import ASSUMPTION_FALLBACKS
from ratedesk.pricing.engine import get_scenario_multiplier
from ratedesk.store.repository import RateDeskRepository

logger = structlog.get_logger()

DEFAULT_SCENARIO = Scenario(id="default", name="Base", description="Base scenario")


@dataclass(frozen=True)
class ResolvedScenario:
    """A scenario ready for pricing.

    Attributes:
        slug: The slug that was requested.
        scenario: The stored scenario, or the default descriptor.
        assumptions: The scenario's assumptions, or the defaults.
        multiplier: The scenario's CPM multiplier.
    """

    slug: str
    scenario: Scenario
    assumptions: ScenarioAssumptions
    multiplier: Decimal

    def descriptor(self) -> ScenarioDescriptor:
        """Return the scenario fields echoed back in a rate desk view."""
        return ScenarioDescriptor(
            slug=self.slug,
            name=self.scenario.name,
            description=self.scenario.description,
        )


def scenario_name_for_slug(slug: str) -> str:
    """Upper-case the first character of *slug*, leaving the rest untouched.

    ``"aggressive"`` becomes ``"Aggressive"``; ``"bASE"`` becomes ``"BASE"``.
    """
    return slug[:1].upper() + slug[1:]


def resolve_scenario(
    repository: RateDeskRepository,
    slug: str | None = ScenarioSlug.BASE,
    months: int = 1,
) -> ResolvedScenario:
    """Resolve a scenario slug to its stored definition and assumptions.

    Args:
        repository: Datastore access.
        slug: Scenario slug; empty or ``None`` means ``"base"``.
        months: Accepted for compatibility; does not affect resolution.

    Returns:
        The resolved scenario with assumptions and multiplier.

    Raises:
        DataStoreError: If either datastore lookup fails.
    """
    slug = slug or ScenarioSlug.BASE.value

    scenario = repository.find_scenario_by_name(scenario_name_for_slug(slug))
    if scenario is None:
        logger.info("scenario_not_found_using_default", slug=slug)
        scenario = DEFAULT_SCENARIO

    assumptions = repository.get_scenario_assumptions(scenario.id)
    if assumptions is None:
        logger.warning("scenario_assumptions_missing", scenario_id=scenario.id, slug=slug)
        ASSUMPTION_FALLBACKS.inc()
        assumptions = ScenarioAssumptions(scenario_id=scenario.id)

    return ResolvedScenario(
        slug=slug,
        scenario=scenario,
        assumptions=assumptions,
        multiplier=get_scenario_multiplier(slug),
    )
