"""Rate desk pipeline: scenario resolution, inventory loading and view assembly."""

from ratedesk.desk.inventory import filter_inventory, load_active_inventory
from ratedesk.desk.scenarios import (
    DEFAULT_SCENARIO,
    ResolvedScenario,
    resolve_scenario,
    scenario_name_for_slug,
)
from ratedesk.desk.view import RateDeskBuild, build_rate_desk, get_rate_desk_view

__all__ = [
    "DEFAULT_SCENARIO",
    "RateDeskBuild",
    "ResolvedScenario",
    "build_rate_desk",
    "filter_inventory",
    "get_rate_desk_view",
    "load_active_inventory",
    "resolve_scenario",
    "scenario_name_for_slug",
]
