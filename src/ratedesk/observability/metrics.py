"""Prometheus metrics for the rate desk service.

HTTP request count and latency come from prometheus-fastapi-instrumentator;
the counters below track how the rate desk itself is used.
"""

from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

# Probe and scrape traffic would drown out real requests
UNINSTRUMENTED_PATHS = ["/health", "/ready", "/metrics"]

RATE_DESK_VIEWS: Counter = Counter(
    "rate_desk_views_total",
    "Rate desk views priced, by requested scenario",
    ["scenario"],
)

ASSUMPTION_FALLBACKS: Counter = Counter(
    "rate_desk_assumption_fallbacks_total",
    "Scenarios priced with default assumptions because none were stored",
)


def setup_metrics(app: FastAPI) -> None:
    """Record HTTP metrics for *app* and serve them at ``/metrics``."""
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=UNINSTRUMENTED_PATHS,
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, include_in_schema=False, should_gzip=True)
