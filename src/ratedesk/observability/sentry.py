"""Optional Sentry error reporting for the rate desk.

Sentry is enabled only when a DSN is configured.  Errors reach Sentry through
structlog (``get_sentry_processor``) rather than the stdlib logging bridge,
so a failed datastore read logged as ``datastore_read_failed`` becomes one
Sentry event carrying the structlog context (request ID, scenario, ...).
"""

from __future__ import annotations

import logging

import sentry_sdk
import structlog
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog_sentry import SentryProcessor

from ratedesk.observability.middleware import SERVICE_NAME

TRACES_SAMPLE_RATE = 0.1


def init_sentry(dsn: str, *, environment: str = "development") -> bool:
    """Start the Sentry SDK if *dsn* is set.

    Args:
        dsn: Sentry DSN; an empty string leaves Sentry disabled.
        environment: Reported as the event environment.

    Returns:
        Whether Sentry was started.
    """
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=TRACES_SAMPLE_RATE,
        send_default_pii=False,
        # Events come from the structlog processor only
        integrations=[LoggingIntegration(level=None, event_level=None)],
    )
    sentry_sdk.set_tag("service", SERVICE_NAME)
    return True


def get_sentry_processor() -> structlog.types.Processor:
    """Build the structlog processor that sends ERROR events to Sentry.

    It must run after ``add_log_level`` and before the renderer.
    """
    return SentryProcessor(event_level=logging.ERROR)
