"""Domain enumerations for the rate desk."""

from enum import StrEnum


class InventoryType(StrEnum):
    """Kinds of sellable ad inventory."""

    PODCAST = "podcast"
    LIVESTREAM = "livestream"
    EVENT = "event"
    CREATOR_PAGE = "creator_page"
    NEWSLETTER = "newsletter"
    OTHER = "other"


class ScenarioSlug(StrEnum):
    """Planning scenarios offered on the rate desk."""

    CONSERVATIVE = "conservative"
    BASE = "base"
    AGGRESSIVE = "aggressive"


class HealthStatus(StrEnum):
    """Recommended price relative to the unit's target price."""

    UNDERPRICED = "Underpriced"
    HEALTHY = "Healthy"
    PREMIUM = "Premium"


class TimeWindow(StrEnum):
    """Projection horizons shown on the rate desk."""

    DAYS_30 = "30d"
    DAYS_90 = "90d"
    MONTHS_12 = "12m"
