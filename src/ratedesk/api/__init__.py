"""HTTP API for the rate desk."""

from ratedesk.api.routes import router

__all__ = ["router"]
