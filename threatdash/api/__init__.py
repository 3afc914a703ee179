"""FastAPI route modules."""

from threatdash.api import composer, health, reports, routes

__all__ = ["composer", "health", "reports", "routes"]
