"""API router package for endpoint composition."""

from .applications import api_create_applications_router
from .health import api_create_health_router

__all__ = ["api_create_applications_router", "api_create_health_router"]
