"""FastAPI application factory for the launcher runtime.

This module defines API application composition and ties the launcher
service lifecycle to the server lifespan.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from launcher.config import LauncherSettings
from launcher.db import DatabaseHealthPort
from launcher.service import ApplicationLauncherPort

from .routers import api_create_applications_router, api_create_health_router


def create_api_application(
    settings: LauncherSettings,
    db_health_service: DatabaseHealthPort,
    launcher_service: ApplicationLauncherPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        launcher_service: Launcher started on startup and disposed on shutdown.

    Returns:
        FastAPI: Framework application instance with launcher routes.

    Raises:
        ValueError: Raised when launcher_service is invalid.
    """

    if launcher_service is None:
        raise ValueError("launcher_service must not be None")

    @asynccontextmanager
    async def api_lifespan(_: FastAPI) -> AsyncIterator[None]:
        await launcher_service.launcher_start()
        try:
            yield
        finally:
            await launcher_service.launcher_dispose()

    application = FastAPI(title="Household Application Launcher", lifespan=api_lifespan)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Minimal response for API framework verification.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "household-app-launcher",
            "status": "foundation-ready",
            "environment": settings.environment_name,
        }

    application.include_router(
        api_create_health_router(db_health_service=db_health_service, launcher_service=launcher_service)
    )
    application.include_router(api_create_applications_router(launcher_service=launcher_service))

    return application
