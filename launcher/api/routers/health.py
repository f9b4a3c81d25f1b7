"""Health endpoint router composition for app, database and launcher checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from launcher.db import DatabaseHealthPort
from launcher.service import ApplicationLauncherPort


def api_create_health_router(
    db_health_service: DatabaseHealthPort,
    launcher_service: ApplicationLauncherPort | None = None,
) -> APIRouter:
    """Create health-check router with app, database and supervision status.

    Args:
        db_health_service: DB-layer health service interface.
        launcher_service: Optional launcher whose registry counts are reported.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application, database and launcher health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            ConnectionError: Raised when database health check fails.
        """

        launcher_payload = api_health_launcher_summary(launcher_service)
        try:
            db_health = db_health_service.db_check_health()
            payload = {
                "status": "ok",
                "app": "up",
                "database": db_health.status,
                "detail": db_health.detail,
                "target": db_health_service.db_connection_label(),
                "launcher": launcher_payload,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except ConnectionError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "database": "down",
                "detail": str(error),
                "target": db_health_service.db_connection_label(),
                "launcher": launcher_payload,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router


def api_health_launcher_summary(launcher_service: ApplicationLauncherPort | None) -> dict[str, int] | None:
    """Summarize registry counts for the health payload."""

    if launcher_service is None:
        return None
    processes = launcher_service.launcher_running_processes()
    return {
        "registered": len(processes),
        "running": sum(1 for process in processes if process.is_running),
        "unhealthy": sum(1 for process in processes if not process.is_healthy),
    }
