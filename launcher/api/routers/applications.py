"""Application supervision API router for launch, stop and window-state endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from launcher.domain import (
    ApplicationLaunchConfig,
    ApplicationStatus,
    ApplicationType,
    LaunchResult,
    UserApplication,
    WindowState,
    domain_utc_now,
)
from launcher.service import ApplicationLauncherPort, LaunchErrorCode, LauncherDisposedError


class ApplicationPayload(BaseModel):
    """Catalogued application supplied by the caller."""

    application_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    status: ApplicationStatus
    url: str | None = None
    description: str = ""

    def api_to_domain(self) -> UserApplication:
        return UserApplication(
            application_id=self.application_id,
            title=self.title,
            status=self.status,
            url=self.url,
            description=self.description,
        )


class LaunchConfigPayload(BaseModel):
    """Explicit launch configuration overriding the application address."""

    application_type: ApplicationType = ApplicationType.WEB
    url: str = Field(min_length=1)
    window_title: str
    initial_width: int = Field(default=1200, gt=0)
    initial_height: int = Field(default=800, gt=0)
    resizable: bool = True
    show_navigation_controls: bool = True
    enable_javascript: bool = True
    enable_local_storage: bool = True

    def api_to_domain(self) -> ApplicationLaunchConfig:
        return ApplicationLaunchConfig(**self.model_dump())


class LaunchRequestPayload(BaseModel):
    application: ApplicationPayload
    config: LaunchConfigPayload | None = None


class WindowStatePayload(BaseModel):
    """Window geometry reported by the hosting surface."""

    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    is_maximized: bool = False
    is_minimized: bool = False
    is_fullscreen: bool = False
    last_updated_utc: datetime | None = None

    def api_to_domain(self) -> WindowState:
        last_updated_utc = self.last_updated_utc or domain_utc_now()
        if last_updated_utc.tzinfo is None:
            last_updated_utc = last_updated_utc.replace(tzinfo=timezone.utc)
        return WindowState(
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            last_updated_utc=last_updated_utc,
            is_maximized=self.is_maximized,
            is_minimized=self.is_minimized,
            is_fullscreen=self.is_fullscreen,
        )


class CrashReportPayload(BaseModel):
    error: str | None = None


def api_create_applications_router(launcher_service: ApplicationLauncherPort) -> APIRouter:
    """Create router exposing launcher operations.

    Args:
        launcher_service: Service-layer launcher interface.

    Returns:
        APIRouter: Router exposing `/applications` APIs.

    Raises:
        ValueError: Raised when launcher_service is invalid.
    """

    if launcher_service is None:
        raise ValueError("launcher_service must not be None")

    router = APIRouter(prefix="/applications", tags=["applications"])

    @router.get("/processes")
    def api_application_process_list() -> JSONResponse:
        """Return every registered process.

        Returns:
            JSONResponse: Process list payload.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        processes = launcher_service.launcher_running_processes()
        payload = {
            "items": [process.process_to_dict() for process in processes],
            "returned": len(processes),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/processes/{application_id}")
    def api_application_process_detail(application_id: str) -> JSONResponse:
        process = launcher_service.launcher_get_application_process(application_id)
        if process is None:
            return api_error_response(status.HTTP_404_NOT_FOUND, "application process not found")
        return JSONResponse(content=process.process_to_dict(), status_code=status.HTTP_200_OK)

    @router.post("/launch")
    async def api_application_launch(request: LaunchRequestPayload) -> JSONResponse:
        """Launch an application or bring it to the foreground.

        Args:
            request: Application and optional launch configuration.

        Returns:
            JSONResponse: Launch result with a status code derived from its outcome.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        try:
            launch_result = await launcher_service.launcher_launch(
                request.application.api_to_domain(),
                None if request.config is None else request.config.api_to_domain(),
            )
        except LauncherDisposedError:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "launcher is shutting down")
        return api_launch_result_response(launch_result)

    @router.post("/restart")
    async def api_application_restart(application: ApplicationPayload) -> JSONResponse:
        try:
            launch_result = await launcher_service.launcher_restart(application.api_to_domain())
        except LauncherDisposedError:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "launcher is shutting down")
        return api_launch_result_response(launch_result)

    @router.post("/{application_id}/stop")
    async def api_application_stop(application_id: str) -> JSONResponse:
        """Stop a running application; stopping an absent one is not an error.

        Args:
            application_id: Application identifier.

        Returns:
            JSONResponse: Stop acknowledgement.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        was_registered = launcher_service.launcher_get_application_process(application_id) is not None
        try:
            await launcher_service.launcher_stop(application_id)
        except LauncherDisposedError:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "launcher is shutting down")
        payload = {
            "application_id": application_id,
            "status": "stopped" if was_registered else "not_running",
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/{application_id}/crash")
    async def api_application_report_crash(application_id: str, report: CrashReportPayload) -> JSONResponse:
        try:
            launch_result = await launcher_service.launcher_report_crash(application_id, report.error)
        except LauncherDisposedError:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "launcher is shutting down")
        if launch_result is None:
            return api_error_response(status.HTTP_404_NOT_FOUND, "application process not found")
        return JSONResponse(content=launch_result.launch_result_to_dict(), status_code=status.HTTP_200_OK)

    @router.put("/{application_id}/window-state")
    async def api_application_update_window_state(
        application_id: str,
        window_state: WindowStatePayload,
    ) -> JSONResponse:
        """Apply window geometry reported for a running application.

        Args:
            application_id: Application identifier.
            window_state: Reported geometry.

        Returns:
            JSONResponse: Applied state or 404 when no active process exists.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        domain_window_state = window_state.api_to_domain()
        try:
            applied = await launcher_service.launcher_update_window_state(application_id, domain_window_state)
        except LauncherDisposedError:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "launcher is shutting down")
        if not applied:
            return api_error_response(status.HTTP_404_NOT_FOUND, "application process not found")
        payload = {
            "application_id": application_id,
            "window_state": domain_window_state.window_state_to_dict(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/health-checks")
    async def api_application_health_checks() -> JSONResponse:
        try:
            await launcher_service.launcher_perform_health_checks()
        except LauncherDisposedError:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "launcher is shutting down")
        processes = launcher_service.launcher_running_processes()
        payload = {
            "items": [process.process_to_dict() for process in processes],
            "returned": len(processes),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_launch_result_response(launch_result: LaunchResult) -> JSONResponse:
    """Map a launch result onto an HTTP response.

    Args:
        launch_result: Operation outcome.

    Returns:
        JSONResponse: 200 on success, 409 for invalid state, 502 for other failures.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if launch_result.success:
        status_code = status.HTTP_200_OK
    elif launch_result.error_code == LaunchErrorCode.INVALID_STATE.value:
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return JSONResponse(content=launch_result.launch_result_to_dict(), status_code=status_code)


def api_error_response(status_code: int, message: str) -> JSONResponse:
    payload = {
        "status": "error",
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)
