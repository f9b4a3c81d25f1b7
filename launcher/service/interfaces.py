"""Typed interfaces for launcher-service responsibilities consumed by outer layers."""

from __future__ import annotations

from typing import Protocol

from launcher.domain import ApplicationLaunchConfig, ApplicationProcess, LaunchResult, UserApplication, WindowState

from .event_stream import LaunchEventStream


class ApplicationLauncherPort(Protocol):
    """Port definition for supervising launched applications."""

    @property
    def launch_events(self) -> LaunchEventStream:
        """Return the broadcast stream of launch results."""

    def launcher_is_application_running(self, application_id: str) -> bool:
        """Return whether a `running` process is registered for the identifier."""

    def launcher_get_application_process(self, application_id: str) -> ApplicationProcess | None:
        """Return the registered process for the identifier, if any."""

    def launcher_running_processes(self) -> tuple[ApplicationProcess, ...]:
        """Return a snapshot of registered processes."""

    async def launcher_start(self) -> None:
        """Start background supervision.

        Returns:
            None: Starts the health monitor as side effect.

        Raises:
            RuntimeError: Raised when the launcher was already disposed.
        """

    async def launcher_launch(
        self,
        application: UserApplication,
        config: ApplicationLaunchConfig | None = None,
    ) -> LaunchResult:
        """Launch an application or bring it to the foreground.

        Args:
            application: Catalogued application.
            config: Optional explicit launch configuration.

        Returns:
            LaunchResult: Operation outcome.

        Raises:
            RuntimeError: Raised when the launcher was already disposed.
        """

    async def launcher_stop(self, application_id: str) -> None:
        """Stop the registered process for the identifier, if any."""

    async def launcher_restart(self, application: UserApplication) -> LaunchResult:
        """Stop and relaunch an application."""

    async def launcher_report_crash(self, application_id: str, error: str | None = None) -> LaunchResult | None:
        """Record a crash reported by the hosting surface."""

    async def launcher_update_window_state(self, application_id: str, window_state: WindowState) -> bool:
        """Apply and persist window geometry for an active process."""

    async def launcher_perform_health_checks(self) -> None:
        """Run one health-check sweep immediately."""

    async def launcher_dispose(self) -> None:
        """Release every process and background resource."""
