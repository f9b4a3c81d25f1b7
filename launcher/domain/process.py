"""Runtime record and state machine for one supervised application instance."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable

from .launch_config import ApplicationLaunchConfig
from .timeline import domain_utc_now
from .window_state import WindowState


class ProcessStatus(str, Enum):
    """Lifecycle status of a supervised application process."""

    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"
    CRASHED = "crashed"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def is_active(self) -> bool:
        return self in (ProcessStatus.STARTING, ProcessStatus.RUNNING)

    @property
    def is_terminated(self) -> bool:
        return self in (ProcessStatus.STOPPED, ProcessStatus.CRASHED)


class ProcessStateTransitionError(RuntimeError):
    """Raised when code requests a transition the state machine does not allow."""


class ApplicationProcess:
    """Mutable runtime record owned by the launcher service.

    Transitions: `starting -> running`, active -> `stopped`, active -> `crashed`.
    Terminal states are sticky; repeating a terminal transition is a no-op.
    """

    def __init__(
        self,
        application_id: str,
        application_title: str,
        launch_config: ApplicationLaunchConfig,
        launched_at_utc: datetime,
        window_state: WindowState | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize a process record in `starting` state.

        Args:
            application_id: Unique application identifier.
            application_title: Human-readable title for diagnostics.
            launch_config: Immutable configuration used to create the process.
            launched_at_utc: Creation timestamp.
            window_state: Optional restored window geometry.
            clock: Optional UTC clock used for lifecycle timestamps.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when application_id is blank.
        """

        if not application_id.strip():
            raise ValueError("application_id must not be blank")

        self._application_id = application_id
        self._application_title = application_title
        self._launch_config = launch_config
        self._launched_at_utc = launched_at_utc
        self._clock = clock or domain_utc_now
        self._status = ProcessStatus.STARTING
        self._last_accessed_utc = launched_at_utc
        self._last_health_check_utc = launched_at_utc
        self._is_healthy = True
        self._health_check_error: str | None = None
        self.window_state = window_state

    @property
    def application_id(self) -> str:
        return self._application_id

    @property
    def application_title(self) -> str:
        return self._application_title

    @property
    def launch_config(self) -> ApplicationLaunchConfig:
        return self._launch_config

    @property
    def launched_at_utc(self) -> datetime:
        return self._launched_at_utc

    @property
    def status(self) -> ProcessStatus:
        return self._status

    @property
    def last_accessed_utc(self) -> datetime:
        return self._last_accessed_utc

    @property
    def last_health_check_utc(self) -> datetime:
        return self._last_health_check_utc

    @property
    def is_healthy(self) -> bool:
        return self._is_healthy

    @property
    def health_check_error(self) -> str | None:
        return self._health_check_error

    @property
    def is_running(self) -> bool:
        return self._status is ProcessStatus.RUNNING

    @property
    def is_active(self) -> bool:
        return self._status.is_active

    @property
    def is_terminated(self) -> bool:
        return self._status.is_terminated

    def process_uptime(self, now_utc: datetime | None = None) -> timedelta:
        """Return elapsed time since launch."""

        return (now_utc or self._clock()) - self._launched_at_utc

    def process_time_since_last_access(self, now_utc: datetime | None = None) -> timedelta:
        """Return elapsed time since the process was last touched."""

        return (now_utc or self._clock()) - self._last_accessed_utc

    def process_mark_running(self) -> None:
        """Transition `starting -> running` once the launch probe succeeded.

        Returns:
            None: Updates status and access time as side effect.

        Raises:
            ProcessStateTransitionError: Raised when the process is not `starting`.
        """

        if self._status is not ProcessStatus.STARTING:
            raise ProcessStateTransitionError(
                f"cannot mark {self._application_id} running from status={self._status.value}"
            )
        self._status = ProcessStatus.RUNNING
        self._last_accessed_utc = self._clock()

    def process_mark_stopped(self) -> None:
        """Transition an active process to `stopped`; no-op when already terminal."""

        if self._status.is_terminated:
            return
        self._status = ProcessStatus.STOPPED

    def process_mark_crashed(self, error: str | None = None) -> None:
        """Transition an active process to `crashed`; no-op when already terminal.

        Args:
            error: Optional failure description stored as health error.

        Returns:
            None: Updates status and health fields as side effect.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self._status.is_terminated:
            return
        self._status = ProcessStatus.CRASHED
        self._is_healthy = False
        self._health_check_error = error

    def process_touch(self) -> None:
        """Record that the process was brought to the foreground or otherwise used."""

        self._last_accessed_utc = self._clock()

    def process_record_health_check(self, healthy: bool, error: str | None = None) -> bool:
        """Record one probe outcome and escalate failures of running processes.

        A failing probe while still `starting` only updates health fields, so
        startup races never produce a crash signal.

        Args:
            healthy: Whether the probe succeeded.
            error: Failure description when unhealthy.

        Returns:
            bool: True when this call transitioned the process to `crashed`.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        self._last_health_check_utc = self._clock()
        self._is_healthy = healthy
        self._health_check_error = None if healthy else error
        if not healthy and self._status is ProcessStatus.RUNNING:
            self.process_mark_crashed(error)
            return True
        return False

    def process_to_dict(self) -> dict[str, Any]:
        """Return JSON-compatible snapshot of the process record."""

        return {
            "application_id": self._application_id,
            "application_title": self._application_title,
            "launch_config": self._launch_config.launch_config_to_dict(),
            "window_state": None if self.window_state is None else self.window_state.window_state_to_dict(),
            "launched_at_utc": self._launched_at_utc.isoformat(),
            "status": self._status.value,
            "last_health_check_utc": self._last_health_check_utc.isoformat(),
            "last_accessed_utc": self._last_accessed_utc.isoformat(),
            "is_healthy": self._is_healthy,
            "health_check_error": self._health_check_error,
        }

    def __repr__(self) -> str:
        return f"ApplicationProcess(application_id={self._application_id!r}, status={self._status.value})"
