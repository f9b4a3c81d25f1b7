"""Launcher service supervising the lifecycle of user-facing applications.

The service owns the in-memory process registry, validates launch targets
through the injected reachability prober or the local filesystem, restores
and persists window geometry, runs the periodic health monitor, and
publishes exactly one launch result per operation on its event stream.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Final
from urllib.parse import urlparse

from launcher.adapters import ProbeError, ReachabilityProberPort
from launcher.domain import (
    ApplicationLaunchConfig,
    ApplicationProcess,
    ApplicationType,
    LaunchResult,
    StrictlyIncreasingUtcClock,
    UserApplication,
    WindowState,
    launch_result_failure,
    launch_result_health_check_failed,
    launch_result_stopped,
    launch_result_success,
)

from .event_stream import LaunchEventStream
from .health_monitor import HealthCheckScheduler
from .launch_error_codes import LaunchErrorCode, launch_error_default_message
from .launch_errors import (
    ApplicationNotFoundError,
    HealthCheckFailedError,
    InvalidStateError,
    LaunchError,
    UnsupportedApplicationTypeError,
    UnsupportedSchemeError,
    UrlNotAccessibleError,
    UrlValidationError,
)
from .local_index import LocalIndexLocator, local_validate_file_url
from .window_state_store import WindowStateRepository

logger = logging.getLogger(__name__)

DEFAULT_PROBE_USER_AGENT: Final[str] = "HouseholdAI-Dashboard/1.0"
_PROBE_ACCEPT_HEADER: Final[str] = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
_FOREGROUND_MESSAGE: Final[str] = "Application brought to foreground"


class LauncherDisposedError(RuntimeError):
    """Raised when a mutating launcher operation is invoked after dispose."""


class ApplicationLauncherService:
    """Supervisor for launched applications keyed by application identifier.

    Operations for one identifier are serialized through a per-identifier
    asyncio lock, so at most one process per identifier is ever registered.
    Operations for distinct identifiers interleave freely.
    """

    def __init__(
        self,
        prober: ReachabilityProberPort,
        window_state_repository: WindowStateRepository,
        clock: Callable[[], datetime] | None = None,
        local_index_locator: LocalIndexLocator | None = None,
        health_check_interval_seconds: float = 300.0,
        health_check_access_grace_seconds: float = 300.0,
        restart_settle_seconds: float = 0.5,
        probe_user_agent: str = DEFAULT_PROBE_USER_AGENT,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize launcher service.

        Args:
            prober: Reachability prober used for http(s) targets.
            window_state_repository: Window-state persistence adapter.
            clock: UTC clock for lifecycle timestamps; strictly increasing by default.
            local_index_locator: Optional resolver for applications without a URL.
            health_check_interval_seconds: Delay between scheduled health sweeps.
            health_check_access_grace_seconds: Processes accessed more recently are not probed.
            restart_settle_seconds: Pause between stop and launch during restart.
            probe_user_agent: User-Agent header sent with every probe.
            sleep: Optional awaitable sleep used for restart settling and scheduling.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required dependencies are missing or timing values are negative.
        """

        if prober is None:
            raise ValueError("prober must not be None")
        if window_state_repository is None:
            raise ValueError("window_state_repository must not be None")
        if health_check_access_grace_seconds < 0:
            raise ValueError("health_check_access_grace_seconds must be >= 0")
        if restart_settle_seconds < 0:
            raise ValueError("restart_settle_seconds must be >= 0")

        self._prober = prober
        self._window_states = window_state_repository
        self._clock = clock or StrictlyIncreasingUtcClock()
        self._local_index_locator = local_index_locator
        self._access_grace = timedelta(seconds=health_check_access_grace_seconds)
        self._restart_settle_seconds = restart_settle_seconds
        self._probe_headers = {"User-Agent": probe_user_agent, "Accept": _PROBE_ACCEPT_HEADER}
        self._sleep = sleep or asyncio.sleep
        self._processes: dict[str, ApplicationProcess] = {}
        self._application_locks: dict[str, asyncio.Lock] = {}
        self._application_lock_users: dict[str, int] = {}
        self._events = LaunchEventStream()
        self._scheduler = HealthCheckScheduler(
            self._launcher_scheduled_sweep,
            interval_seconds=health_check_interval_seconds,
            sleep=sleep,
        )
        self._disposed = False

    @property
    def launch_events(self) -> LaunchEventStream:
        return self._events

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def launcher_is_application_running(self, application_id: str) -> bool:
        process = self._processes.get(application_id)
        return process is not None and process.is_running

    def launcher_get_application_process(self, application_id: str) -> ApplicationProcess | None:
        return self._processes.get(application_id)

    def launcher_running_processes(self) -> tuple[ApplicationProcess, ...]:
        """Return a snapshot of every registered process in registration order."""

        return tuple(self._processes.values())

    async def launcher_start(self) -> None:
        """Start the periodic health monitor.

        Returns:
            None: Starts the scheduler task as side effect.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        self._scheduler.scheduler_start()
        logger.info("Launcher health monitor started")

    async def launcher_launch(
        self,
        application: UserApplication,
        config: ApplicationLaunchConfig | None = None,
    ) -> LaunchResult:
        """Launch an application or bring its running process to the foreground.

        Args:
            application: Catalogued application to launch.
            config: Optional explicit launch configuration.

        Returns:
            LaunchResult: Outcome, also published on `launch_events`.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        if not application.can_launch:
            return self._launcher_reject_invalid_state(application)

        async with self._launcher_locked(application.application_id):
            self._launcher_ensure_not_disposed()
            return await self._launcher_launch_locked(application, config)

    async def launcher_stop(self, application_id: str) -> None:
        """Stop a registered process; no-op when none is registered.

        Args:
            application_id: Application identifier.

        Returns:
            None: Publishes a stop result when a process was stopped.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        async with self._launcher_locked(application_id):
            await self._launcher_stop_locked(application_id)

    async def launcher_restart(self, application: UserApplication) -> LaunchResult:
        """Stop the current process, wait briefly, and launch a fresh one.

        Args:
            application: Catalogued application to restart.

        Returns:
            LaunchResult: Outcome of the new launch.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        if not application.can_launch:
            return self._launcher_reject_invalid_state(application)

        async with self._launcher_locked(application.application_id):
            self._launcher_ensure_not_disposed()
            logger.info("Restarting %s", application.application_id)
            stop_result = await self._launcher_stop_locked(application.application_id)
            if stop_result is not None and self._restart_settle_seconds > 0:
                await self._sleep(self._restart_settle_seconds)
            return await self._launcher_launch_locked(application, None)

    async def launcher_report_crash(self, application_id: str, error: str | None = None) -> LaunchResult | None:
        """Record a crash reported by the hosting surface and retire the process.

        Args:
            application_id: Application identifier.
            error: Optional crash description.

        Returns:
            LaunchResult | None: Published failure, or None when no active process exists.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        async with self._launcher_locked(application_id):
            process = self._processes.get(application_id)
            if process is None or not process.is_active:
                return None

            process.process_mark_crashed(error)
            logger.warning("Application %s crashed: %s", application_id, error or "no details")
            result = self._launcher_publish(
                launch_result_failure(
                    application_id,
                    launch_error_default_message(LaunchErrorCode.PROCESS_CRASHED.value, error or ""),
                    error_code=LaunchErrorCode.PROCESS_CRASHED.value,
                    message="Application process crashed",
                    process=process,
                    timestamp_utc=self._clock(),
                )
            )
            await self._launcher_retire(process)
            return result

    async def launcher_update_window_state(self, application_id: str, window_state: WindowState) -> bool:
        """Apply and persist reported window geometry for an active process.

        Args:
            application_id: Application identifier.
            window_state: Newly reported geometry.

        Returns:
            bool: False when no active process exists for the identifier.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        async with self._launcher_locked(application_id):
            process = self._processes.get(application_id)
            if process is None or not process.is_active:
                return False
            process.window_state = window_state
            await self._window_states.window_state_save(application_id, window_state)
            return True

    async def launcher_perform_health_checks(self) -> None:
        """Probe every active process that has not been accessed recently.

        Probes run concurrently; one failing or raising check never aborts the
        others. A failing probe crashes only `running` processes, which are
        then reported, persisted and removed from the registry.

        Returns:
            None: Updates process health and publishes failures as side effects.

        Raises:
            LauncherDisposedError: Raised after dispose.
        """

        self._launcher_ensure_not_disposed()
        now_utc = self._clock()
        due_processes = [
            process
            for process in self._processes.values()
            if process.is_active and process.process_time_since_last_access(now_utc) >= self._access_grace
        ]
        if not due_processes:
            logger.debug("No processes due for a health check")
            return

        outcomes = await asyncio.gather(
            *(self._launcher_check_process(process) for process in due_processes),
            return_exceptions=True,
        )
        for process, outcome in zip(due_processes, outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "Health check for %s raised unexpectedly",
                    process.application_id,
                    exc_info=outcome,
                )

    async def launcher_dispose(self) -> None:
        """Stop every process, cancel the monitor, close the stream and prober; idempotent."""

        if self._disposed:
            return
        self._disposed = True
        logger.info("Disposing launcher with %d registered processes", len(self._processes))

        await self._scheduler.scheduler_stop()
        # In-flight launches hold locks for identifiers not yet registered; wait for them too.
        for application_id in list(dict.fromkeys([*self._processes, *self._application_locks])):
            async with self._launcher_locked(application_id):
                await self._launcher_stop_locked(application_id)
        self._events.stream_close()
        await self._prober.adapter_close()

    async def _launcher_launch_locked(
        self,
        application: UserApplication,
        config: ApplicationLaunchConfig | None,
    ) -> LaunchResult:
        application_id = application.application_id
        existing_process = self._processes.get(application_id)
        if existing_process is not None and existing_process.is_active:
            existing_process.process_touch()
            logger.info("Application %s already active; bringing to foreground", application_id)
            return self._launcher_publish(
                launch_result_success(existing_process, message=_FOREGROUND_MESSAGE, timestamp_utc=self._clock())
            )

        try:
            launch_config = await self._launcher_resolve_launch_config(application, config)
            window_state = await self._window_states.window_state_load(application_id)
            await self._launcher_validate_target(launch_config)
        except LaunchError as error:
            return self._launcher_publish_failure(application_id, error)
        if self._disposed:
            return self._launcher_publish_failure(
                application_id,
                LaunchError(f"Launcher shut down while launching {application_id}"),
            )

        process = ApplicationProcess(
            application_id=application_id,
            application_title=application.title,
            launch_config=launch_config,
            launched_at_utc=self._clock(),
            window_state=window_state,
            clock=self._clock,
        )
        process.process_mark_running()
        self._processes[application_id] = process
        logger.info("Launched %s at %s", application_id, launch_config.url)
        return self._launcher_publish(launch_result_success(process, timestamp_utc=self._clock()))

    async def _launcher_stop_locked(self, application_id: str) -> LaunchResult | None:
        process = self._processes.get(application_id)
        if process is None:
            logger.debug("Stop requested for %s but no process is registered", application_id)
            return None

        if process.window_state is not None:
            await self._window_states.window_state_save(application_id, process.window_state)
        process.process_mark_stopped()
        if self._processes.get(application_id) is process:
            del self._processes[application_id]
        logger.info("Stopped %s after %s", application_id, process.process_uptime(self._clock()))
        return self._launcher_publish(launch_result_stopped(application_id, timestamp_utc=self._clock()))

    async def _launcher_check_process(self, process: ApplicationProcess) -> None:
        application_id = process.application_id
        failure_detail: str | None = None
        try:
            await self._launcher_validate_target(process.launch_config)
        except LaunchError as error:
            failure_detail = error.message.splitlines()[0]

        async with self._launcher_locked(application_id):
            if self._processes.get(application_id) is not process or not process.is_active:
                logger.debug("Skipping health result for %s; process is no longer registered", application_id)
                return

            crashed = process.process_record_health_check(failure_detail is None, failure_detail)
            if failure_detail is None:
                logger.debug("Health check passed for %s", application_id)
                return
            if not crashed:
                logger.info("Health check failed for starting process %s: %s", application_id, failure_detail)
                return

            failure = HealthCheckFailedError(application_id, failure_detail)
            logger.warning("Health check failed for %s: %s", application_id, failure_detail)
            logger.debug("%s", failure.error_detailed_report())
            self._launcher_publish(
                launch_result_health_check_failed(
                    process,
                    failure.error_user_message(),
                    timestamp_utc=self._clock(),
                )
            )
            await self._launcher_retire(process)

    async def _launcher_retire(self, process: ApplicationProcess) -> None:
        application_id = process.application_id
        if process.window_state is not None:
            await self._window_states.window_state_save(application_id, process.window_state)
        if self._processes.get(application_id) is process:
            del self._processes[application_id]

    async def _launcher_resolve_launch_config(
        self,
        application: UserApplication,
        config: ApplicationLaunchConfig | None,
    ) -> ApplicationLaunchConfig:
        if config is not None:
            return config
        if application.url:
            return ApplicationLaunchConfig(
                application_type=ApplicationType.WEB,
                url=application.url,
                window_title=application.title,
            )
        if self._local_index_locator is not None:
            return await asyncio.to_thread(self._local_index_locator.locator_build_launch_config, application)
        raise ApplicationNotFoundError(application.application_id)

    async def _launcher_validate_target(self, launch_config: ApplicationLaunchConfig) -> None:
        if not launch_config.application_type.is_supported:
            raise UnsupportedApplicationTypeError(launch_config.application_type.display_name)

        url = launch_config.url
        scheme = urlparse(url).scheme.lower()
        if scheme == "file":
            await asyncio.to_thread(local_validate_file_url, url)
            return
        if scheme not in ("http", "https"):
            raise UnsupportedSchemeError(url, scheme or "none")

        try:
            status_code = await self._prober.adapter_probe(url, dict(self._probe_headers))
        except ProbeError as error:
            raise UrlValidationError(url, error) from error
        if not 200 <= status_code < 400:
            raise UrlNotAccessibleError(url, status_code)

    async def _launcher_scheduled_sweep(self) -> None:
        if self._disposed:
            return
        await self.launcher_perform_health_checks()

    def _launcher_reject_invalid_state(self, application: UserApplication) -> LaunchResult:
        return self._launcher_publish_failure(
            application.application_id,
            InvalidStateError(application.application_id, application.status.value),
        )

    def _launcher_publish_failure(self, application_id: str, error: LaunchError) -> LaunchResult:
        logger.warning("Launch of %s failed: %s", application_id, error)
        logger.debug("%s", error.error_detailed_report())
        return self._launcher_publish(
            launch_result_failure(
                application_id,
                error.error_user_message(),
                error_code=error.error_code,
                message=error.message.splitlines()[0],
                timestamp_utc=self._clock(),
            )
        )

    def _launcher_publish(self, result: LaunchResult) -> LaunchResult:
        self._events.stream_publish(result)
        return result

    @asynccontextmanager
    async def _launcher_locked(self, application_id: str) -> AsyncIterator[None]:
        """Hold the identifier's lock; drop it once unused and nothing is registered."""

        application_lock = self._application_locks.get(application_id)
        if application_lock is None:
            application_lock = asyncio.Lock()
            self._application_locks[application_id] = application_lock
        self._application_lock_users[application_id] = self._application_lock_users.get(application_id, 0) + 1
        try:
            async with application_lock:
                yield
        finally:
            remaining_users = self._application_lock_users.pop(application_id, 1) - 1
            if remaining_users > 0:
                self._application_lock_users[application_id] = remaining_users
            elif application_id not in self._processes:
                if self._application_locks.get(application_id) is application_lock:
                    del self._application_locks[application_id]

    def _launcher_ensure_not_disposed(self) -> None:
        if self._disposed:
            raise LauncherDisposedError("launcher service has been disposed")
