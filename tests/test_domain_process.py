"""Regression tests for process state machine, launch results and lifecycle clock."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from launcher.domain import (
    ApplicationLaunchConfig,
    ApplicationProcess,
    ApplicationStatus,
    ApplicationType,
    HEALTH_CHECK_FAILED_CODE,
    LAUNCH_FAILED_CODE,
    ProcessStateTransitionError,
    ProcessStatus,
    StrictlyIncreasingUtcClock,
    UserApplication,
    domain_launch_config_from_dict,
    launch_result_failure,
    launch_result_health_check_failed,
    launch_result_success,
)

_LAUNCHED_AT_UTC = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)


class _ManualClock:
    """Deterministic clock advanced explicitly by tests."""

    def __init__(self, start_utc: datetime):
        self.current_utc = start_utc

    def __call__(self) -> datetime:
        return self.current_utc

    def advance(self, seconds: float) -> None:
        """Move the clock forward.

        Args:
            seconds: Seconds to advance.

        Returns:
            None: Mutates clock state.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        self.current_utc = self.current_utc + timedelta(seconds=seconds)


def _build_process(clock: _ManualClock | None = None) -> ApplicationProcess:
    """Create a fresh `starting` process for assertions.

    Args:
        clock: Optional manual clock used for lifecycle timestamps.

    Returns:
        ApplicationProcess: Process under test.

    Raises:
        ValueError: Raised when identifiers are invalid.
    """

    return ApplicationProcess(
        application_id="recipes",
        application_title="Recipes",
        launch_config=ApplicationLaunchConfig(
            application_type=ApplicationType.WEB,
            url="http://127.0.0.1:8080",
            window_title="Recipes",
        ),
        launched_at_utc=_LAUNCHED_AT_UTC,
        clock=clock or _ManualClock(_LAUNCHED_AT_UTC),
    )


def test_domain_process_starts_in_starting_state_and_marks_running() -> None:
    """Begin in `starting` and move to `running` exactly once.

    Returns:
        None: Assertions validate the primary transition.

    Raises:
        AssertionError: Raised when transition behavior is incorrect.
    """

    clock = _ManualClock(_LAUNCHED_AT_UTC)
    process = _build_process(clock)
    assert process.status is ProcessStatus.STARTING
    assert process.is_active

    clock.advance(2)
    process.process_mark_running()

    assert process.status is ProcessStatus.RUNNING
    assert process.last_accessed_utc == _LAUNCHED_AT_UTC + timedelta(seconds=2)
    with pytest.raises(ProcessStateTransitionError, match="status=running"):
        process.process_mark_running()


def test_domain_process_terminal_states_are_sticky() -> None:
    """Ignore repeated terminal transitions and forbid leaving a terminal state.

    Returns:
        None: Assertions validate terminal-state behavior.

    Raises:
        AssertionError: Raised when terminal states can be left.
    """

    process = _build_process()
    process.process_mark_running()
    process.process_mark_stopped()
    process.process_mark_crashed("late crash report")

    assert process.status is ProcessStatus.STOPPED
    assert process.health_check_error is None
    with pytest.raises(ProcessStateTransitionError):
        process.process_mark_running()


def test_domain_process_failed_health_check_crashes_running_process_only() -> None:
    """Escalate probe failures to `crashed` for running processes, never for starting ones.

    Returns:
        None: Assertions validate the startup-race asymmetry.

    Raises:
        AssertionError: Raised when a starting process is crashed.
    """

    starting_process = _build_process()
    assert starting_process.process_record_health_check(False, "connection refused") is False
    assert starting_process.status is ProcessStatus.STARTING
    assert starting_process.is_healthy is False
    assert starting_process.health_check_error == "connection refused"

    running_process = _build_process()
    running_process.process_mark_running()
    assert running_process.process_record_health_check(False, "status 503") is True
    assert running_process.status is ProcessStatus.CRASHED
    assert running_process.health_check_error == "status 503"


def test_domain_process_successful_health_check_clears_error_and_stamps_time() -> None:
    clock = _ManualClock(_LAUNCHED_AT_UTC)
    process = _build_process(clock)
    process.process_mark_running()
    process.process_record_health_check(False, "transient")

    clock.advance(30)
    crashed = process.process_record_health_check(True)

    assert crashed is False
    assert process.status is ProcessStatus.CRASHED
    assert process.is_healthy is True
    assert process.health_check_error is None
    assert process.last_health_check_utc == _LAUNCHED_AT_UTC + timedelta(seconds=30)


def test_domain_process_touch_and_uptime_follow_clock() -> None:
    clock = _ManualClock(_LAUNCHED_AT_UTC)
    process = _build_process(clock)
    process.process_mark_running()

    clock.advance(120)
    assert process.process_uptime() == timedelta(seconds=120)
    assert process.process_time_since_last_access() == timedelta(seconds=120)

    process.process_touch()
    assert process.process_time_since_last_access() == timedelta(0)


def test_domain_process_to_dict_is_json_compatible() -> None:
    process = _build_process()

    payload = process.process_to_dict()

    assert payload["status"] == "starting"
    assert payload["window_state"] is None
    assert payload["launch_config"]["url"] == "http://127.0.0.1:8080"
    assert payload["launched_at_utc"] == _LAUNCHED_AT_UTC.isoformat()


def test_domain_launch_results_carry_codes_and_process_reference() -> None:
    """Build success, failure and health-check results with the expected fields.

    Returns:
        None: Assertions validate result factories.

    Raises:
        AssertionError: Raised when result fields are incorrect.
    """

    process = _build_process()

    success_result = launch_result_success(process, timestamp_utc=_LAUNCHED_AT_UTC)
    failure_result = launch_result_failure("recipes", "boom", timestamp_utc=_LAUNCHED_AT_UTC)
    health_result = launch_result_health_check_failed(process, "not responding", timestamp_utc=_LAUNCHED_AT_UTC)

    assert success_result.success and success_result.process is process
    assert success_result.description == "Application launched successfully"
    assert failure_result.error_code == LAUNCH_FAILED_CODE
    assert failure_result.process is None
    assert failure_result.description == "boom"
    assert health_result.error_code == HEALTH_CHECK_FAILED_CODE
    assert health_result.launch_result_to_dict()["process"]["application_id"] == "recipes"


def test_domain_strictly_increasing_clock_bumps_equal_readings() -> None:
    """Return strictly increasing readings even when the source repeats a value."""

    frozen_time = datetime(2026, 10, 1, tzinfo=timezone.utc)
    clock = StrictlyIncreasingUtcClock(time_source=lambda: frozen_time)

    first_reading = clock()
    second_reading = clock()

    assert first_reading == frozen_time
    assert second_reading > first_reading


def test_domain_strictly_increasing_clock_rejects_naive_source() -> None:
    clock = StrictlyIncreasingUtcClock(time_source=lambda: datetime(2026, 10, 1))

    with pytest.raises(ValueError, match="timezone-aware"):
        clock()


def test_domain_application_status_launchability() -> None:
    """Allow launching only for ready and running catalogue statuses."""

    launchable = {status for status in ApplicationStatus if status.can_launch}

    assert launchable == {ApplicationStatus.READY, ApplicationStatus.RUNNING}
    assert UserApplication("a", "A", ApplicationStatus.DEVELOPING).can_launch is False
    with pytest.raises(ValueError, match="application_id"):
        UserApplication(" ", "A", ApplicationStatus.READY)


def test_domain_launch_config_from_dict_applies_defaults() -> None:
    config = domain_launch_config_from_dict(
        {"application_type": "hologram", "url": "http://localhost:3000", "window_title": "Chores"}
    )

    assert config.application_type is ApplicationType.WEB
    assert (config.initial_width, config.initial_height) == (1200, 800)
    assert config.launch_config_with_overrides(resizable=False).resizable is False
    with pytest.raises(ValueError, match="initial_width"):
        config.launch_config_with_overrides(initial_width=0)
