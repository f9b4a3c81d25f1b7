"""Domain models used across application layer boundaries."""

from .launch_config import ApplicationLaunchConfig, ApplicationType, domain_launch_config_from_dict
from .launch_result import (
    HEALTH_CHECK_FAILED_CODE,
    LAUNCH_FAILED_CODE,
    LaunchResult,
    launch_result_failure,
    launch_result_health_check_failed,
    launch_result_stopped,
    launch_result_success,
)
from .models import LAUNCHABLE_APPLICATION_STATUSES, ApplicationStatus, HealthStatus, UserApplication
from .process import ApplicationProcess, ProcessStateTransitionError, ProcessStatus
from .timeline import StrictlyIncreasingUtcClock, domain_utc_now
from .window_state import (
    WindowState,
    window_state_default,
    window_state_from_dict,
    window_state_parse_json,
)

__all__ = [
    "ApplicationLaunchConfig",
    "ApplicationProcess",
    "ApplicationStatus",
    "ApplicationType",
    "HEALTH_CHECK_FAILED_CODE",
    "HealthStatus",
    "LAUNCHABLE_APPLICATION_STATUSES",
    "LAUNCH_FAILED_CODE",
    "LaunchResult",
    "ProcessStateTransitionError",
    "ProcessStatus",
    "StrictlyIncreasingUtcClock",
    "UserApplication",
    "WindowState",
    "domain_launch_config_from_dict",
    "domain_utc_now",
    "launch_result_failure",
    "launch_result_health_check_failed",
    "launch_result_stopped",
    "launch_result_success",
    "window_state_default",
    "window_state_from_dict",
    "window_state_parse_json",
]
