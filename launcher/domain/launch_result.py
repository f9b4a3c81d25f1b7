"""Immutable outcome events produced by launcher operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .process import ApplicationProcess
from .timeline import domain_utc_now

LAUNCH_FAILED_CODE = "LAUNCH_FAILED"
HEALTH_CHECK_FAILED_CODE = "HEALTH_CHECK_FAILED"


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of one launch, restart, stop or health-check operation.

    Attributes:
        success: Whether the operation succeeded.
        application_id: Target application identifier.
        process: Current process record when one exists.
        message: Human-readable outcome message.
        error: User-facing failure message when unsuccessful.
        error_code: Taxonomy code when unsuccessful.
        timestamp_utc: When the outcome was produced.
    """

    success: bool
    application_id: str
    timestamp_utc: datetime
    process: ApplicationProcess | None = None
    message: str | None = None
    error: str | None = None
    error_code: str | None = None

    @property
    def description(self) -> str:
        application_label = self.process.application_title if self.process is not None else self.application_id
        if self.success:
            return self.message or f"Successfully launched {application_label}"
        return self.error or f"Failed to launch {application_label}"

    def launch_result_to_dict(self) -> dict[str, Any]:
        """Return JSON-compatible representation of the result."""

        return {
            "success": self.success,
            "application_id": self.application_id,
            "process": None if self.process is None else self.process.process_to_dict(),
            "message": self.message,
            "error": self.error,
            "error_code": self.error_code,
            "timestamp_utc": self.timestamp_utc.isoformat(),
        }


def launch_result_success(
    process: ApplicationProcess,
    message: str = "Application launched successfully",
    timestamp_utc: datetime | None = None,
) -> LaunchResult:
    """Build a success result bound to a registered process."""

    return LaunchResult(
        success=True,
        application_id=process.application_id,
        process=process,
        message=message,
        timestamp_utc=timestamp_utc or domain_utc_now(),
    )


def launch_result_failure(
    application_id: str,
    error: str,
    error_code: str | None = None,
    message: str | None = None,
    process: ApplicationProcess | None = None,
    timestamp_utc: datetime | None = None,
) -> LaunchResult:
    """Build a failure result; missing codes default to `LAUNCH_FAILED`."""

    return LaunchResult(
        success=False,
        application_id=application_id,
        process=process,
        message=message,
        error=error,
        error_code=error_code or LAUNCH_FAILED_CODE,
        timestamp_utc=timestamp_utc or domain_utc_now(),
    )


def launch_result_stopped(
    application_id: str,
    message: str = "Application stopped successfully",
    timestamp_utc: datetime | None = None,
) -> LaunchResult:
    """Build the success result emitted after a graceful stop."""

    return LaunchResult(
        success=True,
        application_id=application_id,
        message=message,
        timestamp_utc=timestamp_utc or domain_utc_now(),
    )


def launch_result_health_check_failed(
    process: ApplicationProcess,
    error: str,
    timestamp_utc: datetime | None = None,
) -> LaunchResult:
    """Build the failure result emitted when a running process fails a probe."""

    return LaunchResult(
        success=False,
        application_id=process.application_id,
        process=process,
        message="Application health check failed",
        error=error,
        error_code=HEALTH_CHECK_FAILED_CODE,
        timestamp_utc=timestamp_utc or domain_utc_now(),
    )
