"""Typed domain models shared across runtime layers.

This module provides the application catalogue contract consumed by the
launcher and the health payload used by health-check surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ApplicationStatus(str, Enum):
    """Lifecycle status of a catalogued application as reported by its owner."""

    REQUESTED = "requested"
    DEVELOPING = "developing"
    TESTING = "testing"
    READY = "ready"
    RUNNING = "running"
    FAILED = "failed"
    UPDATING = "updating"

    @property
    def display_name(self) -> str:
        """Return a title-cased label for user-facing surfaces."""

        return self.value.capitalize()

    @property
    def can_launch(self) -> bool:
        """Return whether applications in this status may be launched."""

        return self in LAUNCHABLE_APPLICATION_STATUSES


LAUNCHABLE_APPLICATION_STATUSES = frozenset({ApplicationStatus.READY, ApplicationStatus.RUNNING})


@dataclass(frozen=True)
class UserApplication:
    """Catalogued application that callers ask the launcher to supervise.

    Attributes:
        application_id: Unique application identifier.
        title: Human-readable application title.
        status: Lifecycle status owned by the catalogue.
        url: Optional served address (`http(s)://` or `file://`).
        description: Optional free-text description.
    """

    application_id: str
    title: str
    status: ApplicationStatus
    url: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.application_id.strip():
            raise ValueError("application_id must not be blank")
        if not self.title.strip():
            raise ValueError("title must not be blank")

    @property
    def can_launch(self) -> bool:
        return self.status.can_launch


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str
