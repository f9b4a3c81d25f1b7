"""Immutable launch configuration describing how to reach and display an application."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

DEFAULT_INITIAL_WIDTH = 1200
DEFAULT_INITIAL_HEIGHT = 800


class ApplicationType(str, Enum):
    """Runtime kind of a launched application."""

    WEB = "web"
    DESKTOP = "desktop"

    @property
    def display_name(self) -> str:
        if self is ApplicationType.WEB:
            return "Web Application"
        return "Desktop Application"

    @property
    def is_supported(self) -> bool:
        return self is ApplicationType.WEB


@dataclass(frozen=True)
class ApplicationLaunchConfig:
    """Launch settings for one application instance.

    Attributes:
        application_type: Runtime kind used to select the start mechanism.
        url: Target address (`http://`, `https://` or `file://`).
        window_title: Title shown by the hosting window.
        initial_width: Preferred initial window width in pixels.
        initial_height: Preferred initial window height in pixels.
        resizable: Whether the hosting window may be resized.
        show_navigation_controls: Whether browser navigation controls are shown.
        enable_javascript: Whether script execution is allowed.
        enable_local_storage: Whether local storage access is allowed.
    """

    application_type: ApplicationType
    url: str
    window_title: str
    initial_width: int = DEFAULT_INITIAL_WIDTH
    initial_height: int = DEFAULT_INITIAL_HEIGHT
    resizable: bool = True
    show_navigation_controls: bool = True
    enable_javascript: bool = True
    enable_local_storage: bool = True

    def __post_init__(self) -> None:
        if not self.url.strip():
            raise ValueError("url must not be blank")
        if self.initial_width <= 0:
            raise ValueError("initial_width must be > 0")
        if self.initial_height <= 0:
            raise ValueError("initial_height must be > 0")

    def launch_config_with_overrides(self, **overrides: Any) -> ApplicationLaunchConfig:
        """Return a copy with selected fields replaced.

        Args:
            overrides: Field values to replace.

        Returns:
            ApplicationLaunchConfig: New configuration instance.

        Raises:
            TypeError: Raised when an unknown field name is supplied.
            ValueError: Raised when replaced values violate invariants.
        """

        return replace(self, **overrides)

    def launch_config_to_dict(self) -> dict[str, Any]:
        """Return JSON-compatible representation of the configuration."""

        return {
            "application_type": self.application_type.value,
            "url": self.url,
            "window_title": self.window_title,
            "initial_width": self.initial_width,
            "initial_height": self.initial_height,
            "resizable": self.resizable,
            "show_navigation_controls": self.show_navigation_controls,
            "enable_javascript": self.enable_javascript,
            "enable_local_storage": self.enable_local_storage,
        }


def domain_launch_config_from_dict(payload: dict[str, Any]) -> ApplicationLaunchConfig:
    """Build a launch configuration from a JSON-compatible mapping.

    Unknown application types fall back to `web`; optional fields fall back to
    their defaults.

    Args:
        payload: Mapping produced by `launch_config_to_dict` or an API body.

    Returns:
        ApplicationLaunchConfig: Parsed configuration.

    Raises:
        KeyError: Raised when `url` or `window_title` is missing.
        ValueError: Raised when values violate configuration invariants.
    """

    raw_type = str(payload.get("application_type", ApplicationType.WEB.value))
    try:
        application_type = ApplicationType(raw_type)
    except ValueError:
        application_type = ApplicationType.WEB

    return ApplicationLaunchConfig(
        application_type=application_type,
        url=str(payload["url"]),
        window_title=str(payload["window_title"]),
        initial_width=int(payload.get("initial_width", DEFAULT_INITIAL_WIDTH)),
        initial_height=int(payload.get("initial_height", DEFAULT_INITIAL_HEIGHT)),
        resizable=bool(payload.get("resizable", True)),
        show_navigation_controls=bool(payload.get("show_navigation_controls", True)),
        enable_javascript=bool(payload.get("enable_javascript", True)),
        enable_local_storage=bool(payload.get("enable_local_storage", True)),
    )
