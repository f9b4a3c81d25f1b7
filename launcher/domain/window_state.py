"""Window geometry value type and its textual persistence contract.

Persisted window states are restored on the next launch of the same
application. The serialized form is a flat JSON object; any text that cannot
be turned back into a valid `WindowState` is treated as "no saved state".
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any

from .timeline import domain_utc_now

_WINDOW_STATE_POSITION_BOUNDS = (-1000.0, 10000.0)
_WINDOW_STATE_SIZE_BOUNDS = (100.0, 10000.0)
_WINDOW_STATE_GEOMETRY_KEYS = ("x", "y", "width", "height")
_WINDOW_STATE_FLAG_KEYS = ("is_maximized", "is_minimized", "is_fullscreen")


@dataclass(frozen=True)
class WindowState:
    """Window geometry and display-mode flags for one application window.

    Attributes:
        x: Left edge position in logical pixels.
        y: Top edge position in logical pixels.
        width: Window width in logical pixels (positive).
        height: Window height in logical pixels (positive).
        is_maximized: Whether the window is maximized.
        is_minimized: Whether the window is minimized.
        is_fullscreen: Whether the window is fullscreen.
        last_updated_utc: When this geometry was captured.
    """

    x: float
    y: float
    width: float
    height: float
    last_updated_utc: datetime
    is_maximized: bool = False
    is_minimized: bool = False
    is_fullscreen: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("width must be > 0")
        if self.height <= 0:
            raise ValueError("height must be > 0")
        if self.last_updated_utc.tzinfo is None:
            raise ValueError("last_updated_utc must be timezone-aware")

    @property
    def is_normal(self) -> bool:
        return not (self.is_maximized or self.is_minimized or self.is_fullscreen)

    def window_state_with_geometry(self, updated_at_utc: datetime | None = None, **changes: Any) -> WindowState:
        """Return a copy with changed fields and a refreshed timestamp.

        Args:
            updated_at_utc: Optional capture timestamp; defaults to now.
            changes: Field values to replace.

        Returns:
            WindowState: Updated window state.

        Raises:
            ValueError: Raised when changes violate size invariants.
        """

        return replace(self, last_updated_utc=updated_at_utc or domain_utc_now(), **changes)

    def window_state_is_plausible(self, now_utc: datetime | None = None, max_age_days: int = 30) -> bool:
        """Return whether this state is reasonable to restore.

        Positions far off-screen, implausible sizes, and states older than
        `max_age_days` are rejected.

        Args:
            now_utc: Reference time; defaults to now.
            max_age_days: Maximum accepted age in days.

        Returns:
            bool: True when the state can be restored as-is.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        position_min, position_max = _WINDOW_STATE_POSITION_BOUNDS
        size_min, size_max = _WINDOW_STATE_SIZE_BOUNDS
        if not (position_min <= self.x <= position_max and position_min <= self.y <= position_max):
            return False
        if not (size_min <= self.width <= size_max and size_min <= self.height <= size_max):
            return False
        reference_time = now_utc or domain_utc_now()
        return reference_time - self.last_updated_utc <= timedelta(days=max_age_days)

    def window_state_describe(self) -> str:
        """Return a short human-readable description of the display mode."""

        if self.is_fullscreen:
            return "Fullscreen"
        if self.is_maximized:
            return "Maximized"
        if self.is_minimized:
            return "Minimized"
        return f"{int(self.width)}x{int(self.height)} at ({int(self.x)}, {int(self.y)})"

    def window_state_to_dict(self) -> dict[str, Any]:
        """Return the flat JSON-compatible representation."""

        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "is_maximized": self.is_maximized,
            "is_minimized": self.is_minimized,
            "is_fullscreen": self.is_fullscreen,
            "last_updated_utc": self.last_updated_utc.isoformat(),
        }

    def window_state_to_json(self) -> str:
        """Serialize this state to JSON text for key-value persistence."""

        return json.dumps(self.window_state_to_dict(), sort_keys=True)


def window_state_default(width: float = 1200.0, height: float = 800.0) -> WindowState:
    """Return the default window placement for a first launch.

    Args:
        width: Initial width.
        height: Initial height.

    Returns:
        WindowState: Normal window offset from the screen edge.

    Raises:
        ValueError: Raised when width or height is not positive.
    """

    return WindowState(x=100.0, y=100.0, width=width, height=height, last_updated_utc=domain_utc_now())


def window_state_from_dict(payload: object) -> WindowState | None:
    """Build a window state from a decoded mapping.

    Geometry keys and a parseable `last_updated_utc` are required; flags
    default to False. Anything else yields None rather than raising.

    Args:
        payload: Candidate decoded JSON value.

    Returns:
        WindowState | None: Parsed state, or None when the payload is unusable.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(payload, dict):
        return None

    geometry: dict[str, float] = {}
    for key in _WINDOW_STATE_GEOMETRY_KEYS:
        value = payload.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        geometry[key] = float(value)

    flags: dict[str, bool] = {}
    for key in _WINDOW_STATE_FLAG_KEYS:
        value = payload.get(key, False)
        if not isinstance(value, bool):
            return None
        flags[key] = value

    last_updated_utc = _window_state_parse_timestamp(payload.get("last_updated_utc"))
    if last_updated_utc is None:
        return None

    try:
        return WindowState(last_updated_utc=last_updated_utc, **geometry, **flags)
    except ValueError:
        return None


def window_state_parse_json(serialized_state: str | None) -> WindowState | None:
    """Parse persisted JSON text into a window state.

    Args:
        serialized_state: Text produced by `window_state_to_json`, or None.

    Returns:
        WindowState | None: Parsed state, or None for absent or corrupt input.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if serialized_state is None:
        return None
    try:
        decoded_payload = json.loads(serialized_state)
    except (TypeError, ValueError):
        return None
    return window_state_from_dict(decoded_payload)


def _window_state_parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        parsed_value = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed_value.tzinfo is None:
        return parsed_value.replace(tzinfo=timezone.utc)
    return parsed_value
