"""Regression tests for window-state value semantics and JSON persistence contract."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from launcher.domain import WindowState, window_state_default, window_state_from_dict, window_state_parse_json

_CAPTURED_AT_UTC = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _build_window_state(**overrides: object) -> WindowState:
    """Create a deterministic window state for assertions.

    Args:
        overrides: Field values replacing defaults.

    Returns:
        WindowState: Window state under test.

    Raises:
        ValueError: Raised when overrides violate window-state invariants.
    """

    values: dict[str, object] = {
        "x": 40.0,
        "y": 60.0,
        "width": 1024.0,
        "height": 768.0,
        "last_updated_utc": _CAPTURED_AT_UTC,
    }
    values.update(overrides)
    return WindowState(**values)  # type: ignore[arg-type]


def test_domain_window_state_json_restores_identical_geometry() -> None:
    """Restore identical geometry and flags from serialized JSON text.

    Returns:
        None: Assertions validate serialization contract.

    Raises:
        AssertionError: Raised when restored values differ.
    """

    original_state = _build_window_state(is_maximized=True)

    restored_state = window_state_parse_json(original_state.window_state_to_json())

    assert restored_state == original_state


@pytest.mark.parametrize(
    "serialized_state",
    [
        None,
        "",
        "not json at all",
        "[1, 2, 3]",
        '{"x": 1, "y": 2, "width": 300}',
        '{"x": "left", "y": 2, "width": 300, "height": 200, "last_updated_utc": "2026-10-01T12:00:00+00:00"}',
        '{"x": 1, "y": 2, "width": -300, "height": 200, "last_updated_utc": "2026-10-01T12:00:00+00:00"}',
        '{"x": 1, "y": 2, "width": 300, "height": 200, "last_updated_utc": "yesterday"}',
        '{"x": 1, "y": 2, "width": 300, "height": 200, "last_updated_utc": "2026-10-01T12:00:00+00:00", '
        '"is_maximized": "yes"}',
    ],
)
def test_domain_window_state_parse_treats_corrupt_text_as_absent(serialized_state: str | None) -> None:
    """Return None for absent, malformed or invariant-violating serialized state.

    Args:
        serialized_state: Candidate persisted text.

    Returns:
        None: Assertions validate degrade-to-absent behavior.

    Raises:
        AssertionError: Raised when corrupt input produces a state.
    """

    assert window_state_parse_json(serialized_state) is None


def test_domain_window_state_from_dict_defaults_missing_flags_to_false() -> None:
    """Accept records without display-mode flags and default them to False."""

    parsed_state = window_state_from_dict(
        {"x": 10, "y": 20, "width": 640, "height": 480, "last_updated_utc": "2026-10-01T12:00:00"}
    )

    assert parsed_state is not None
    assert parsed_state.is_normal
    assert parsed_state.last_updated_utc.tzinfo is not None


def test_domain_window_state_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="width"):
        _build_window_state(width=0)
    with pytest.raises(ValueError, match="height"):
        _build_window_state(height=-1)


def test_domain_window_state_plausibility_rejects_offscreen_tiny_and_stale_states() -> None:
    """Reject far off-screen positions, tiny windows and states past the age limit.

    Returns:
        None: Assertions validate plausibility rules.

    Raises:
        AssertionError: Raised when plausibility decisions are incorrect.
    """

    reference_time = _CAPTURED_AT_UTC + timedelta(days=1)

    assert _build_window_state().window_state_is_plausible(now_utc=reference_time)
    assert not _build_window_state(x=-5000.0).window_state_is_plausible(now_utc=reference_time)
    assert not _build_window_state(width=50.0).window_state_is_plausible(now_utc=reference_time)
    assert not _build_window_state().window_state_is_plausible(
        now_utc=_CAPTURED_AT_UTC + timedelta(days=31),
        max_age_days=30,
    )


def test_domain_window_state_with_geometry_refreshes_timestamp() -> None:
    """Replace geometry fields and stamp the supplied capture time."""

    updated_at_utc = _CAPTURED_AT_UTC + timedelta(minutes=5)

    updated_state = _build_window_state().window_state_with_geometry(updated_at_utc=updated_at_utc, x=300.0)

    assert updated_state.x == 300.0
    assert updated_state.width == 1024.0
    assert updated_state.last_updated_utc == updated_at_utc


def test_domain_window_state_describe_reports_display_mode() -> None:
    assert _build_window_state(is_fullscreen=True).window_state_describe() == "Fullscreen"
    assert _build_window_state(is_maximized=True).window_state_describe() == "Maximized"
    assert _build_window_state().window_state_describe() == "1024x768 at (40, 60)"


def test_domain_window_state_default_uses_requested_size() -> None:
    default_state = window_state_default(900, 700)

    assert (default_state.width, default_state.height) == (900, 700)
    assert default_state.is_normal
    assert json.loads(default_state.window_state_to_json())["width"] == 900
