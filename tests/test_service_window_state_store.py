"""Regression tests for window-state persistence over the key-value port."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from launcher.db import InMemoryKeyValueStore, KeyValueStoreError
from launcher.domain import WindowState
from launcher.service import WindowStateRepository, window_state_store_key

_CAPTURED_AT_UTC = datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)


class _FailingKeyValueStore:
    """Key-value store double whose every operation fails."""

    async def db_key_value_get(self, key: str) -> str | None:
        """Raise deterministic read failure.

        Args:
            key: Store key.

        Returns:
            str | None: This method does not return.

        Raises:
            KeyValueStoreError: Always raised by this test double.
        """

        raise KeyValueStoreError(f"read failed for {key}")

    async def db_key_value_set(self, key: str, value: str) -> None:
        """Raise deterministic write failure.

        Args:
            key: Store key.
            value: Value to persist.

        Returns:
            None: This method does not return.

        Raises:
            KeyValueStoreError: Always raised by this test double.
        """

        _ = value
        raise KeyValueStoreError(f"write failed for {key}")


def _build_window_state() -> WindowState:
    return WindowState(x=10.0, y=20.0, width=800.0, height=600.0, last_updated_utc=_CAPTURED_AT_UTC)


def test_service_window_state_store_key_uses_stable_prefix() -> None:
    assert window_state_store_key("recipes") == "window_state_recipes"


def test_service_window_state_save_then_load_round_trips() -> None:
    """Persist a state and restore the identical value.

    Returns:
        None: Assertions validate persistence round trip.

    Raises:
        AssertionError: Raised when restored state differs.
    """

    store = InMemoryKeyValueStore()
    repository = WindowStateRepository(store)

    async def _scenario() -> WindowState | None:
        assert await repository.window_state_save("recipes", _build_window_state()) is True
        return await repository.window_state_load("recipes")

    assert asyncio.run(_scenario()) == _build_window_state()
    assert "window_state_recipes" in store.db_key_value_snapshot()


def test_service_window_state_load_treats_corrupt_record_as_absent() -> None:
    repository = WindowStateRepository(InMemoryKeyValueStore({"window_state_recipes": "{broken"}))

    assert asyncio.run(repository.window_state_load("recipes")) is None


def test_service_window_state_load_restores_old_and_off_screen_geometry() -> None:
    """Restore saved geometry as written, however far off-screen or old it is.

    Returns:
        None: Assertions validate the restored geometry.

    Raises:
        AssertionError: Raised when saved geometry is discarded or altered.
    """

    saved_state = WindowState(
        x=-1500.0,
        y=20.0,
        width=80.0,
        height=600.0,
        last_updated_utc=_CAPTURED_AT_UTC - timedelta(days=90),
    )
    store = InMemoryKeyValueStore({"window_state_recipes": saved_state.window_state_to_json()})

    restored_state = asyncio.run(WindowStateRepository(store).window_state_load("recipes"))

    assert restored_state == saved_state


def test_service_window_state_store_failures_never_raise() -> None:
    """Report read failures as absent state and write failures as False.

    Returns:
        None: Assertions validate failure isolation.

    Raises:
        AssertionError: Raised when store failures escape to callers.
    """

    repository = WindowStateRepository(_FailingKeyValueStore())

    assert asyncio.run(repository.window_state_load("recipes")) is None
    assert asyncio.run(repository.window_state_save("recipes", _build_window_state())) is False


def test_service_window_state_repository_validates_arguments() -> None:
    with pytest.raises(ValueError, match="store"):
        WindowStateRepository(None)  # type: ignore[arg-type]
