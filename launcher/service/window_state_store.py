"""Window-state persistence adapter over an injected key-value store."""

from __future__ import annotations

import logging

from launcher.db import KeyValueStoreError, KeyValueStorePort
from launcher.domain import WindowState, window_state_parse_json

logger = logging.getLogger(__name__)

WINDOW_STATE_KEY_PREFIX = "window_state_"


def window_state_store_key(application_id: str) -> str:
    """Return the persistence key for one application's window state."""

    return f"{WINDOW_STATE_KEY_PREFIX}{application_id}"


class WindowStateRepository:
    """Reads and writes window states keyed by application identifier.

    Reads never raise: absent, corrupt or unreadable records all mean "no
    saved state". Saved geometry is restored as written; deciding whether it
    still fits the current screens is left to the hosting surface through
    `WindowState.window_state_is_plausible`. Writes report failure through
    their return value.
    """

    def __init__(self, store: KeyValueStorePort):
        if store is None:
            raise ValueError("store must not be None")
        self._store = store

    async def window_state_load(self, application_id: str) -> WindowState | None:
        """Restore the saved window state for an application.

        Args:
            application_id: Application identifier.

        Returns:
            WindowState | None: Saved state, or None when nothing usable is stored.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        try:
            serialized_state = await self._store.db_key_value_get(window_state_store_key(application_id))
        except KeyValueStoreError:
            logger.warning("Could not read window state for %s", application_id, exc_info=True)
            return None

        window_state = window_state_parse_json(serialized_state)
        if window_state is None and serialized_state is not None:
            logger.warning("Ignoring corrupt window state for %s", application_id)
        return window_state

    async def window_state_save(self, application_id: str, window_state: WindowState) -> bool:
        """Persist the window state for an application.

        Args:
            application_id: Application identifier.
            window_state: State to persist.

        Returns:
            bool: True when the write succeeded.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        try:
            await self._store.db_key_value_set(
                window_state_store_key(application_id),
                window_state.window_state_to_json(),
            )
        except KeyValueStoreError:
            logger.warning("Failed to save window state for %s", application_id, exc_info=True)
            return False
        return True
