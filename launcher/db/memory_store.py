"""Process-local key-value store for tests and ephemeral deployments."""

from __future__ import annotations

from .interfaces import KeyValueStorePort


class InMemoryKeyValueStore(KeyValueStorePort):
    """Dictionary-backed key-value store; contents are lost on exit."""

    def __init__(self, initial_values: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial_values or {})

    async def db_key_value_get(self, key: str) -> str | None:
        return self._values.get(key)

    async def db_key_value_set(self, key: str, value: str) -> None:
        self._values[key] = value

    def db_key_value_snapshot(self) -> dict[str, str]:
        """Return a copy of all stored values."""

        return dict(self._values)
