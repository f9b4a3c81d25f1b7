"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from typing import Protocol

from launcher.domain import HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class KeyValueStorePort(Protocol):
    """Port definition for asynchronous string key-value persistence."""

    async def db_key_value_get(self, key: str) -> str | None:
        """Return the stored value for a key.

        Args:
            key: Store key.

        Returns:
            str | None: Stored value, or None when the key is absent.

        Raises:
            KeyValueStoreError: Raised when the backing store cannot be read.
        """

    async def db_key_value_set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key.

        Args:
            key: Store key.
            value: Text value to persist.

        Returns:
            None: Persists as side effect.

        Raises:
            KeyValueStoreError: Raised when the backing store cannot be written.
        """


class KeyValueStoreError(RuntimeError):
    """Raised when the key-value backing store fails."""
