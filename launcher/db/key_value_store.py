"""SQLAlchemy-backed key-value store used for window-state persistence."""

from __future__ import annotations

import asyncio
from typing import Final

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import KeyValueStoreError, KeyValueStorePort

KEY_VALUE_TABLE_NAME: Final[str] = "launcher_key_value"


class SQLAlchemyKeyValueStore(KeyValueStorePort):
    """Key-value store over one relational table.

    Blocking SQLAlchemy calls run on worker threads so callers on the event
    loop are never blocked by database I/O.
    """

    def __init__(self, engine: Engine):
        """Initialize key-value store.

        Args:
            engine: SQLAlchemy engine used for all persistence operations.

        Returns:
            None: This initializer does not return a value.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_key_value_create_schema(self) -> None:
        """Create the key-value table when it does not exist.

        Used for local SQLite deployments that skip Alembic migrations.

        Returns:
            None: Creates schema as side effect.

        Raises:
            KeyValueStoreError: Raised when DDL execution fails.
        """

        try:
            with self._engine.begin() as connection:
                connection.execute(
                    text(
                        f"CREATE TABLE IF NOT EXISTS {KEY_VALUE_TABLE_NAME} ("
                        "store_key VARCHAR(255) PRIMARY KEY, "
                        "store_value TEXT NOT NULL, "
                        "updated_at_utc TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP"
                        ")"
                    )
                )
        except SQLAlchemyError as error:
            raise KeyValueStoreError("key-value schema creation failed") from error

    async def db_key_value_get(self, key: str) -> str | None:
        """Return the stored value for a key, or None when absent.

        Args:
            key: Store key.

        Returns:
            str | None: Stored value.

        Raises:
            ValueError: Raised when key is blank.
            KeyValueStoreError: Raised when the read fails.
        """

        normalized_key = self._validate_key(key)
        return await asyncio.to_thread(self._db_key_value_get_sync, normalized_key)

    async def db_key_value_set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key.

        Args:
            key: Store key.
            value: Text value to persist.

        Returns:
            None: Persists as side effect.

        Raises:
            ValueError: Raised when key is blank.
            KeyValueStoreError: Raised when the write fails.
        """

        normalized_key = self._validate_key(key)
        await asyncio.to_thread(self._db_key_value_set_sync, normalized_key, value)

    def _db_key_value_get_sync(self, key: str) -> str | None:
        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(f"SELECT store_value FROM {KEY_VALUE_TABLE_NAME} WHERE store_key = :store_key"),
                    {"store_key": key},
                ).first()
        except SQLAlchemyError as error:
            raise KeyValueStoreError(f"key-value read failed for key={key}") from error

        if row is None:
            return None
        return str(row[0])

    def _db_key_value_set_sync(self, key: str, value: str) -> None:
        try:
            with self._engine.begin() as connection:
                connection.execute(
                    text(
                        f"INSERT INTO {KEY_VALUE_TABLE_NAME} (store_key, store_value, updated_at_utc) "
                        "VALUES (:store_key, :store_value, CURRENT_TIMESTAMP) "
                        "ON CONFLICT (store_key) DO UPDATE SET "
                        "store_value = excluded.store_value, updated_at_utc = CURRENT_TIMESTAMP"
                    ),
                    {"store_key": key, "store_value": value},
                )
        except SQLAlchemyError as error:
            raise KeyValueStoreError(f"key-value write failed for key={key}") from error

    @staticmethod
    def _validate_key(key: str) -> str:
        normalized_key = key.strip()
        if not normalized_key:
            raise ValueError("key must not be blank")
        return normalized_key
