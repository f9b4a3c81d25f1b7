"""Database layer package for all SQL and persistence boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import DatabaseHealthPort, KeyValueStoreError, KeyValueStorePort
from .key_value_store import KEY_VALUE_TABLE_NAME, SQLAlchemyKeyValueStore
from .memory_store import InMemoryKeyValueStore
from .session import db_create_engine

__all__ = [
	"DatabaseHealthPort",
	"InMemoryKeyValueStore",
	"KEY_VALUE_TABLE_NAME",
	"KeyValueStoreError",
	"KeyValueStorePort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyKeyValueStore",
	"db_create_engine",
]
