"""Database health service for window-state store connectivity checks."""

from sqlalchemy import Engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from launcher.domain import HealthStatus

from .interfaces import DatabaseHealthPort
from .key_value_store import KEY_VALUE_TABLE_NAME


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Health service verifying connectivity and presence of the key-value table."""

    def __init__(self, engine: Engine):
        """Initialize database health service.

        Args:
            engine: SQLAlchemy engine used for connectivity checks.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the target database URL with credentials masked.

        Returns:
            str: Rendered engine URL string.

        Raises:
            RuntimeError: Raised if URL rendering fails.
        """

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Verify connectivity and report whether the window-state table exists.

        Returns:
            HealthStatus: `ok` when the table is present, `uninitialized` when
                the database answers but migrations have not run.

        Raises:
            ConnectionError: Raised when connectivity check fails.
        """

        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                table_present = inspect(connection).has_table(KEY_VALUE_TABLE_NAME)
        except SQLAlchemyError as error:
            raise ConnectionError("database connectivity check failed") from error

        if not table_present:
            return HealthStatus(status="uninitialized", detail=f"table {KEY_VALUE_TABLE_NAME} is missing")
        return HealthStatus(status="ok", detail="window state store reachable")
