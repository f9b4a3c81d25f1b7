"""Regression tests for the launcher Alembic migration chain."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect
from alembic import command
from alembic.config import Config

_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _migration_build_config(database_url: str) -> Config:
    """Create an Alembic config pointing at the project migration scripts.

    Args:
        database_url: SQLAlchemy URL of the target database.

    Returns:
        Config: Alembic configuration without an ini file.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    alembic_config = Config()
    alembic_config.set_main_option("script_location", str(_PROJECT_ROOT / "alembic"))
    alembic_config.set_main_option("sqlalchemy.url", database_url)
    return alembic_config


def test_db_migrations_upgrade_and_downgrade_key_value_table(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Create the key-value table on upgrade and drop it on downgrade.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate migration effects.

    Raises:
        AssertionError: Raised when schema state is incorrect.
    """

    database_url = f"sqlite:///{tmp_path / 'migrations.db'}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    alembic_config = _migration_build_config(database_url)

    command.upgrade(alembic_config, "head")

    engine = create_engine(database_url)
    try:
        inspector = inspect(engine)
        assert inspector.has_table("launcher_key_value")
        column_names = {column["name"] for column in inspector.get_columns("launcher_key_value")}
        assert column_names == {"store_key", "store_value", "updated_at_utc"}
        assert inspector.get_pk_constraint("launcher_key_value")["constrained_columns"] == ["store_key"]

        command.downgrade(alembic_config, "base")

        assert not inspect(engine).has_table("launcher_key_value")
    finally:
        engine.dispose()
