"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from launcher.adapters import HttpxReachabilityProber
from launcher.api import create_api_application
from launcher.config import LauncherSettings, config_load_settings
from launcher.db import SQLAlchemyDatabaseHealthService, SQLAlchemyKeyValueStore, db_create_engine
from launcher.service import ApplicationLauncherService, LocalIndexLocator, WindowStateRepository


def bootstrap_create_application(settings: LauncherSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional preloaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    db_health_service = SQLAlchemyDatabaseHealthService(engine=engine)
    key_value_store = SQLAlchemyKeyValueStore(engine=engine)
    if engine.dialect.name == "sqlite":
        key_value_store.db_key_value_create_schema()

    return create_api_application(
        settings=resolved_settings,
        db_health_service=db_health_service,
        launcher_service=bootstrap_create_launcher_service(resolved_settings, key_value_store),
    )


def bootstrap_create_launcher_service(
    settings: LauncherSettings,
    key_value_store: SQLAlchemyKeyValueStore,
) -> ApplicationLauncherService:
    """Build the launcher service from validated settings.

    Args:
        settings: Validated runtime settings.
        key_value_store: Persistence backing window-state storage.

    Returns:
        ApplicationLauncherService: Launcher wired with an httpx prober.

    Raises:
        ValueError: Raised when settings values violate service invariants.
    """

    local_index_locator = None
    if settings.apps_directory is not None:
        local_index_locator = LocalIndexLocator(apps_directory=settings.apps_directory)

    return ApplicationLauncherService(
        prober=HttpxReachabilityProber(timeout_seconds=settings.probe_timeout_seconds),
        window_state_repository=WindowStateRepository(store=key_value_store),
        local_index_locator=local_index_locator,
        health_check_interval_seconds=settings.health_check_interval_seconds,
        health_check_access_grace_seconds=settings.health_check_access_grace_seconds,
        restart_settle_seconds=settings.restart_settle_seconds,
        probe_user_agent=settings.probe_user_agent,
    )
