"""Typed runtime settings with dotenv support and startup validation."""

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class LauncherSettings(BaseSettings):
    """Application settings for API runtime and launcher supervision.

    Environment variable names map directly to field names in uppercase.
    Example: `health_check_interval_seconds` reads from `HEALTH_CHECK_INTERVAL_SECONDS`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        database_url: SQLAlchemy DSN for window-state persistence.
        log_level: Root logging level name.
        apps_directory: Optional directory holding locally deployed application folders.
        health_check_interval_seconds: Delay between scheduled health-check sweeps.
        health_check_access_grace_seconds: Recently accessed processes are skipped for this long.
        probe_timeout_seconds: Upper bound for one reachability probe.
        probe_user_agent: User-Agent header sent with reachability probes.
        restart_settle_seconds: Pause between stop and launch during restart.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="127.0.0.1")
    application_port: int = Field(default=8765, ge=1, le=65535)
    database_url: str = Field(default="sqlite:///./launcher_state.db")
    log_level: str = Field(default="INFO")
    apps_directory: Path | None = Field(default=None)
    health_check_interval_seconds: float = Field(default=300.0, gt=0)
    health_check_access_grace_seconds: float = Field(default=300.0, ge=0)
    probe_timeout_seconds: float = Field(default=10.0, gt=0)
    probe_user_agent: str = Field(default="HouseholdAI-Dashboard/1.0", min_length=1)
    restart_settle_seconds: float = Field(default=0.5, ge=0)

    @field_validator("database_url", "probe_user_agent")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("log_level must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG")
        return normalized_value

    @field_validator("probe_timeout_seconds")
    @classmethod
    def _validate_probe_timeout_bounds(cls, value: float, info) -> float:
        interval_seconds = float(info.data.get("health_check_interval_seconds", 300.0))
        if value > interval_seconds:
            raise ValueError("probe_timeout_seconds must be less than or equal to health_check_interval_seconds")
        return value


class DatabaseUrlSettings(BaseSettings):
    """Minimal settings model used by migration tooling.

    This model intentionally validates only database connectivity inputs so
    schema migration commands can run without requiring full runtime
    application settings.

    Attributes:
        database_url: SQLAlchemy DSN for schema migrations.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    database_url: str = Field(default="sqlite:///./launcher_state.db")


def config_load_settings() -> LauncherSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        LauncherSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return LauncherSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_load_database_url() -> str:
    """Load and validate only the database URL setting.

    Returns:
        str: Non-empty database URL for migration and db tooling.

    Raises:
        SettingsLoadError: Raised when database URL cannot be loaded.
    """

    try:
        database_settings = DatabaseUrlSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Database URL configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error

    database_url = str(database_settings.database_url).strip()
    if not database_url:
        raise SettingsLoadError("Database URL configuration validation failed. DATABASE_URL must not be blank.")
    return database_url
