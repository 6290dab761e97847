"""Configuration settings for camelk_reconciler.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from camelk_reconciler.types import BuildStrategy


def _default_db_url() -> str:
    """Return the default database URL (SQLite)."""
    db_path = Path.home() / ".local" / "share" / "camel-k-reconciler" / "db.sqlite"
    return f"sqlite:///{db_path}"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the CAMELK_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMELK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    namespace: str = Field(
        default="default",
        description="Namespace used when a resource does not declare one",
    )

    # Builds
    build_strategy: BuildStrategy = Field(
        default=BuildStrategy.POD,
        description="Strategy used to execute builds (pod or routine)",
    )
    max_concurrent_builds: int = Field(
        default=2,
        ge=1,
        le=32,
        description="Maximum builds executing at the same time",
    )

    # Catalog and persistence
    catalog_path: Path | None = Field(
        default=None,
        description="Camel catalog YAML file (uses the built-in catalog if not set)",
    )
    db_url: str = Field(
        default_factory=_default_db_url,
        description="Database URL for build records",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
