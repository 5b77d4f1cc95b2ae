"""Configuration management for the HoL core.

Settings are loaded with pydantic-settings from environment variables and
an optional .env file. Only the infrastructure around the value objects is
configurable (logging, the SQLite location, the dice seed); the rules
themselves are fixed in code.

Example:
    >>> from hol_core.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.storage.database_path
    PosixPath('data/hol_core.db')

Environment Variables:
    HOL_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HOL_JSON_LOGS: Emit JSON log lines instead of console output
    HOL_DATABASE_PATH: Path to the SQLite database file
    HOL_DICE_SEED: Seed for reproducible dice rolls
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hol_core.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the SQLite repository.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/hol_core.db"),
        description="Path to SQLite database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def reject_directory(cls, value: Path) -> Path:
        """Ensure the database path does not point at an existing directory.

        Args:
            value: The configured path.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path is an existing directory.
        """
        if value.is_dir():
            raise ConfigurationError(
                f"database_path ({value}) is a directory",
                config_key="database_path",
            )
        return value


class DiceSettings(BaseSettings):
    """Configuration for the dice engine.

    Attributes:
        seed: Optional seed for reproducible rolls.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOL_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seed: int | None = Field(
        default=None,
        description="Random seed for reproducible rolls",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        storage: SQLite repository settings.
        dice: Dice engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="HoL Core",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    dice: DiceSettings = Field(default_factory=DiceSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Primarily useful for testing or when environment variables have changed
    at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "DiceSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
