"""Configuration management for the tactics combat-unit engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.
Engine policies that the game design leaves open (secondary class blending,
slot category enforcement) are exposed here as settings rather than hard-coded.

Example:
    >>> from tactics_core.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.engine.secondary_class_blending
    'none'

Environment Variables:
    TACTICS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TACTICS_ENGINE_SECONDARY_CLASS_BLENDING: 'none' or 'multiply'
    TACTICS_ENGINE_ENFORCE_SLOT_CATEGORIES: Require matching ability category per slot
    TACTICS_CONTENT_CONTENT_PATH: Directory containing content YAML files
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tactics_core.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Policies for the stat pipeline and ability slots.

    Attributes:
        secondary_class_blending: How the secondary class feeds effective stats.
            ``none`` ignores it; ``multiply`` adds its grants and multiplies in
            its multipliers after the primary class.
        enforce_slot_categories: Require an ability's category to match the
            slot it is assigned to.
        clamp_stats_at_zero: Clamp effective stats so they never go negative.
    """

    model_config = SettingsConfigDict(
        env_prefix="TACTICS_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secondary_class_blending: Literal["none", "multiply"] = Field(
        default="none",
        description="Secondary class contribution to effective stats",
    )
    enforce_slot_categories: bool = Field(
        default=True,
        description="Reject slot assignments whose ability category does not match",
    )
    clamp_stats_at_zero: bool = Field(
        default=True,
        description="Never report a negative effective stat",
    )


class ContentSettings(BaseSettings):
    """Configuration for content definition loading.

    Attributes:
        content_path: Directory holding abilities.yaml, equipment.yaml and
            classes.yaml. ``None`` uses the content bundled with the package.
        strict_references: Fail the load when a class references an unknown
            ability instead of skipping it with a warning.
    """

    model_config = SettingsConfigDict(
        env_prefix="TACTICS_CONTENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    content_path: Path | None = Field(
        default=None,
        description="Directory containing content YAML files",
    )
    strict_references: bool = Field(
        default=False,
        description="Treat unknown ability references as load errors",
    )

    @field_validator("content_path", mode="after")
    @classmethod
    def ensure_directory(cls, value: Path | None) -> Path | None:
        """Ensure a configured content path points at a directory.

        Args:
            value: The path to validate.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path exists but is not a directory.
        """
        if value is not None and value.exists() and not value.is_dir():
            raise ConfigurationError(
                f"content_path must be a directory, got {value}",
                config_key="content_path",
            )
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines instead of console output.
        engine: Stat pipeline and slot policies.
        content: Content loading settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TACTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Tactics Core",
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
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
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
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "ContentSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
