# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the SchoolDesk
client. Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.backend_api.base_url)
    'http://localhost:3001'
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendAPISettings(BaseSettings):
    """SchoolDesk REST backend configuration.

    Attributes:
        base_url: Base URL every endpoint path is appended to.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="BACKEND_API_",
        extra="ignore",
    )

    base_url: str = "http://localhost:3001"
    timeout: float = 30.0

    @property
    def normalized_base_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.base_url.rstrip("/")


class SessionSettings(BaseSettings):
    """Client session storage configuration.

    The session file holds the bearer token, the signed-in user and the
    selected school id between CLI invocations.

    Attributes:
        path: Location of the JSON session file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        extra="ignore",
    )

    path: Path = Path.home() / ".schooldesk" / "session.json"


class FallbackSettings(BaseSettings):
    """Bundled demo data configuration.

    When enabled, list and dashboard fetches that fail with an API error
    return bundled demo data tagged as ``fallback`` instead of raising.

    Attributes:
        enabled: Whether demo data may replace failed fetches.
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLBACK_",
        extra="ignore",
    )

    enabled: bool | None = None


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        backend_api: REST backend settings.
        session: Session storage settings.
        fallback: Demo data fallback settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Subsettings - loaded with their own env prefixes
    backend_api: BackendAPISettings = Field(default_factory=BackendAPISettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    fallback: FallbackSettings = Field(default_factory=FallbackSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If demo data fallback is enabled in production.
        """
        if self.environment == "production" and self.fallback.enabled:
            raise ValueError(
                "Demo data fallback cannot be enabled in production. "
                "Unset FALLBACK_ENABLED environment variable."
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def fallback_enabled(self) -> bool:
        """Whether failed fetches may be replaced by demo data.

        An explicit FALLBACK_ENABLED wins; otherwise demo data is allowed
        everywhere except production.
        """
        if self.fallback.enabled is not None:
            return self.fallback.enabled
        return not self.is_production


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
