"""
Application configuration models and helpers.

Centralizes settings management so the session layer, the repositories and
the operational scripts share a consistent configuration surface.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Flavor(str, Enum):
    """Deployment environment the client talks to."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"


class ApiSettings(BaseSettings):
    """Remote API endpoints and transport options."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    production_url: str = Field(
        "https://production.endpoint.com", validation_alias="API_BASE_URL_PRODUCTION"
    )
    staging_url: str = Field(
        "https://staging.endpoint.com", validation_alias="API_BASE_URL_STAGING"
    )
    development_url: str = Field(
        "https://developement.endpoint.com",
        validation_alias="API_BASE_URL_DEVELOPMENT",
    )
    base_url_override: Optional[str] = Field(
        None,
        validation_alias="API_BASE_URL",
        description="Overrides the flavor-selected base URL when provided.",
    )
    timeout_seconds: float = Field(10.0, validation_alias="API_TIMEOUT_SECONDS")
    login_path: str = Field("auth/login", validation_alias="AUTH_LOGIN_PATH")
    logout_path: str = Field("auth/logout", validation_alias="AUTH_LOGOUT_PATH")
    profile_path: str = Field("auth/profile", validation_alias="AUTH_PROFILE_PATH")
    refresh_path: str = Field(
        "auth/refresh-token", validation_alias="AUTH_REFRESH_PATH"
    )
    log_bodies: bool = Field(
        False,
        validation_alias="API_LOG_BODIES",
        description="Log request and response bodies at DEBUG level.",
    )

    def url_for(self, flavor: Flavor) -> str:
        """Return the base URL for the given flavor."""
        if self.base_url_override:
            return self.base_url_override
        return {
            Flavor.PRODUCTION: self.production_url,
            Flavor.STAGING: self.staging_url,
            Flavor.DEVELOPMENT: self.development_url,
        }[flavor]


class StorageSettings(BaseSettings):
    """Local key-value storage and cache configuration."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    db_path: str = Field(".data/local_store.db", validation_alias="LOCAL_STORE_PATH")
    auth_key: str = Field("key_auth", validation_alias="AUTH_STORAGE_KEY")
    cache_ttl_seconds: float = Field(
        300.0,
        validation_alias="CACHE_TTL_SECONDS",
        description="Window during which cached resources are served without a remote call.",
    )

    @field_validator("cache_ttl_seconds")
    @classmethod
    def _non_negative_ttl(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Cache TTL must not be negative.")
        return value


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting the stored credential."
        ),
    )


class AppSettings(BaseSettings):
    """Root settings object for the client application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    flavor: Flavor = Field(Flavor.DEVELOPMENT, validation_alias="APP_FLAVOR")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    api: ApiSettings = Field(default_factory=ApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator("flavor", mode="before")
    @classmethod
    def _normalize_flavor(cls, value: object) -> object:
        """Accept flavor names regardless of case or surrounding whitespace."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def base_url(self) -> str:
        return self.api.url_for(self.flavor)

    @classmethod
    def from_env_file(cls, env_file: str | Path) -> "AppSettings":
        """Load every settings group from ``env_file`` instead of ``.env``."""
        return cls(
            _env_file=env_file,
            api=ApiSettings(_env_file=env_file),
            storage=StorageSettings(_env_file=env_file),
            security=SecuritySettings(_env_file=env_file),
        )


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "ApiSettings",
    "AppSettings",
    "Flavor",
    "SecuritySettings",
    "StorageSettings",
    "get_settings",
]
