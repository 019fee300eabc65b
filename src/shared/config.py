"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from src.shared.constants import (
    ANDROID_APP_STORE_URL,
    APP_VERSION_HEADER,
    DEFAULT_EXEMPT_PATHS,
    DEFAULT_LATEST_APP_VERSION,
    DEFAULT_MINIMUM_APP_VERSION,
    DEFAULT_TRANSITION_MAX_VERSION,
    IOS_APP_STORE_URL,
)


class SharedConfig(BaseSettings):
    """Base configuration shared across all services."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class VersionGateConfig(SharedConfig):
    """Configuration for the app-version gate."""
    minimum_app_version: str = Field(
        default=DEFAULT_MINIMUM_APP_VERSION,
        validation_alias="MINIMUM_APP_VERSION",
    )
    latest_app_version: str = Field(
        default=DEFAULT_LATEST_APP_VERSION,
        validation_alias="LATEST_APP_VERSION",
    )
    transition_max_version: str = Field(
        default=DEFAULT_TRANSITION_MAX_VERSION,
        validation_alias="TRANSITION_MAX_VERSION",
    )
    ios_app_store_url: str = Field(
        default=IOS_APP_STORE_URL, validation_alias="IOS_APP_STORE_URL"
    )
    android_app_store_url: str = Field(
        default=ANDROID_APP_STORE_URL, validation_alias="ANDROID_APP_STORE_URL"
    )
    exempt_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXEMPT_PATHS),
        validation_alias="EXEMPT_PATHS",
    )
    version_header: str = Field(
        default=APP_VERSION_HEADER, validation_alias="VERSION_HEADER"
    )
    update_required: bool = Field(default=True, validation_alias="UPDATE_REQUIRED")

    @field_validator(
        "minimum_app_version", "latest_app_version", "transition_max_version"
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("version must not be empty")
        return value

