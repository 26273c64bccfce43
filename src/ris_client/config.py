# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Client settings using Pydantic Settings.

Every setting can be overridden through a ``RIS_``-prefixed environment
variable (``RIS_MERCHANT_ID``, ``RIS_URL``, ``RIS_KHASH_SALT`` ...) or a
``.env`` file in the working directory.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "RIS_"

DEFAULT_RIS_VERSION = "0695"


class Settings(BaseSettings):
    """RIS client configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: Literal["dev", "staging", "prod"] = "dev"

    # Merchant
    merchant_id: int | None = None
    version: str = DEFAULT_RIS_VERSION

    # RIS endpoint
    url: str | None = None
    connect_timeout: int | None = None  # milliseconds

    # Payment token hashing
    khash_salt: str | None = None

    # Authentication: API key, or client certificate (deprecated)
    api_key: str | None = None
    certificate_file: str | None = None
    private_key_password: str | None = None

    # Validation schema override (defaults to the packaged validate.yaml)
    schema_path: str | None = None

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("version")
    @classmethod
    def default_blank_version(cls, v: str) -> str:
        """Fall back to the built-in RIS version when left blank."""
        return v or DEFAULT_RIS_VERSION

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @property
    def uses_api_key(self) -> bool:
        """Check if API key authentication is configured."""
        return bool(self.api_key)

    @staticmethod
    def env_name(field: str) -> str:
        """Return the environment variable backing a settings field."""
        return f"{ENV_PREFIX}{field.upper()}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
