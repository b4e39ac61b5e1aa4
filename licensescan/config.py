# -*- coding: utf-8 -*-
"""Location: ./licensescan/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

License scanner configuration.

All settings can be overridden via environment variables with the
LICENSESCAN_ prefix, for example LICENSESCAN_CONFIDENCE_THRESHOLD=0.8 or
LICENSESCAN_OPTIMIZE=true.
"""

# Standard
from functools import lru_cache
import logging
from typing import Any

# Third-Party
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Scanner configuration read from the environment.

    Examples:
        >>> s = Settings(_env_file=None)
        >>> (s.confidence_threshold, s.shallow_limit, s.optimize, s.max_passes)
        (0.9, 0.99, False, 10)
        >>> Settings(log_level="debug", _env_file=None).log_level
        'DEBUG'
    """

    confidence_threshold: float = Field(default=0.9, ge=0.0, le=1.0, description="Minimum score to report a license, overall or per region")
    shallow_limit: float = Field(default=0.99, ge=0.0, le=1.0, description="Overall score above which region discovery is skipped")
    optimize: bool = Field(default=False, description="Search for multiple licenses embedded in a document")
    max_passes: int = Field(default=10, ge=0, description="Upper bound on region discovery passes per document")
    store_cache: str | None = Field(default=None, description="Path to a license store cache built with `licensescan cache load-spdx`")
    log_level: str = Field(default="INFO", description="Logging level for scanner components")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: Any) -> str:
        """Upper-case and validate the log level.

        Args:
            value: Raw level name.

        Returns:
            str: The upper-cased level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("store_cache", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty cache path from the environment as unset.

        Args:
            value: Raw value.

        Returns:
            None for empty strings, otherwise the value unchanged.
        """
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    model_config = SettingsConfigDict(env_prefix="LICENSESCAN_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached scanner settings instance.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> get_settings() is get_settings()
        True
    """
    return Settings()


class LazySettingsWrapper:
    """Lazily initialize the settings singleton on attribute access."""

    @staticmethod
    def cache_clear() -> None:
        """Clear the cached settings so the next access re-reads the environment."""
        get_settings.cache_clear()

    def __getattr__(self, key: str) -> Any:
        """Forward attribute access to the real settings object.

        Args:
            key: The setting name.

        Returns:
            Any: The value of the setting.
        """
        return getattr(get_settings(), key)


settings = LazySettingsWrapper()
