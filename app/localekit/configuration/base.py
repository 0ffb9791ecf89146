"""Shared base class for localekit settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class LocaleKitBaseSettings(BaseSettings):
    """Base class for every localekit settings section.

    All sections inherit from this class to ensure consistent configuration
    behavior (env file loading, case sensitivity, unknown variables ignored).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
