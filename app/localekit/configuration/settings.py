"""localekit configuration settings - main aggregator."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from localekit.configuration.cache import CacheSettings
from localekit.configuration.package import PackageSettings
from localekit.configuration.translator import TranslatorSettings


class LocaleKitSettings(BaseSettings):
    """localekit configuration settings - main aggregator.

    Aggregates the section settings into a single configuration object:

    - **cache**: result cache behavior
    - **translator**: translation provider selection and credentials
    - **package**: default label database

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: Deployment environment, 'production' selects JSON logs
        VERBOSE: Log the underlying cause of every surfaced error

    Example:
        ```python
        from localekit.configuration import get_settings

        settings = get_settings()
        token = settings.translator.token
        if settings.is_production:
            ...
        ```
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    VERBOSE: bool = False

    cache: CacheSettings
    translator: TranslatorSettings
    package: PackageSettings

    @property
    def is_production(self) -> bool:
        """Check if running in production.

        Returns:
            True if ENVIRONMENT is 'production', False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize settings with automatic section instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "cache": CacheSettings,
            "translator": TranslatorSettings,
            "package": PackageSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> LocaleKitSettings:
    """Get the process-wide settings singleton.

    Returns:
        LocaleKitSettings: Cached settings instance loaded from environment.
    """
    return LocaleKitSettings()
