"""Result cache settings."""

from typing import Optional

from pydantic import Field

from localekit.configuration.base import LocaleKitBaseSettings


class CacheSettings(LocaleKitBaseSettings):
    """Cache configuration shared by label packages and translators.

    Environment Variables:
        CACHE_ENABLED: Consult the cache before the store or provider (default: True)
        CACHE_NAMESPACE: Prefix isolating localekit keys in a shared cache (default: localeKit)
        CACHE_TTL_SECONDS: Time-to-live for cached entries, unset keeps entries forever

    Example:
        ```python
        from localekit.configuration import get_settings

        settings = get_settings()
        if settings.cache.enabled:
            namespace = settings.cache.namespace
        ```
    """

    enabled: bool = Field(default=True, alias="CACHE_ENABLED")
    namespace: str = Field(default="localeKit", alias="CACHE_NAMESPACE")
    ttl_seconds: Optional[int] = Field(default=None, alias="CACHE_TTL_SECONDS")
