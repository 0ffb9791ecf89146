"""Cache handler factory."""

from typing import Optional

from localekit.cache.base import CacheHandler
from localekit.cache.memory import InMemoryCache
from localekit.configuration import LocaleKitSettings, get_settings
from localekit.logging import get_module_logger

logger = get_module_logger()


def create_cache(settings: Optional[LocaleKitSettings] = None) -> Optional[CacheHandler]:
    """Create the cache handler described by settings.

    Args:
        settings: Settings instance, defaults to the process-wide settings.

    Returns:
        An InMemoryCache, or None when caching is disabled.
    """
    settings = settings or get_settings()
    if not settings.cache.enabled:
        logger.info("cache_disabled")
        return None

    cache = InMemoryCache(
        namespace=settings.cache.namespace,
        ttl_seconds=settings.cache.ttl_seconds,
    )
    logger.info(
        "created_cache",
        backend="memory",
        namespace=settings.cache.namespace,
    )
    return cache
