"""Factory for label packages configured from settings."""

from typing import Optional

from localekit.cache.base import CacheHandler
from localekit.configuration import LocaleKitSettings, get_settings
from localekit.labels.package import Package
from localekit.logging import get_module_logger

logger = get_module_logger()


async def create_package(
    settings: Optional[LocaleKitSettings] = None,
    cache: Optional[CacheHandler] = None,
) -> Package:
    """Create a Package and, if configured, connect it.

    When ``PACKAGE_PATH`` is set the database is opened right away, and when
    ``PACKAGE_LOCALE`` is set as well the locale is resolved.

    Args:
        settings: Settings instance, defaults to the process-wide settings.
        cache: Cache handler to inject, None disables caching.

    Returns:
        Package: Configured package.

    Usage:
        package = await create_package(cache=create_cache())
        labels = await package.get_labels([1, 2])
    """
    settings = settings or get_settings()
    package = Package(
        cache=cache,
        use_cache=settings.cache.enabled,
        verbose=settings.VERBOSE,
    )

    path = settings.package.path
    if path:
        if settings.package.locale:
            await package.set_package(
                path, settings.package.locale, strict=settings.package.strict
            )
        else:
            await package.set_path(path)
        logger.info(
            "package_created",
            path=path,
            locale=package.locale,
            fallback=package.is_fallback,
        )
    else:
        logger.info("package_created_unconnected")

    return package
