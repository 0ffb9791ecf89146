"""localekit: localized labels from SQLite packages, plus machine translation.

Usage:
    from localekit import InMemoryCache, Package, Translator

    cache = InMemoryCache()
    package = Package(cache=cache)
    await package.set_package("labels.db", "en-US")
    labels = await package.get_labels([1, 2, 3])
"""

from localekit.cache import CacheHandler, CacheKeyBuilder, InMemoryCache, create_cache
from localekit.errors import (
    CacheReadError,
    CacheWriteError,
    InvalidArgumentError,
    InvalidProviderResponseError,
    LocaleKitError,
    NoLocaleSetError,
    NotConnectedError,
    ProviderError,
    StoreError,
    TextTooLongError,
    UnsupportedLocaleError,
)
from localekit.labels import Package, PackageSession, ResolvedLocale, create_package
from localekit.store import LocaleInfo
from localekit.translation import (
    Provider,
    TextFormat,
    TranslationModel,
    Translator,
    create_translator,
)

__version__ = "1.1.0"

__all__ = [
    "CacheHandler",
    "CacheKeyBuilder",
    "CacheReadError",
    "CacheWriteError",
    "InMemoryCache",
    "InvalidArgumentError",
    "InvalidProviderResponseError",
    "LocaleInfo",
    "LocaleKitError",
    "NoLocaleSetError",
    "NotConnectedError",
    "Package",
    "PackageSession",
    "Provider",
    "ProviderError",
    "ResolvedLocale",
    "StoreError",
    "TextFormat",
    "TextTooLongError",
    "TranslationModel",
    "Translator",
    "UnsupportedLocaleError",
    "create_cache",
    "create_package",
    "create_translator",
]
