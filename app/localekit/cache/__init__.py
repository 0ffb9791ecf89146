"""Result cache for labels, translations and language detections.

Usage:

    from localekit.cache import InMemoryCache

    cache = InMemoryCache(namespace="myapp")
    package = Package(cache=cache)
"""

from localekit.cache.base import CacheHandler
from localekit.cache.factory import create_cache
from localekit.cache.key_builder import CacheKeyBuilder
from localekit.cache.memory import InMemoryCache

__all__ = [
    "CacheHandler",
    "CacheKeyBuilder",
    "InMemoryCache",
    "create_cache",
]
