"""In-process cache handler."""

import time
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from localekit.cache.base import CacheHandler
from localekit.logging import get_module_logger

logger = get_module_logger()


class InMemoryCache(CacheHandler):
    """Dictionary-backed cache handler.

    Entries are stored under ``<namespace>:<key>``; ``invalidate_all`` only
    drops the entries of its own namespace, so several handlers can share one
    store dictionary. Expired entries read as missing.

    Suitable for single-process use and tests. Eviction beyond TTL expiry is
    left to the caller.
    """

    def __init__(
        self,
        namespace: str = "localeKit",
        ttl_seconds: Optional[int] = None,
        store: Optional[Dict[str, Tuple[Any, Optional[float]]]] = None,
    ):
        """Initialize the cache.

        Args:
            namespace: Prefix isolating this handler's keys.
            ttl_seconds: Default time-to-live, None keeps entries forever.
            store: Optional shared backing dictionary.
        """
        self.namespace = namespace
        self.ttl_seconds = ttl_seconds
        self._store: Dict[str, Tuple[Any, Optional[float]]] = (
            store if store is not None else {}
        )
        self._ready = True
        self._hits = 0
        self._misses = 0
        self._reads = 0
        self._writes = 0
        logger.debug(
            "initialized_memory_cache", namespace=namespace, ttl_seconds=ttl_seconds
        )

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def _lookup(self, key: str) -> Optional[Any]:
        entry = self._store.get(self._full_key(key))
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            del self._store[self._full_key(key)]
            return None
        return value

    async def pull_multi(
        self, keys: Iterable[str], allow_partial: bool = True
    ) -> Dict[str, Optional[Any]]:
        self._reads += 1
        result: Dict[str, Optional[Any]] = {}
        for key in keys:
            value = self._lookup(key)
            if value is None:
                self._misses += 1
                if not allow_partial:
                    raise KeyError(key)
            else:
                self._hits += 1
            result[key] = value
        return result

    async def push_multi(
        self, items: Mapping[str, Any], ttl_seconds: Optional[int] = None
    ) -> None:
        self._writes += 1
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        expires_at = time.monotonic() + ttl if ttl is not None else None
        for key, value in items.items():
            self._store[self._full_key(key)] = (value, expires_at)

    async def invalidate_all(self) -> None:
        prefix = f"{self.namespace}:"
        stale = [key for key in self._store if key.startswith(prefix)]
        for key in stale:
            del self._store[key]
        logger.info("memory_cache_invalidated", namespace=self.namespace, count=len(stale))

    def is_ready(self) -> bool:
        return self._ready

    def set_ready(self, ready: bool) -> None:
        """Mark the handler as available or unavailable."""
        self._ready = ready

    def get_stats(self) -> Dict[str, Any]:
        prefix = f"{self.namespace}:"
        return {
            "backend": "memory",
            "namespace": self.namespace,
            "entries": sum(1 for key in self._store if key.startswith(prefix)),
            "hits": self._hits,
            "misses": self._misses,
            "reads": self._reads,
            "writes": self._writes,
        }
