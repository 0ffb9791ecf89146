"""Cache handler abstract base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional


class CacheHandler(ABC):
    """Capability interface consumed by label packages and translators.

    Implementations are injected at construction time. Every call is a single
    round trip to the backend: keys are always read and written in bulk.
    Implementations are responsible for namespacing their keys so several
    applications can share one backend.
    """

    @abstractmethod
    async def pull_multi(
        self, keys: Iterable[str], allow_partial: bool = True
    ) -> Dict[str, Optional[Any]]:
        """Read several entries in one call.

        Args:
            keys: Cache keys to read.
            allow_partial: If True, missing keys map to None. If False, a
                missing key raises KeyError.

        Returns:
            Mapping of every requested key to its value or None.
        """
        pass

    @abstractmethod
    async def push_multi(
        self, items: Mapping[str, Any], ttl_seconds: Optional[int] = None
    ) -> None:
        """Write several entries in one call.

        Args:
            items: Mapping of cache key to value.
            ttl_seconds: Optional time-to-live overriding the handler default.
        """
        pass

    @abstractmethod
    async def invalidate_all(self) -> None:
        """Drop every entry in this handler's namespace."""
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        """Check whether the backend can serve requests.

        Returns:
            True if the handler is usable, False otherwise.
        """
        pass

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dict with cache statistics (implementation-specific).
        """
        return {}
