"""Package identifier used to namespace cache keys per label database."""

import hashlib
import weakref

from localekit.logging import get_module_logger
from localekit.store.connector import StoreConnector

logger = get_module_logger()

IDENTIFIER_META_KEY = "identifier"


def derive_identifier(path: str) -> str:
    """Derive a stable identifier from the database path string."""
    return hashlib.sha256(path.encode("utf-8")).hexdigest()


class PackageIdentifierManager:
    """Resolves the cache namespace identifier of a label database.

    The identifier is read from the ``meta`` table (key ``identifier``) when
    present and non-empty, otherwise derived from the path. It is computed once
    per connection and never written back to the database.
    """

    def __init__(self):
        self._identifiers: "weakref.WeakKeyDictionary[StoreConnector, str]" = (
            weakref.WeakKeyDictionary()
        )

    async def identify(self, connector: StoreConnector) -> str:
        """Return the identifier for ``connector``.

        Raises:
            StoreError: If the meta table exists but cannot be read.
        """
        cached = self._identifiers.get(connector)
        if cached is not None:
            return cached

        value = await connector.get_meta_value(IDENTIFIER_META_KEY)
        if isinstance(value, str) and value != "":
            identifier = value
            source = "meta"
        else:
            identifier = derive_identifier(connector.path)
            source = "path_hash"

        self._identifiers[connector] = identifier
        logger.debug("package_identifier_resolved", source=source, path=connector.path)
        return identifier
