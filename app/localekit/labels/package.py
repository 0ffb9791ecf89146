"""Label package: localized labels read from a SQLite database.

``Package`` is the entry point for label retrieval. It owns the current
``PackageSession`` and replaces it as a whole whenever the database path or
the locale changes.

Usage:
    from localekit import InMemoryCache, Package

    package = Package(cache=InMemoryCache())
    locale = await package.set_package("labels.db", "en-US")
    labels = await package.get_labels([1, 2, 3])
"""

from typing import Dict, Iterable, List, Optional, Union

from localekit.cache.base import CacheHandler
from localekit.cache.key_builder import CacheKeyBuilder
from localekit.errors import (
    InvalidArgumentError,
    NoLocaleSetError,
    NotConnectedError,
    StoreError,
    UnsupportedLocaleError,
)
from localekit.labels.fetcher import LabelFetcher, normalize_label_ids
from localekit.labels.models import PackageSession
from localekit.labels.resolvers import LocaleResolver
from localekit.logging import get_module_logger
from localekit.store.connector import StoreConnector
from localekit.store.identifier import PackageIdentifierManager
from localekit.store.models import LabelId, LocaleInfo

logger = get_module_logger()


class Package:
    """Localized label package backed by a read-only SQLite database.

    Attributes:
        cache: Injected cache handler, None to disable caching.
        use_cache: Whether labels are looked up in the cache first.
        verbose: Log the underlying cause of every surfaced error.
    """

    def __init__(
        self,
        cache: Optional[CacheHandler] = None,
        use_cache: bool = True,
        verbose: bool = False,
        identifier_manager: Optional[PackageIdentifierManager] = None,
        key_builder: Optional[CacheKeyBuilder] = None,
    ):
        self.cache = cache
        self.use_cache = use_cache
        self.verbose = verbose
        self._identifier_manager = identifier_manager or PackageIdentifierManager()
        self._key_builder = key_builder or CacheKeyBuilder()
        self._session: Optional[PackageSession] = None

    @property
    def session(self) -> Optional[PackageSession]:
        return self._session

    @property
    def connected(self) -> bool:
        return self._session is not None and self._session.connector.connected

    @property
    def path(self) -> str:
        return self._session.path if self._session else ""

    @property
    def locale(self) -> str:
        """Effective locale code, or an empty string if none is set."""
        if self._session is None or self._session.locale is None:
            return ""
        return self._session.locale

    @property
    def locale_id(self) -> Optional[int]:
        return self._session.locale_id if self._session else None

    @property
    def is_fallback(self) -> bool:
        """True if the current locale was reached through its language family."""
        return self._session.is_fallback if self._session else False

    @property
    def package_identifier(self) -> str:
        return self._require_session().package_identifier

    def cache_ready(self) -> bool:
        return self.use_cache and self.cache is not None and self.cache.is_ready()

    def _require_session(self) -> PackageSession:
        if not self.connected:
            raise NotConnectedError("Not connected to the package.")
        return self._session

    def _report(self, event: str, error: Exception) -> None:
        if self.verbose:
            logger.warning(event, error=str(error), error_type=type(error).__name__)

    async def set_path(self, path: str) -> None:
        """Connect to the database at ``path``.

        On success the previous connection is closed and replaced by a fresh
        session with no locale. On failure the previous session is kept.

        Raises:
            InvalidArgumentError: If ``path`` is empty or not a string.
            StoreError: If the database cannot be opened or identified.
        """
        if not isinstance(path, str) or path == "":
            raise InvalidArgumentError("Invalid path.")

        try:
            connector = await StoreConnector.open(path)
        except StoreError as e:
            self._report("package_connection_failed", e.__cause__ or e)
            raise StoreError("An error occurred while connecting to the package.") from e

        try:
            identifier = await self._identifier_manager.identify(connector)
        except StoreError as e:
            connector.close()
            self._report("package_identifier_failed", e.__cause__ or e)
            raise StoreError("Unable to get the package identifier.") from e

        previous = self._session
        self._session = PackageSession(
            path=path,
            connector=connector,
            package_identifier=identifier,
        )
        if previous is not None:
            previous.connector.close()
        logger.info("package_connected", path=path)

    async def set_locale(self, locale: str, strict: bool = False) -> str:
        """Resolve ``locale`` and make it the current locale.

        Args:
            locale: Locale code, e.g. "en-US".
            strict: Disable the language-family fallback ("en-US" -> "en").

        Returns:
            The effective locale code, useful when a fallback was picked.

        Raises:
            InvalidArgumentError: If ``locale`` is empty.
            NotConnectedError: If no package is connected.
            UnsupportedLocaleError: If the locale is not available.
            StoreError: If the database query fails.
        """
        if not isinstance(locale, str) or locale == "":
            raise InvalidArgumentError("Invalid locale code.")
        session = self._require_session()

        try:
            resolved = await LocaleResolver(session.connector).resolve(locale, strict)
        except StoreError as e:
            self._report("locale_resolution_failed", e.__cause__ or e)
            raise

        # The session may have been replaced while the query was running
        if self._session is session:
            self._session = session.with_locale(resolved)
        return resolved.code

    async def set_package(self, path: str, locale: str, strict: bool = False) -> str:
        """Connect to ``path`` and resolve ``locale`` in one call.

        Returns:
            The effective locale code.
        """
        if not isinstance(path, str) or path == "":
            raise InvalidArgumentError("Invalid path.")
        if not isinstance(locale, str) or locale == "":
            raise InvalidArgumentError("Invalid locale code.")
        await self.set_path(path)
        return await self.set_locale(locale, strict)

    def set_package_identifier(self, identifier: Optional[str]) -> "Package":
        """Override the cache identifier of the current connection.

        The identifier is not saved within the database; the next ``set_path``
        derives a fresh one. Passing None clears it.
        """
        session = self._require_session()
        identifier = identifier if isinstance(identifier, str) else ""
        self._session = session.with_identifier(identifier)
        return self

    async def get_supported_locales(self) -> List[LocaleInfo]:
        """Return every locale stored in the package."""
        session = self._require_session()
        try:
            return await session.connector.list_locales()
        except StoreError as e:
            self._report("list_locales_failed", e.__cause__ or e)
            raise

    async def is_locale_supported(self, locale: str, strict: bool = False) -> bool:
        """Check if ``locale`` (or, unless strict, its family) is available.

        Raises:
            InvalidArgumentError: If ``locale`` is empty.
            NotConnectedError: If no package is connected.
            StoreError: If the database query fails.
        """
        if not isinstance(locale, str) or locale == "":
            raise InvalidArgumentError("Invalid locale code.")
        session = self._require_session()
        try:
            await LocaleResolver(session.connector).resolve(locale, strict)
        except UnsupportedLocaleError:
            return False
        return True

    async def get_labels(
        self,
        ids: Union[LabelId, Iterable[LabelId]],
        fresh: bool = False,
    ) -> Dict[LabelId, str]:
        """Return label texts for the current locale.

        Args:
            ids: Label ids, or a single id.
            fresh: Read from the database without looking in the cache.

        Returns:
            Mapping of label id to text; ids without a row are absent.

        Raises:
            InvalidArgumentError: If no valid id is given.
            NotConnectedError: If no package is connected.
            NoLocaleSetError: If no locale has been set.
            StoreError: If the database query fails.
            CacheReadError: If reading the cache fails.
            CacheWriteError: If backfilling the cache fails.
        """
        label_ids = normalize_label_ids(ids)
        session = self._require_session()
        if session.locale_id is None:
            raise NoLocaleSetError("No locale defined.")

        fetcher = LabelFetcher(
            session.connector,
            cache=self.cache if self.use_cache else None,
            key_builder=self._key_builder,
            verbose=self.verbose,
        )
        try:
            return await fetcher.fetch(
                label_ids,
                session.locale_id,
                session.package_identifier,
                bypass_cache=fresh,
            )
        except StoreError as e:
            self._report("labels_query_failed", e.__cause__ or e)
            raise

    async def get_all_labels(self) -> Dict[LabelId, str]:
        """Return every label of the current locale, bypassing the cache.

        Raises:
            NotConnectedError: If no package is connected.
            NoLocaleSetError: If no locale has been set.
            StoreError: If the database query fails.
        """
        session = self._require_session()
        if session.locale_id is None:
            raise NoLocaleSetError("No locale defined.")
        try:
            rows = await session.connector.fetch_all_labels(session.locale_id)
        except StoreError as e:
            self._report("labels_query_failed", e.__cause__ or e)
            raise
        return {row.id: row.value for row in rows}
