"""Unit tests for the Package facade."""

from unittest.mock import AsyncMock

import pytest

from localekit.cache import CacheKeyBuilder
from localekit.configuration import LocaleKitSettings, PackageSettings
from localekit.errors import (
    InvalidArgumentError,
    NoLocaleSetError,
    NotConnectedError,
    StoreError,
    UnsupportedLocaleError,
)
from localekit.labels import Package, create_package
from localekit.store import LocaleInfo, derive_identifier

pytestmark = pytest.mark.unit


class TestPackageConnection:
    """Tests for set_path and set_package."""

    @pytest.mark.asyncio
    async def test_set_package_with_fallback(self, label_db_path):
        """set_package returns the effective locale."""
        package = Package()
        effective = await package.set_package(label_db_path, "en-US")

        assert effective == "en"
        assert package.locale == "en"
        assert package.locale_id == 1
        assert package.is_fallback is True
        assert package.path == label_db_path
        assert package.connected is True

    @pytest.mark.asyncio
    async def test_set_path_leaves_locale_unset(self, label_db_path):
        """A fresh connection has no locale."""
        package = Package()
        await package.set_path(label_db_path)

        assert package.locale == ""
        assert package.locale_id is None
        assert package.package_identifier == derive_identifier(label_db_path)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["", None])
    async def test_set_path_invalid(self, path):
        """Empty paths are rejected."""
        with pytest.raises(InvalidArgumentError):
            await Package().set_path(path)

    @pytest.mark.asyncio
    async def test_failed_set_path_keeps_previous_session(self, label_db_path, tmp_path):
        """A database that cannot be opened leaves the current one in place."""
        package = Package()
        await package.set_package(label_db_path, "en")
        session = package.session

        with pytest.raises(StoreError):
            await package.set_path(str(tmp_path / "missing.db"))

        assert package.session is session
        assert package.connected is True
        assert await package.get_labels([2]) == {2: "Hello"}

    @pytest.mark.asyncio
    async def test_switching_path_closes_previous_connection(
        self, label_db_path, other_label_db_path
    ):
        """The previous connector is closed once the new one is in place."""
        package = Package()
        await package.set_package(label_db_path, "en")
        previous = package.session.connector

        locale = await package.set_package(other_label_db_path, "de-AT")

        assert previous.connected is False
        assert locale == "de"
        assert await package.get_labels([2]) == {2: "Hallo"}

    @pytest.mark.asyncio
    async def test_package_identifier_from_meta(self, label_db_with_meta):
        """The meta table identifier is used when present."""
        package = Package()
        await package.set_path(label_db_with_meta)
        assert package.package_identifier == "pkg-v1"

    def test_package_identifier_requires_connection(self):
        """The identifier is only available while connected."""
        with pytest.raises(NotConnectedError):
            Package().package_identifier


class TestPackageLocale:
    """Tests for locale management."""

    @pytest.mark.asyncio
    async def test_set_locale_requires_connection(self):
        """Locales cannot be set before connecting."""
        with pytest.raises(NotConnectedError):
            await Package().set_locale("en")

    @pytest.mark.asyncio
    async def test_failed_set_locale_keeps_previous_locale(self, label_db_path):
        """An unsupported locale leaves the current one in place."""
        package = Package()
        await package.set_package(label_db_path, "fr-FR")

        with pytest.raises(UnsupportedLocaleError):
            await package.set_locale("de-DE")

        assert package.locale == "fr-FR"
        assert package.locale_id == 2

    @pytest.mark.asyncio
    async def test_strict_set_locale(self, label_db_path):
        """Strict mode disables the family fallback."""
        package = Package()
        await package.set_path(label_db_path)
        with pytest.raises(UnsupportedLocaleError):
            await package.set_locale("en-US", strict=True)

    @pytest.mark.asyncio
    async def test_is_locale_supported(self, label_db_path):
        """Support checks do not change the current locale."""
        package = Package()
        await package.set_package(label_db_path, "fr-FR")

        assert await package.is_locale_supported("en-GB") is True
        assert await package.is_locale_supported("en-GB", strict=True) is False
        assert await package.is_locale_supported("de") is False
        assert package.locale == "fr-FR"

    @pytest.mark.asyncio
    async def test_get_supported_locales(self, label_db_path):
        """Every stored locale is listed."""
        package = Package()
        await package.set_path(label_db_path)
        locales = await package.get_supported_locales()
        assert LocaleInfo(language="fr", locale="fr-FR", id=2, locked=True) in locales
        assert len(locales) == 2


class TestPackageLabels:
    """Tests for label retrieval through the facade."""

    @pytest.mark.asyncio
    async def test_get_labels(self, label_db_path):
        """Labels of the current locale are returned."""
        package = Package()
        await package.set_package(label_db_path, "en-US")
        assert await package.get_labels(2) == {2: "Hello"}

    @pytest.mark.asyncio
    async def test_get_labels_without_connection(self):
        """Labels require a connection."""
        with pytest.raises(NotConnectedError):
            await Package().get_labels([1])

    @pytest.mark.asyncio
    async def test_get_labels_without_locale(self, label_db_path):
        """Labels require a resolved locale."""
        package = Package()
        await package.set_path(label_db_path)
        with pytest.raises(NoLocaleSetError):
            await package.get_labels([1])

    @pytest.mark.asyncio
    async def test_get_labels_invalid_ids(self, label_db_path):
        """Input without valid ids is rejected."""
        package = Package()
        await package.set_package(label_db_path, "en")
        with pytest.raises(InvalidArgumentError):
            await package.get_labels([0, ""])

    @pytest.mark.asyncio
    async def test_get_all_labels(self, label_db_path):
        """Every label of the locale is returned."""
        package = Package()
        await package.set_package(label_db_path, "fr-FR")
        assert await package.get_all_labels() == {1: "Bienvenue", 2: "Bonjour"}

    @pytest.mark.asyncio
    async def test_get_labels_fills_cache(self, label_db_path, memory_cache):
        """Fetched labels are cached under the package identifier."""
        package = Package(cache=memory_cache)
        await package.set_package(label_db_path, "en")

        await package.get_labels([1, 2])

        key = CacheKeyBuilder().label_key(package.package_identifier, 1, 2)
        assert await memory_cache.pull_multi([key]) == {key: "Hello"}

    @pytest.mark.asyncio
    async def test_use_cache_disabled(self, label_db_path, memory_cache):
        """With use_cache off the cache is never touched."""
        package = Package(cache=memory_cache, use_cache=False)
        await package.set_package(label_db_path, "en")

        await package.get_labels([1, 2])

        assert package.cache_ready() is False
        assert memory_cache.get_stats()["reads"] == 0
        assert memory_cache.get_stats()["entries"] == 0

    @pytest.mark.asyncio
    async def test_fresh_bypasses_cache(self, label_db_path, memory_cache, monkeypatch):
        """fresh=True reads from the store even on a warm cache."""
        package = Package(cache=memory_cache)
        await package.set_package(label_db_path, "en")
        await package.get_labels([1])
        connector = package.session.connector
        spy = AsyncMock(side_effect=connector.fetch_labels)
        monkeypatch.setattr(connector, "fetch_labels", spy)

        await package.get_labels([1], fresh=True)

        assert spy.await_count == 1

    @pytest.mark.asyncio
    async def test_set_package_identifier_changes_cache_namespace(
        self, label_db_path, memory_cache
    ):
        """Overridden identifiers scope new cache entries."""
        package = Package(cache=memory_cache)
        await package.set_package(label_db_path, "en")

        assert package.set_package_identifier("custom") is package
        await package.get_labels([2])

        key = CacheKeyBuilder().label_key("custom", 1, 2)
        assert await memory_cache.pull_multi([key]) == {key: "Hello"}

    @pytest.mark.asyncio
    async def test_set_package_identifier_keeps_locale(self, label_db_path):
        """Overriding the identifier does not reset the locale."""
        package = Package()
        await package.set_package(label_db_path, "fr-FR")
        package.set_package_identifier(None)
        assert package.package_identifier == ""
        assert package.locale == "fr-FR"


class TestCreatePackage:
    """Tests for the package factory."""

    @pytest.mark.asyncio
    async def test_create_unconnected_package(self):
        """Without a configured path the package is not connected."""
        settings = LocaleKitSettings(package=PackageSettings(PACKAGE_PATH=None))
        package = await create_package(settings)
        assert package.connected is False

    @pytest.mark.asyncio
    async def test_create_package_from_settings(self, label_db_path, memory_cache):
        """A configured path and locale are applied."""
        settings = LocaleKitSettings(
            package=PackageSettings(PACKAGE_PATH=label_db_path, PACKAGE_LOCALE="en-US")
        )
        package = await create_package(settings, cache=memory_cache)

        assert package.locale == "en"
        assert package.cache is memory_cache
        assert await package.get_labels([2]) == {2: "Hello"}

    @pytest.mark.asyncio
    async def test_create_strict_package_rejects_fallback(self, label_db_path):
        """PACKAGE_STRICT disables the family fallback."""
        settings = LocaleKitSettings(
            package=PackageSettings(
                PACKAGE_PATH=label_db_path, PACKAGE_LOCALE="en-US", PACKAGE_STRICT=True
            )
        )
        with pytest.raises(UnsupportedLocaleError):
            await create_package(settings)
