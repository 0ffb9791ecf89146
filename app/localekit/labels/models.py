"""Locale resolution and package session models."""

from dataclasses import dataclass, replace
from typing import Optional

from localekit.store.connector import StoreConnector


@dataclass(frozen=True)
class ResolvedLocale:
    """Outcome of a locale resolution.

    Attributes:
        requested: Locale code the caller asked for (e.g., "en-US").
        code: Effective locale code; the lowercased language prefix on fallback.
        locale_id: Internal id matching the ``locales`` table.
        is_fallback: True iff only the language family matched.
    """

    requested: str
    code: str
    locale_id: int
    is_fallback: bool = False


@dataclass(frozen=True)
class PackageSession:
    """Connection state of one open label database.

    Immutable: ``Package`` swaps a whole new session in on every path or
    locale change instead of mutating fields piecemeal.

    Attributes:
        path: Database path as given by the caller.
        connector: The session's exclusive read-only connection.
        package_identifier: Cache namespace identifier of this connection.
        resolved_locale: Current locale, None until one has been resolved.
    """

    path: str
    connector: StoreConnector
    package_identifier: str
    resolved_locale: Optional[ResolvedLocale] = None

    @property
    def locale(self) -> Optional[str]:
        return self.resolved_locale.code if self.resolved_locale else None

    @property
    def locale_id(self) -> Optional[int]:
        return self.resolved_locale.locale_id if self.resolved_locale else None

    @property
    def is_fallback(self) -> bool:
        return self.resolved_locale.is_fallback if self.resolved_locale else False

    def with_locale(self, resolved: ResolvedLocale) -> "PackageSession":
        """Return a copy of this session carrying ``resolved``."""
        return replace(self, resolved_locale=resolved)

    def with_identifier(self, package_identifier: str) -> "PackageSession":
        """Return a copy of this session using another cache identifier."""
        return replace(self, package_identifier=package_identifier)
