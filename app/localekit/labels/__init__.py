"""Localized labels read from SQLite label databases.

Main components:
- models: ResolvedLocale and PackageSession
- resolvers: LocaleResolver (exact code, then language family)
- fetcher: LabelFetcher implementing cache-aside label retrieval
- package: Package facade owning the current session
"""

from localekit.labels.factory import create_package
from localekit.labels.fetcher import LabelFetcher, normalize_label_ids
from localekit.labels.models import PackageSession, ResolvedLocale
from localekit.labels.package import Package
from localekit.labels.resolvers import LocaleResolver, language_family

__all__ = [
    "Package",
    "PackageSession",
    "ResolvedLocale",
    "LocaleResolver",
    "LabelFetcher",
    "create_package",
    "language_family",
    "normalize_label_ids",
]
