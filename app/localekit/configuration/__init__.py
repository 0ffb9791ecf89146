"""Configuration module - public API.

Centralized configuration for localekit using Pydantic BaseSettings, one
section per concern.

Exports:
    get_settings: Cached settings provider (main entry point)
    LocaleKitSettings: Aggregated settings class (for testing/overrides)
    CacheSettings, TranslatorSettings, PackageSettings: Section classes
"""

from localekit.configuration.cache import CacheSettings
from localekit.configuration.package import PackageSettings
from localekit.configuration.settings import LocaleKitSettings, get_settings
from localekit.configuration.translator import TranslatorSettings

__all__ = [
    "LocaleKitSettings",
    "CacheSettings",
    "TranslatorSettings",
    "PackageSettings",
    "get_settings",
]
