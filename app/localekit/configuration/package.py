"""Label package settings."""

from typing import Optional

from pydantic import Field

from localekit.configuration.base import LocaleKitBaseSettings


class PackageSettings(LocaleKitBaseSettings):
    """Default label package opened by ``create_package``.

    Environment Variables:
        PACKAGE_PATH: Path to the SQLite label database
        PACKAGE_LOCALE: Locale resolved right after connecting
        PACKAGE_STRICT: Disable language-family fallback (default: False)
    """

    path: Optional[str] = Field(default=None, alias="PACKAGE_PATH")
    locale: Optional[str] = Field(default=None, alias="PACKAGE_LOCALE")
    strict: bool = Field(default=False, alias="PACKAGE_STRICT")
