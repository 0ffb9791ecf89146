"""Exceptions raised by localekit.

Every failure surfaced to callers is one of the classes below, all deriving from
``LocaleKitError`` so application code can catch the whole family at once.
Underlying causes (sqlite errors, httpx errors, cache backend errors) are chained
with ``raise ... from exc`` and never retried.

Example:
    try:
        labels = await package.get_labels([1, 2, 3])
    except NoLocaleSetError:
        await package.set_locale("en-US")
    except LocaleKitError as e:
        logger.error("labels_unavailable", error=str(e))
"""

from typing import Optional


class LocaleKitError(Exception):
    """Base exception for all localekit errors."""

    pass


class InvalidArgumentError(LocaleKitError, ValueError):
    """Raised on malformed input: empty path, empty locale, bad ids or texts.

    Example:
        >>> await package.set_path("")
        Traceback (most recent call last):
        ...
        InvalidArgumentError: Invalid path.
    """

    pass


class NotConnectedError(LocaleKitError):
    """Raised when an operation requires an open package connection."""

    pass


class UnsupportedLocaleError(LocaleKitError):
    """Raised when neither the locale code nor its language family is available.

    Attributes:
        locale: The locale code that was requested.
    """

    def __init__(self, message: str, locale: Optional[str] = None):
        super().__init__(message)
        self.locale = locale


class NoLocaleSetError(LocaleKitError):
    """Raised when labels are requested before a locale has been resolved."""

    pass


class StoreError(LocaleKitError):
    """Raised when the label database cannot be opened or queried."""

    pass


class CacheReadError(LocaleKitError):
    """Raised when the cache handler fails to return entries."""

    pass


class CacheWriteError(LocaleKitError):
    """Raised when the cache handler fails to store entries.

    A fetch that read from the store successfully still fails with this error:
    a successful result always implies the cache has been backfilled.
    """

    pass


class ProviderError(LocaleKitError):
    """Raised when a translation provider reports a failure.

    Attributes:
        code: Status code returned by the provider, None for transport failures.
        provider: Name of the provider that failed.
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.provider = provider


class InvalidProviderResponseError(LocaleKitError):
    """Raised when a provider response does not have the expected shape."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class TextTooLongError(InvalidArgumentError):
    """Raised when a text exceeds the provider's per-text length ceiling.

    Attributes:
        max_length: The ceiling that was exceeded.
    """

    def __init__(self, message: str, max_length: Optional[int] = None):
        super().__init__(message)
        self.max_length = max_length
