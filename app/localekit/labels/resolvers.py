"""Locale resolution against the ``locales`` table of a label database.

Two-step, single-level lookup: exact code first, then (unless strict) the
language family taken from the prefix before the first ``-``. This is not a
full RFC 4647 negotiation.
"""

from typing import Optional

from localekit.errors import InvalidArgumentError, UnsupportedLocaleError
from localekit.labels.models import ResolvedLocale
from localekit.logging import get_module_logger
from localekit.store.connector import StoreConnector

logger = get_module_logger()


def language_family(locale: str) -> Optional[str]:
    """Return the lowercased language prefix of ``locale``, if it has one.

    Example:
        >>> language_family("en-US")
        'en'
        >>> language_family("en") is None
        True
    """
    index = locale.find("-")
    if index < 0:
        return None
    return locale[:index].lower()


class LocaleResolver:
    """Resolves a requested locale code to a locale stored in the package."""

    def __init__(self, connector: StoreConnector):
        """Initialize locale resolver.

        Args:
            connector: Connection to the label database to query.
        """
        self.connector = connector
        self.log = logger.bind(path=connector.path)

    async def resolve(self, requested_locale: str, strict: bool = False) -> ResolvedLocale:
        """Resolve ``requested_locale`` to an effective locale.

        Args:
            requested_locale: Locale code, e.g. "en-US". Matched case-sensitively.
            strict: If True, only an exact code match is accepted.

        Returns:
            ResolvedLocale with the effective code, its id and the fallback flag.

        Raises:
            InvalidArgumentError: If ``requested_locale`` is empty or not a string.
            UnsupportedLocaleError: If no exact or family match exists.
            StoreError: If the database query fails.
        """
        if not isinstance(requested_locale, str) or requested_locale == "":
            raise InvalidArgumentError("Invalid locale code.")

        locale_id = await self.connector.find_locale_id_by_code(requested_locale)
        if locale_id is not None:
            self.log.debug("locale_resolved", locale=requested_locale, locale_id=locale_id)
            return ResolvedLocale(
                requested=requested_locale,
                code=requested_locale,
                locale_id=locale_id,
                is_fallback=False,
            )

        if strict:
            self.log.info("unsupported_locale", locale=requested_locale, strict=True)
            raise UnsupportedLocaleError("Unsupported locale.", locale=requested_locale)

        language = language_family(requested_locale)
        if language is None:
            self.log.info("unsupported_locale", locale=requested_locale, strict=False)
            raise UnsupportedLocaleError("Unsupported locale.", locale=requested_locale)

        locale_id = await self.connector.find_locale_id_by_language(language)
        if locale_id is None:
            self.log.info("unsupported_locale", locale=requested_locale, language=language)
            raise UnsupportedLocaleError("Unsupported locale.", locale=requested_locale)

        self.log.info(
            "locale_resolved_by_fallback",
            locale=requested_locale,
            language=language,
            locale_id=locale_id,
        )
        return ResolvedLocale(
            requested=requested_locale,
            code=language,
            locale_id=locale_id,
            is_fallback=True,
        )
