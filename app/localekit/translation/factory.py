"""Translator factory."""

from typing import Optional

import httpx

from localekit.cache.base import CacheHandler
from localekit.configuration import LocaleKitSettings, get_settings
from localekit.logging import get_module_logger
from localekit.translation.models import Provider
from localekit.translation.translator import Translator

logger = get_module_logger()


def create_translator(
    settings: Optional[LocaleKitSettings] = None,
    cache: Optional[CacheHandler] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Translator:
    """Create a translator configured from settings.

    Args:
        settings: Settings to use; defaults to ``get_settings()``.
        cache: Cache handler shared with the rest of the application.
        client: Optional httpx client, mostly useful for tests.

    Returns:
        Configured Translator instance.
    """
    settings = settings or get_settings()
    translator_settings = settings.translator

    provider = Provider.from_name(translator_settings.provider)
    base_url = (
        translator_settings.google_api_url
        if provider is Provider.GOOGLE
        else translator_settings.yandex_api_url
    )
    translator = Translator(
        provider=provider,
        token=translator_settings.token,
        text_format=translator_settings.text_format,
        model=translator_settings.model,
        cache=cache,
        use_cache=settings.cache.enabled,
        verbose=settings.VERBOSE,
        base_url=base_url,
        client=client,
        timeout=translator_settings.timeout_seconds,
    )
    logger.info(
        "translator_created",
        provider=provider.value,
        configured=bool(translator_settings.token),
    )
    return translator
