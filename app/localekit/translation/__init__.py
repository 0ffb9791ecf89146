"""Machine translation and language detection."""

from localekit.translation.factory import create_translator
from localekit.translation.models import (
    Provider,
    ProviderRequest,
    TextFormat,
    TranslationModel,
)
from localekit.translation.providers import (
    GoogleBackend,
    ProviderBackend,
    YandexBackend,
    get_backend,
)
from localekit.translation.transport import ProviderTransport
from localekit.translation.translator import Translator

__all__ = [
    "GoogleBackend",
    "Provider",
    "ProviderBackend",
    "ProviderRequest",
    "ProviderTransport",
    "TextFormat",
    "TranslationModel",
    "Translator",
    "YandexBackend",
    "create_translator",
    "get_backend",
]
