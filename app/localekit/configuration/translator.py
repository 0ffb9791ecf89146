"""Translation provider settings."""

from typing import Optional

from pydantic import Field, field_validator

from localekit.configuration.base import LocaleKitBaseSettings


class TranslatorSettings(LocaleKitBaseSettings):
    """Translation provider configuration.

    Environment Variables:
        TRANSLATOR_PROVIDER: Provider name, 'yandex' or 'google' (default: yandex)
        TRANSLATOR_TOKEN: API key sent to the provider
        TRANSLATOR_TEXT_FORMAT: 'text' or 'html' (default: text)
        TRANSLATOR_MODEL: Google translation model, 'nmt' or 'pbmt' (default: nmt)
        TRANSLATOR_TIMEOUT_SECONDS: HTTP timeout per request (default: 30)
        YANDEX_API_URL: Base URL of the Yandex Translate v1.5 JSON API
        GOOGLE_API_URL: Base URL of the Google Cloud Translation v2 API
    """

    provider: str = Field(default="yandex", alias="TRANSLATOR_PROVIDER")
    token: Optional[str] = Field(default=None, alias="TRANSLATOR_TOKEN")
    text_format: str = Field(default="text", alias="TRANSLATOR_TEXT_FORMAT")
    model: str = Field(default="nmt", alias="TRANSLATOR_MODEL")
    timeout_seconds: float = Field(default=30.0, alias="TRANSLATOR_TIMEOUT_SECONDS")
    yandex_api_url: str = Field(
        default="https://translate.yandex.net/api/v1.5/tr.json",
        alias="YANDEX_API_URL",
    )
    google_api_url: str = Field(
        default="https://translation.googleapis.com/language/translate/v2",
        alias="GOOGLE_API_URL",
    )

    @field_validator("provider", "text_format", "model", mode="before")
    @classmethod
    def lowercase_names(cls, v: str) -> str:
        """Normalize enumerated names to lowercase."""
        return v.lower() if isinstance(v, str) else v
