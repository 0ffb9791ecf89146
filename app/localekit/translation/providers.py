"""Provider backends for the translation APIs.

Each backend knows how to build the HTTP requests of one provider and how to
validate and decode its responses. Backends never perform I/O themselves; the
``Translator`` sends the requests they build.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import httpx

from localekit.errors import InvalidProviderResponseError, ProviderError
from localekit.translation.models import (
    Provider,
    ProviderRequest,
    TextFormat,
    TranslationModel,
)


class ProviderBackend(ABC):
    """Request builder and response parser for one translation provider.

    Attributes:
        provider: Provider implemented by the backend.
        label: Human readable provider name used in error messages.
        max_text_length: Per-text length ceiling, None when unbounded.
    """

    provider: Provider
    label: str
    max_text_length: Optional[int] = None
    error_messages: Dict[int, str] = {}

    def __init__(
        self,
        base_url: str,
        token: str,
        text_format: TextFormat = TextFormat.TEXT,
        model: TranslationModel = TranslationModel.NEURAL,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.text_format = text_format
        self.model = model

    @classmethod
    def error_message(cls, code: int) -> str:
        """Return the message describing a provider status code."""
        return cls.error_messages.get(
            code, f"Unexpected error from {cls.label} ({code})."
        )

    def invalid_response(self) -> InvalidProviderResponseError:
        return InvalidProviderResponseError(
            f"Invalid response from {self.label}.", provider=self.provider.value
        )

    def provider_error(self, code: int) -> ProviderError:
        return ProviderError(
            self.error_message(code), code=code, provider=self.provider.value
        )

    def decode_response(self, response: httpx.Response) -> Any:
        """Decode the JSON body of ``response``.

        Raises:
            ProviderError: If the body is not JSON and the status is an error.
            InvalidProviderResponseError: If a successful body is not JSON.
        """
        try:
            return response.json()
        except ValueError as e:
            if response.is_error:
                raise self.provider_error(response.status_code) from e
            raise self.invalid_response() from e

    @abstractmethod
    def build_translate_request(
        self, texts: Sequence[str], target: str, source: Optional[str] = None
    ) -> ProviderRequest:
        pass

    @abstractmethod
    def parse_translate_response(
        self, payload: Any, texts: Sequence[str]
    ) -> Dict[str, str]:
        pass

    @abstractmethod
    def build_detect_requests(
        self, texts: Sequence[str], hints: Sequence[str] = ()
    ) -> List[ProviderRequest]:
        pass

    @abstractmethod
    def parse_detect_responses(
        self, payloads: Sequence[Any], texts: Sequence[str]
    ) -> Dict[str, Optional[str]]:
        pass

    @abstractmethod
    def build_languages_request(self, language: str) -> ProviderRequest:
        pass

    @abstractmethod
    def parse_languages_response(self, payload: Any) -> Dict[str, str]:
        pass


class YandexBackend(ProviderBackend):
    """Yandex Translate v1.5 JSON API.

    Every endpoint is a form-encoded POST. Responses carry a ``code`` field
    that must be 200. Language detection handles one text per request.
    """

    provider = Provider.YANDEX
    label = "Yandex"
    max_text_length = 10000
    error_messages = {
        401: "The API key that has been set within the class instance is not valid.",
        402: "The API key that has been set within the class has been rejected by Yandex.",
        404: "Your translate limit has expired, you need to upgrade your plan or wait for limit reset.",
        413: "The provided text is too long.",
        422: "The provided text cannot be translated.",
        501: "The specified translation direction is not supported.",
    }

    def _check_code(self, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise self.invalid_response()
        code = payload.get("code")
        if isinstance(code, bool) or not isinstance(code, int):
            raise self.invalid_response()
        if code != 200:
            raise self.provider_error(code)
        return payload

    def build_translate_request(self, texts, target, source=None):
        direction = f"{source}-{target}" if source else target
        return ProviderRequest(
            method="POST",
            url=f"{self.base_url}/translate",
            data={
                "key": self.token,
                "text": list(texts),
                "lang": direction,
                "format": "html" if self.text_format is TextFormat.HTML else "plain",
            },
        )

    def parse_translate_response(self, payload, texts):
        payload = self._check_code(payload)
        translations = payload.get("text")
        if not isinstance(translations, list) or len(translations) != len(texts):
            raise self.invalid_response()
        if not all(isinstance(item, str) for item in translations):
            raise self.invalid_response()
        return dict(zip(texts, translations))

    def build_detect_requests(self, texts, hints=()):
        requests = []
        for text in texts:
            data = {"key": self.token, "text": text}
            if hints:
                data["hint"] = ",".join(hints)
            requests.append(
                ProviderRequest(method="POST", url=f"{self.base_url}/detect", data=data)
            )
        return requests

    def parse_detect_responses(self, payloads, texts):
        if len(payloads) != len(texts):
            raise self.invalid_response()
        detected: Dict[str, Optional[str]] = {}
        for text, payload in zip(texts, payloads):
            language = self._check_code(payload).get("lang")
            detected[text] = language if isinstance(language, str) and language else None
        return detected

    def build_languages_request(self, language):
        return ProviderRequest(
            method="POST",
            url=f"{self.base_url}/getLangs",
            data={"key": self.token, "ui": language},
        )

    def parse_languages_response(self, payload):
        if not isinstance(payload, dict):
            raise self.invalid_response()
        # getLangs only includes a code when the call failed
        if "code" in payload:
            self._check_code(payload)
        languages = payload.get("langs")
        if not isinstance(languages, dict):
            raise self.invalid_response()
        return {
            str(code): name for code, name in languages.items() if isinstance(name, str)
        }


class GoogleBackend(ProviderBackend):
    """Google Cloud Translation v2 API.

    Every endpoint is a GET with the arguments in the query string. Failures
    come back as ``{"error": {"code": ..., "message": ...}}``.
    """

    provider = Provider.GOOGLE
    label = "Google"
    error_messages = {
        400: "The request sent to Google is not valid.",
        401: "The API key that has been set within the class instance is not valid.",
        403: "The API key that has been set within the class instance is not authorised by Google.",
        429: "The quota of the API key has been exceeded.",
    }

    def _unwrap(self, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise self.invalid_response()
        error = payload.get("error")
        if isinstance(error, dict):
            code = error.get("code")
            if isinstance(code, int) and not isinstance(code, bool):
                raise self.provider_error(code)
            raise self.invalid_response()
        data = payload.get("data")
        if not isinstance(data, dict):
            raise self.invalid_response()
        return data

    def build_translate_request(self, texts, target, source=None):
        params = {
            "key": self.token,
            "q": list(texts),
            "target": target,
            "format": self.text_format.value,
            "model": self.model.value,
        }
        if source:
            params["source"] = source
        return ProviderRequest(method="GET", url=self.base_url, params=params)

    def parse_translate_response(self, payload, texts):
        translations = self._unwrap(payload).get("translations")
        if not isinstance(translations, list) or len(translations) != len(texts):
            raise self.invalid_response()
        translated: Dict[str, str] = {}
        for text, item in zip(texts, translations):
            if not isinstance(item, dict) or not isinstance(item.get("translatedText"), str):
                raise self.invalid_response()
            translated[text] = item["translatedText"]
        return translated

    def build_detect_requests(self, texts, hints=()):
        return [
            ProviderRequest(
                method="GET",
                url=f"{self.base_url}/detect",
                params={"key": self.token, "q": list(texts)},
            )
        ]

    def parse_detect_responses(self, payloads, texts):
        if len(payloads) != 1:
            raise self.invalid_response()
        detections = self._unwrap(payloads[0]).get("detections")
        if not isinstance(detections, list) or len(detections) != len(texts):
            raise self.invalid_response()
        detected: Dict[str, Optional[str]] = {}
        for text, candidates in zip(texts, detections):
            # Each entry is a list of candidates, best first
            best = candidates[0] if isinstance(candidates, list) and candidates else None
            language = best.get("language") if isinstance(best, dict) else None
            detected[text] = (
                language if isinstance(language, str) and language not in ("", "und") else None
            )
        return detected

    def build_languages_request(self, language):
        return ProviderRequest(
            method="GET",
            url=f"{self.base_url}/languages",
            params={"key": self.token, "target": language},
        )

    def parse_languages_response(self, payload):
        languages = self._unwrap(payload).get("languages")
        if not isinstance(languages, list):
            raise self.invalid_response()
        supported: Dict[str, str] = {}
        for item in languages:
            if isinstance(item, dict) and isinstance(item.get("language"), str):
                supported[item["language"]] = item.get("name") or item["language"]
        return supported


DEFAULT_URLS = {
    Provider.YANDEX: "https://translate.yandex.net/api/v1.5/tr.json",
    Provider.GOOGLE: "https://translation.googleapis.com/language/translate/v2",
}

BACKENDS = {
    Provider.YANDEX: YandexBackend,
    Provider.GOOGLE: GoogleBackend,
}


def get_backend(
    provider: Provider,
    token: str,
    base_url: Optional[str] = None,
    text_format: TextFormat = TextFormat.TEXT,
    model: TranslationModel = TranslationModel.NEURAL,
) -> ProviderBackend:
    """Instantiate the backend of ``provider``.

    Args:
        provider: Provider to talk to.
        token: API key.
        base_url: Endpoint root; defaults to the provider's public API.
        text_format: Format of the texts sent for translation.
        model: Translation model, honoured by Google only.
    """
    backend_class = BACKENDS[Provider.from_name(provider)]
    return backend_class(
        base_url or DEFAULT_URLS[backend_class.provider],
        token,
        text_format=text_format,
        model=model,
    )
