"""Machine translation and language detection through remote providers.

Results are cached per text: a translation under its target locale and the
NFC-normalized text, a detection under the normalized text alone.

Usage:
    from localekit import InMemoryCache, Translator

    translator = Translator.for_google("api-key", cache=InMemoryCache())
    translations = await translator.translate(["Hello", "Goodbye"], "fr")
    languages = await translator.detect_language("Bonjour")
"""

from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Union,
)

import httpx

from localekit.cache.base import CacheHandler
from localekit.cache.key_builder import CacheKeyBuilder
from localekit.errors import (
    CacheReadError,
    CacheWriteError,
    InvalidArgumentError,
    TextTooLongError,
)
from localekit.logging import get_module_logger
from localekit.translation.models import Provider, TextFormat, TranslationModel
from localekit.translation.providers import BACKENDS, ProviderBackend, get_backend
from localekit.translation.transport import ProviderTransport

logger = get_module_logger()

Texts = Union[str, Iterable[str]]


def _group_by_key(texts: List[str], key_for: Callable[[str], str]) -> Dict[str, List[str]]:
    """Group texts by cache key; Unicode-equivalent spellings share one key."""
    groups: Dict[str, List[str]] = {}
    for text in texts:
        groups.setdefault(key_for(text), []).append(text)
    return groups


class Translator:
    """Translate texts and detect their language using Yandex or Google.

    Attributes:
        cache: Injected cache handler, None to disable caching.
        use_cache: Whether results are looked up in the cache first.
        verbose: Log the underlying cause of every surfaced error.
    """

    def __init__(
        self,
        provider: Union[Provider, str] = Provider.YANDEX,
        token: Optional[str] = None,
        text_format: Union[TextFormat, str] = TextFormat.TEXT,
        model: Union[TranslationModel, str] = TranslationModel.NEURAL,
        cache: Optional[CacheHandler] = None,
        use_cache: bool = True,
        verbose: bool = False,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        key_builder: Optional[CacheKeyBuilder] = None,
    ):
        self.token = token if isinstance(token, str) else ""
        self.cache = cache
        self.use_cache = use_cache
        self.verbose = verbose
        self._backend = get_backend(
            Provider.from_name(provider),
            self.token,
            base_url=base_url,
            text_format=TextFormat.from_name(text_format),
            model=TranslationModel.from_name(model),
        )
        self._transport = ProviderTransport(client=client, timeout=timeout)
        self._key_builder = key_builder or CacheKeyBuilder()

    @classmethod
    def for_yandex(
        cls,
        token: str,
        text_format: Union[TextFormat, str] = TextFormat.TEXT,
        **kwargs: Any,
    ) -> "Translator":
        return cls(Provider.YANDEX, token, text_format=text_format, **kwargs)

    @classmethod
    def for_google(
        cls,
        token: str,
        text_format: Union[TextFormat, str] = TextFormat.TEXT,
        model: Union[TranslationModel, str] = TranslationModel.NEURAL,
        **kwargs: Any,
    ) -> "Translator":
        return cls(Provider.GOOGLE, token, text_format=text_format, model=model, **kwargs)

    @staticmethod
    def supported_providers() -> List[str]:
        return [provider.value for provider in BACKENDS]

    @staticmethod
    def is_supported_provider(name: Any) -> bool:
        if isinstance(name, Provider):
            return name in BACKENDS
        return isinstance(name, str) and name.lower() in Translator.supported_providers()

    @property
    def backend(self) -> ProviderBackend:
        return self._backend

    @property
    def provider(self) -> Provider:
        return self._backend.provider

    @property
    def text_format(self) -> TextFormat:
        return self._backend.text_format

    @property
    def model(self) -> TranslationModel:
        return self._backend.model

    def cache_ready(self) -> bool:
        return self.use_cache and self.cache is not None and self.cache.is_ready()

    def _report(self, event: str, error: Exception) -> None:
        if self.verbose:
            logger.warning(
                event,
                provider=self.provider.value,
                error=str(error),
                error_type=type(error).__name__,
            )

    def _require_token(self) -> None:
        if self.token == "":
            raise InvalidArgumentError("No token has been defined.")

    def _prepare_texts(self, texts: Texts) -> List[str]:
        """Return the distinct non-empty texts of ``texts``, in order."""
        if isinstance(texts, str):
            texts = [texts]
        elif texts is None or isinstance(texts, (bytes, dict)):
            raise InvalidArgumentError("Invalid text.")

        try:
            candidates = list(texts)
        except TypeError as e:
            raise InvalidArgumentError("Invalid text.") from e

        limit = self._backend.max_text_length
        prepared: List[str] = []
        for text in candidates:
            if not isinstance(text, str) or text == "" or text in prepared:
                continue
            if limit is not None and len(text) > limit:
                raise TextTooLongError("The given text is too long.", max_length=limit)
            prepared.append(text)

        if not prepared:
            raise InvalidArgumentError("Invalid text.")
        return prepared

    async def translate(
        self,
        texts: Texts,
        target_locale: str,
        source_locale: Optional[str] = None,
        fresh: bool = False,
    ) -> Dict[str, Optional[str]]:
        """Translate ``texts`` into ``target_locale``.

        Args:
            texts: A text or an iterable of texts.
            target_locale: Language code to translate into.
            source_locale: Language of the texts; detected by the provider if omitted.
            fresh: Request every text from the provider, bypassing the cache.

        Returns:
            Mapping of each distinct input text to its translation.

        Raises:
            InvalidArgumentError: If the locale, token or texts are missing.
            TextTooLongError: If a text exceeds the provider's ceiling.
            ProviderError: If the request fails or the provider reports an error.
            InvalidProviderResponseError: If the response is malformed.
            CacheReadError: If reading the cache fails.
            CacheWriteError: If backfilling the cache fails.
        """
        if not isinstance(target_locale, str) or target_locale == "":
            raise InvalidArgumentError("Invalid locale code.")
        if not isinstance(source_locale, str) or source_locale == "":
            source_locale = None
        self._require_token()
        items = self._prepare_texts(texts)

        async def request(missing: List[str]) -> Dict[str, Optional[str]]:
            payload = await self._transport.send(
                self._backend.build_translate_request(missing, target_locale, source_locale),
                self._backend,
            )
            return self._backend.parse_translate_response(payload, missing)

        groups = _group_by_key(
            items, lambda text: self._key_builder.translation_key(text, target_locale)
        )
        return await self._run("translate", groups, request, fresh)

    async def detect_language(
        self,
        texts: Texts,
        hints: Optional[Iterable[str]] = None,
        fresh: bool = False,
    ) -> Dict[str, Optional[str]]:
        """Detect the language of ``texts``.

        Args:
            texts: A text or an iterable of texts.
            hints: Likely language codes, honoured by Yandex only.
            fresh: Request every text from the provider, bypassing the cache.

        Returns:
            Mapping of each distinct input text to a language code, None when
            the provider could not tell.

        Raises:
            Same as ``translate``.
        """
        self._require_token()
        items = self._prepare_texts(texts)
        if isinstance(hints, str):
            hints = [hints]
        hint_list = [hint for hint in (hints or []) if isinstance(hint, str) and hint]

        async def request(missing: List[str]) -> Dict[str, Optional[str]]:
            payloads = await self._transport.send_all(
                self._backend.build_detect_requests(missing, hint_list),
                self._backend,
            )
            return self._backend.parse_detect_responses(payloads, missing)

        groups = _group_by_key(items, self._key_builder.detection_key)
        return await self._run("detect", groups, request, fresh)

    async def get_supported_languages(self, language: str = "en") -> Dict[str, str]:
        """Return the provider's languages as code -> name, names in ``language``."""
        if not isinstance(language, str) or language == "":
            language = "en"
        self._require_token()
        try:
            payload = await self._transport.send(
                self._backend.build_languages_request(language), self._backend
            )
            return self._backend.parse_languages_response(payload)
        except Exception as e:
            self._report("languages_request_failed", e)
            raise

    async def is_language_supported(self, language: str) -> bool:
        if not isinstance(language, str) or language == "":
            raise InvalidArgumentError("Invalid language code.")
        languages = await self.get_supported_languages()
        return language.lower() in {code.lower() for code in languages}

    async def _run(
        self,
        operation: str,
        groups: Dict[str, List[str]],
        request: Callable[[List[str]], Awaitable[Dict[str, Optional[str]]]],
        fresh: bool,
    ) -> Dict[str, Optional[str]]:
        """Resolve ``groups`` (cache key -> texts) through the cache, then the provider.

        One bulk cache read, at most one provider round, and one bulk cache
        write of the string results. Texts sharing a cache key are requested
        once and all receive the same value.
        """
        log = logger.bind(operation=operation, provider=self.provider.value)
        use_cache = self.cache_ready() and not fresh
        found: Dict[str, Optional[str]] = {}
        missing: List[str] = list(groups)

        if use_cache:
            try:
                cached = await self.cache.pull_multi(list(groups), allow_partial=True)
                if not isinstance(cached, Mapping):
                    raise TypeError(
                        f"pull_multi returned {type(cached).__name__}, expected a mapping"
                    )
            except Exception as e:
                self._report(f"{operation}_cache_read_failed", e)
                raise CacheReadError(
                    "An error occurred while fetching data from the cache."
                ) from e

            missing = []
            for key in groups:
                value = cached.get(key)
                if isinstance(value, str):
                    found[key] = value
                else:
                    missing.append(key)
            if not missing:
                log.debug("provider_cache_hit", requested=len(groups))

        if missing:
            representatives = [groups[key][0] for key in missing]
            try:
                fetched = await request(representatives)
            except Exception as e:
                self._report(f"{operation}_request_failed", e)
                raise
            for key in missing:
                if groups[key][0] in fetched:
                    found[key] = fetched[groups[key][0]]
            log.debug(
                "provider_results_received", requested=len(groups), fetched=len(missing)
            )

        result = {
            text: found[key] for key, texts in groups.items() if key in found for text in texts
        }

        if not use_cache or not missing or not self.cache_ready():
            return result

        backfill = {key: found[key] for key in missing if isinstance(found.get(key), str)}
        if not backfill:
            return result
        try:
            await self.cache.push_multi(backfill)
        except Exception as e:
            self._report(f"{operation}_cache_write_failed", e)
            raise CacheWriteError(
                "An error occurred while saving elements within the cache."
            ) from e
        return result
