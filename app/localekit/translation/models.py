"""Translation provider models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Provider(str, Enum):
    """Supported translation providers."""

    YANDEX = "yandex"
    GOOGLE = "google"

    @classmethod
    def from_name(cls, name: Any) -> "Provider":
        """Convert a provider name to Provider, defaulting to Yandex.

        Args:
            name: Provider name (case-insensitive) or Provider member.

        Returns:
            Matching Provider, or Provider.YANDEX for unknown names.
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            try:
                return cls(name.lower())
            except ValueError:
                pass
        return cls.YANDEX


class TextFormat(str, Enum):
    """Format of the texts sent for translation."""

    TEXT = "text"
    HTML = "html"

    @classmethod
    def from_name(cls, name: Any) -> "TextFormat":
        """Convert a format name to TextFormat, defaulting to plain text."""
        if isinstance(name, cls):
            return name
        if isinstance(name, str) and name.lower() == "html":
            return cls.HTML
        return cls.TEXT


class TranslationModel(str, Enum):
    """Translation algorithm, honoured by Google only."""

    NEURAL = "nmt"
    PHRASE_BASED = "pbmt"

    @classmethod
    def from_name(cls, name: Any) -> "TranslationModel":
        """Convert a model code to TranslationModel, defaulting to neural."""
        if isinstance(name, cls):
            return name
        if isinstance(name, str) and name.lower() == "pbmt":
            return cls.PHRASE_BASED
        return cls.NEURAL

    @property
    def display_name(self) -> str:
        if self is TranslationModel.PHRASE_BASED:
            return "Phrase-Based Machine Translation"
        return "Neural Machine Translation"


@dataclass(frozen=True)
class ProviderRequest:
    """One HTTP request to a provider.

    Attributes:
        method: HTTP method, "GET" (query string) or "POST" (form-encoded).
        url: Absolute endpoint URL.
        params: Query string parameters; list values are repeated.
        data: Form fields; list values are repeated.
    """

    method: str
    url: str
    params: Optional[Dict[str, Any]] = None
    data: Optional[Dict[str, Any]] = None
