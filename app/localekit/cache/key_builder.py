"""Cache key builder for consistent key generation."""

import hashlib
import re
import unicodedata
from typing import Union


def _digest(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


_NUMERIC_ID = re.compile(r"[1-9][0-9]*")


class CacheKeyBuilder:
    """Build deterministic cache keys.

    Keys never contain caller text verbatim: non-numeric label ids and texts are
    reduced to a fixed-width digest to bound key length. The handler adds its
    own namespace prefix on top of these keys.

    Example:
        >>> builder = CacheKeyBuilder()
        >>> builder.label_key("pkg", 1, 2)
        'label:pkg:1:2'
    """

    def label_key(
        self, package_identifier: str, locale_id: int, label_id: Union[int, str]
    ) -> str:
        """Build the key of one label.

        Args:
            package_identifier: Identifier of the label database.
            locale_id: Resolved locale id.
            label_id: Numeric ids, and strings spelling one, are used verbatim;
                other strings are hashed. ``2`` and ``"2"`` share a key.

        Returns:
            Cache key string
        """
        token = str(label_id)
        if not _NUMERIC_ID.fullmatch(token):
            token = _digest(token)
        return f"label:{package_identifier}:{locale_id}:{token}"

    def translation_key(self, text: str, target_locale: str) -> str:
        """Build the key of one translated text."""
        return f"translate:{target_locale}:{_digest(self.normalize(text))}"

    def detection_key(self, text: str) -> str:
        """Build the key of one language detection."""
        return f"detect:{_digest(self.normalize(text))}"

    @staticmethod
    def normalize(text: str) -> str:
        """Normalize text to NFC so equivalent spellings share a key."""
        return unicodedata.normalize("NFC", text)
