"""Row models returned by the label store."""

from dataclasses import dataclass
from typing import Union

LabelId = Union[int, str]


@dataclass(frozen=True)
class LocaleInfo:
    """One row of the ``locales`` table.

    Attributes:
        language: ISO language family (e.g., "en").
        locale: Full locale code (e.g., "en-US").
        id: Internal locale id referenced by ``labels.locale``.
        locked: Reserved locale flag, surfaced as-is.
    """

    language: str
    locale: str
    id: int
    locked: bool = False


@dataclass(frozen=True)
class LabelRow:
    """One row of the ``labels`` table for a given locale."""

    id: LabelId
    value: str
