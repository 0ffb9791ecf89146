"""Cache-aside retrieval of label texts.

A fetch costs at most one store query and two cache round trips (one bulk
read, one optional bulk write) no matter how many ids are requested.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from localekit.cache.base import CacheHandler
from localekit.cache.key_builder import CacheKeyBuilder
from localekit.errors import (
    CacheReadError,
    CacheWriteError,
    InvalidArgumentError,
    NoLocaleSetError,
)
from localekit.logging import get_module_logger
from localekit.store.connector import StoreConnector
from localekit.store.models import LabelId, LabelRow

logger = get_module_logger()


def _is_valid_label_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, str):
        return value != ""
    return False


def normalize_label_ids(ids: Union[LabelId, Iterable[LabelId]]) -> List[LabelId]:
    """Turn caller input into a de-duplicated list of valid label ids.

    A single id is accepted in place of an iterable. Empty strings,
    non-positive integers and values of other types are dropped.

    Raises:
        InvalidArgumentError: If nothing valid remains.
    """
    if isinstance(ids, (str, int)) and not isinstance(ids, bool):
        ids = [ids]
    elif ids is None or isinstance(ids, (bytes, dict)):
        raise InvalidArgumentError("Invalid labels.")

    try:
        candidates = list(ids)
    except TypeError as e:
        raise InvalidArgumentError("Invalid labels.") from e

    label_ids: List[LabelId] = []
    seen = set()
    for value in candidates:
        if not _is_valid_label_id(value) or value in seen:
            continue
        seen.add(value)
        label_ids.append(value)

    if not label_ids:
        raise InvalidArgumentError("Invalid labels.")
    return label_ids


def match_rows(rows: Iterable[LabelRow], requested: Iterable[LabelId]) -> Dict[LabelId, str]:
    """Map store rows back onto the ids the caller asked for.

    SQLite hands back ``5`` for a requested ``"5"``; the row is returned under
    every requested id with the same text form, so ``[5, "5"]`` gets both.
    """
    by_text: Dict[str, List[LabelId]] = {}
    for label_id in requested:
        by_text.setdefault(str(label_id), []).append(label_id)

    matched: Dict[LabelId, str] = {}
    for row in rows:
        for label_id in by_text.get(str(row.id), [row.id]):
            matched[label_id] = row.value
    return matched


def _distinct_by_text(label_ids: List[LabelId]) -> List[LabelId]:
    """Drop ids whose text form was already seen; SQLite matches 2 and "2" alike."""
    seen = set()
    distinct: List[LabelId] = []
    for label_id in label_ids:
        if str(label_id) not in seen:
            seen.add(str(label_id))
            distinct.append(label_id)
    return distinct


class LabelFetcher:
    """Returns label texts, consulting the cache before the store.

    Attributes:
        connector: Store queried for cache misses.
        cache: Optional cache handler; None disables caching.
        key_builder: Derives label cache keys.
        verbose: Log the underlying cause of cache failures.
    """

    def __init__(
        self,
        connector: StoreConnector,
        cache: Optional[CacheHandler] = None,
        key_builder: Optional[CacheKeyBuilder] = None,
        verbose: bool = False,
    ):
        self.connector = connector
        self.cache = cache
        self.key_builder = key_builder or CacheKeyBuilder()
        self.verbose = verbose

    def cache_ready(self) -> bool:
        return self.cache is not None and self.cache.is_ready()

    async def fetch(
        self,
        ids: Union[LabelId, Iterable[LabelId]],
        locale_id: Optional[int],
        package_identifier: str,
        bypass_cache: bool = False,
    ) -> Dict[LabelId, str]:
        """Return the texts of ``ids`` in the given locale.

        Args:
            ids: Label ids, or a single id.
            locale_id: Resolved locale id, None if no locale has been resolved.
            package_identifier: Cache namespace of the label database.
            bypass_cache: Read straight from the store, skipping the cache.

        Returns:
            Mapping of label id to text. Ids without a row are absent.

        Raises:
            InvalidArgumentError: If no valid id is given.
            NoLocaleSetError: If ``locale_id`` is not set.
            StoreError: If the store query fails.
            CacheReadError: If the cache read fails.
            CacheWriteError: If backfilling the cache fails.
        """
        label_ids = normalize_label_ids(ids)
        if locale_id is None:
            raise NoLocaleSetError("No locale defined.")

        log = logger.bind(locale_id=locale_id, requested=len(label_ids))

        if bypass_cache or not self.cache_ready():
            rows = await self.connector.fetch_labels(
                locale_id, _distinct_by_text(label_ids)
            )
            log.debug("labels_read_from_store", found=len(rows))
            return match_rows(rows, label_ids)

        # 2 and "2" share a key: one cache entry and one query for both
        groups: Dict[str, List[LabelId]] = {}
        for label_id in label_ids:
            key = self.key_builder.label_key(package_identifier, locale_id, label_id)
            groups.setdefault(key, []).append(label_id)

        try:
            cached = await self.cache.pull_multi(list(groups), allow_partial=True)
            if not isinstance(cached, Mapping):
                raise TypeError(
                    f"pull_multi returned {type(cached).__name__}, expected a mapping"
                )
        except Exception as e:
            self._report("labels_cache_read_failed", e)
            raise CacheReadError(
                "An error occurred while fetching data from the cache."
            ) from e

        result: Dict[LabelId, str] = {}
        missing: List[str] = []
        for key, ids in groups.items():
            value = cached.get(key)
            # Anything but a string, including a cached None, is a miss
            if isinstance(value, str):
                for label_id in ids:
                    result[label_id] = value
            else:
                missing.append(key)

        if not missing:
            log.debug("labels_cache_hit")
            return result

        rows = await self.connector.fetch_labels(
            locale_id, [groups[key][0] for key in missing]
        )
        fetched = match_rows(rows, [label_id for key in missing for label_id in groups[key]])
        result.update(fetched)
        log.debug(
            "labels_cache_partial_hit",
            hits=len(groups) - len(missing),
            misses=len(missing),
            found=len(rows),
        )

        if not fetched or not self.cache_ready():
            return result

        backfill = {
            key: fetched[groups[key][0]] for key in missing if groups[key][0] in fetched
        }
        try:
            await self.cache.push_multi(backfill)
        except Exception as e:
            self._report("labels_cache_write_failed", e)
            raise CacheWriteError(
                "An error occurred while saving elements within the cache."
            ) from e

        return result

    def _report(self, event: str, error: Exception) -> None:
        if self.verbose:
            logger.warning(event, error=str(error), error_type=type(error).__name__)
