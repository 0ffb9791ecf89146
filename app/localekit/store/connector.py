"""Read-only connection to a SQLite label database.

The connector owns exactly one ``sqlite3`` connection opened in read-only mode.
Queries are parameterized and run in a worker thread through
``asyncio.to_thread`` so callers never block the event loop.
"""

import asyncio
import sqlite3
import threading
from pathlib import Path
from typing import Any, List, Optional, Sequence

from localekit.errors import NotConnectedError, StoreError
from localekit.logging import get_module_logger
from localekit.store.models import LabelId, LabelRow, LocaleInfo

logger = get_module_logger()

SELECT_LOCALE_BY_CODE = "SELECT id FROM locales WHERE code = ? LIMIT 1;"
SELECT_LOCALE_BY_LANG = "SELECT id FROM locales WHERE lang = ? LIMIT 1;"
SELECT_ALL_LOCALES = "SELECT lang, code, id, locked FROM locales;"
SELECT_LABELS_FOR_LOCALE = "SELECT id, value FROM labels WHERE locale = ?;"
SELECT_META_VALUE = "SELECT value FROM meta WHERE key = ? LIMIT 1;"


def _labels_in_query(count: int) -> str:
    placeholders = ",".join("?" for _ in range(count))
    return f"SELECT id, value FROM labels WHERE locale = ? AND id IN ({placeholders});"


class StoreConnector:
    """Owns a single read-only connection to a label database.

    Use ``StoreConnector.open`` to create one; the constructor only wraps an
    already opened connection.

    Attributes:
        path: Database path exactly as given by the caller.
    """

    def __init__(self, path: str, connection: sqlite3.Connection):
        self.path = path
        self._connection: Optional[sqlite3.Connection] = connection
        self._lock = threading.Lock()

    @classmethod
    async def open(cls, path: str) -> "StoreConnector":
        """Open a read-only connection to the database at ``path``.

        Args:
            path: Path to the SQLite database file.

        Returns:
            Connected StoreConnector.

        Raises:
            StoreError: If the database cannot be opened.
        """
        uri = f"{Path(path).resolve().as_uri()}?mode=ro"

        def _connect() -> sqlite3.Connection:
            connection = sqlite3.connect(uri, uri=True, check_same_thread=False)
            connection.row_factory = sqlite3.Row
            return connection

        try:
            connection = await asyncio.to_thread(_connect)
        except sqlite3.Error as e:
            raise StoreError("Unable to connect to the package.") from e

        logger.debug("store_connected", path=path)
        return cls(path, connection)

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def close(self) -> None:
        """Close the connection; later queries raise NotConnectedError."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("store_closed", path=self.path)

    def _execute(self, sql: str, params: Sequence[Any], one: bool) -> Any:
        with self._lock:
            if self._connection is None:
                raise NotConnectedError("Not connected to the package.")
            cursor = self._connection.execute(sql, tuple(params))
            try:
                return cursor.fetchone() if one else cursor.fetchall()
            finally:
                cursor.close()

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        """Run a query and return its first row, or None."""
        return await self._run(sql, params, one=True)

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        """Run a query and return every row."""
        return await self._run(sql, params, one=False)

    async def _run(self, sql: str, params: Sequence[Any], one: bool) -> Any:
        if self._connection is None:
            raise NotConnectedError("Not connected to the package.")
        try:
            return await asyncio.to_thread(self._execute, sql, params, one)
        except sqlite3.Error as e:
            raise StoreError(
                "Unable to complete the transaction with the database."
            ) from e

    async def find_locale_id_by_code(self, code: str) -> Optional[int]:
        """Return the id of the locale whose code matches exactly."""
        row = await self.fetch_one(SELECT_LOCALE_BY_CODE, [code])
        return row["id"] if row is not None else None

    async def find_locale_id_by_language(self, language: str) -> Optional[int]:
        """Return the id of the first locale of a language family."""
        row = await self.fetch_one(SELECT_LOCALE_BY_LANG, [language])
        return row["id"] if row is not None else None

    async def list_locales(self) -> List[LocaleInfo]:
        rows = await self.fetch_all(SELECT_ALL_LOCALES)
        return [
            LocaleInfo(
                language=row["lang"],
                locale=row["code"],
                id=row["id"],
                locked=row["locked"] in (1, True),
            )
            for row in rows
        ]

    async def fetch_labels(
        self, locale_id: int, label_ids: Sequence[LabelId]
    ) -> List[LabelRow]:
        """Fetch several labels of one locale in a single query.

        Ids with no matching row are simply absent from the result.
        """
        if not label_ids:
            return []
        rows = await self.fetch_all(
            _labels_in_query(len(label_ids)), [locale_id, *label_ids]
        )
        return [LabelRow(id=row["id"], value=row["value"]) for row in rows]

    async def fetch_all_labels(self, locale_id: int) -> List[LabelRow]:
        rows = await self.fetch_all(SELECT_LABELS_FOR_LOCALE, [locale_id])
        return [LabelRow(id=row["id"], value=row["value"]) for row in rows]

    async def get_meta_value(self, key: str) -> Optional[str]:
        """Read a value from the optional ``meta`` table.

        Returns:
            The stored value, or None when the table or row does not exist.

        Raises:
            StoreError: On any other database failure.
        """
        try:
            row = await self.fetch_one(SELECT_META_VALUE, [key])
        except StoreError as e:
            cause = e.__cause__
            if isinstance(cause, sqlite3.OperationalError) and "no such table" in str(
                cause
            ):
                logger.debug("meta_table_missing", path=self.path)
                return None
            raise
        if row is None:
            return None
        return row["value"]
