"""Fixtures for localekit tests.

Builds temporary SQLite label databases with the ``locales``/``labels``
layout, plus an optional ``meta`` table.
"""

import sqlite3
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pytest

from localekit.cache import InMemoryCache
from localekit.store import StoreConnector

LOCALES = [
    (1, "en", "en", 0),
    (2, "fr", "fr-FR", 1),
]

LABELS = [
    (1, 1, "Welcome"),
    (2, 1, "Hello"),
    (3, 1, "Goodbye"),
    (4, 1, "Thanks"),
    (1, 2, "Bienvenue"),
    (2, 2, "Bonjour"),
]


def build_label_database(
    path: Path,
    locales: Iterable[Tuple] = LOCALES,
    labels: Iterable[Tuple] = LABELS,
    meta: Optional[Dict[str, str]] = None,
) -> str:
    """Create a label database at ``path`` and return the path as a string."""
    connection = sqlite3.connect(str(path))
    try:
        connection.execute(
            "CREATE TABLE locales (id INTEGER PRIMARY KEY, lang TEXT, code TEXT, locked INTEGER)"
        )
        connection.execute(
            "CREATE TABLE labels (id INTEGER, locale INTEGER, value TEXT, PRIMARY KEY (id, locale))"
        )
        connection.executemany("INSERT INTO locales VALUES (?, ?, ?, ?)", list(locales))
        connection.executemany("INSERT INTO labels VALUES (?, ?, ?)", list(labels))
        if meta is not None:
            connection.execute("CREATE TABLE meta (key TEXT PRIMARY KEY, value TEXT)")
            connection.executemany("INSERT INTO meta VALUES (?, ?)", list(meta.items()))
        connection.commit()
    finally:
        connection.close()
    return str(path)


def open_connector(path: str) -> StoreConnector:
    """Open a read-only connector synchronously, for use in fixtures."""
    uri = f"{Path(path).resolve().as_uri()}?mode=ro"
    connection = sqlite3.connect(uri, uri=True, check_same_thread=False)
    connection.row_factory = sqlite3.Row
    return StoreConnector(path, connection)


@pytest.fixture
def label_db_path(tmp_path):
    """Label database with locales "en" (id 1) and "fr-FR" (id 2)."""
    return build_label_database(tmp_path / "labels.db")


@pytest.fixture
def label_db_with_meta(tmp_path):
    """Label database carrying an explicit identifier in its meta table."""
    return build_label_database(
        tmp_path / "labels_meta.db", meta={"identifier": "pkg-v1"}
    )


@pytest.fixture
def other_label_db_path(tmp_path):
    """Second label database with a single German locale."""
    return build_label_database(
        tmp_path / "other.db",
        locales=[(7, "de", "de-DE", 0)],
        labels=[(2, 7, "Hallo")],
    )


@pytest.fixture
def connector(label_db_path):
    """Read-only connector to the default label database."""
    store = open_connector(label_db_path)
    yield store
    store.close()


@pytest.fixture
def memory_cache():
    """Fresh in-memory cache handler."""
    return InMemoryCache(namespace="test")
