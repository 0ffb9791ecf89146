"""Read-only access to SQLite label databases.

Main components:
- connector: StoreConnector owning one read-only connection
- identifier: PackageIdentifierManager deriving cache namespace identifiers
- models: LocaleInfo and LabelRow rows
"""

from localekit.store.connector import StoreConnector
from localekit.store.identifier import PackageIdentifierManager, derive_identifier
from localekit.store.models import LabelId, LabelRow, LocaleInfo

__all__ = [
    "StoreConnector",
    "PackageIdentifierManager",
    "derive_identifier",
    "LabelId",
    "LabelRow",
    "LocaleInfo",
]
