"""
Storage layer for AccountStore.

Provides the SQLite Store, its configuration, the schema migration runner
and the error types raised by storage operations.
"""

from accountstore.storage.errors import (
    DataDeserializationError,
    InputSerializationError,
    MigrationError,
    QueryError,
    StoreConnectionError,
    StoreError,
)
from accountstore.storage.store import Store, StoreConfig

__all__ = [
    "Store",
    "StoreConfig",
    "StoreError",
    "StoreConnectionError",
    "MigrationError",
    "QueryError",
    "InputSerializationError",
    "DataDeserializationError",
]
