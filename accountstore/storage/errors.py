"""
Error types raised by the AccountStore storage layer.

Every storage operation raises one of these kinds, chained to the
underlying sqlite3 or pydantic exception.
"""


class StoreError(Exception):
    """Base class for all store errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreConnectionError(StoreError):
    """Raised when the database file cannot be opened or created"""
    pass


class MigrationError(StoreConnectionError):
    """Raised when the schema cannot be brought to the latest version"""
    pass


class QueryError(StoreError):
    """Raised when a read or write against the database fails"""
    pass


class InputSerializationError(StoreError):
    """Raised when a value cannot be encoded to its persisted form"""
    pass


class DataDeserializationError(StoreError):
    """Raised when a persisted value cannot be decoded to its typed form"""
    pass
