"""Services package."""

from expense_tracker.services.storage import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
    InvalidKeyError,
    KeyValueStorageInterface,
    StorageError,
)

__all__ = [
    # Storage services
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
    "InvalidKeyError",
    "KeyValueStorageInterface",
    "StorageError",
]
