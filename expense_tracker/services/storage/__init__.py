"""
Storage Services Package

Provides the key-value storage interface and its local implementations.
"""

from expense_tracker.services.storage.interface import (
    InvalidKeyError,
    KeyValueStorageInterface,
    StorageError,
)
from expense_tracker.services.storage.local import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
)

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "InvalidKeyError",
    "StorageError",
    # Implementations
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
]
