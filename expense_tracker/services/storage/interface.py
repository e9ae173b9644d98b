"""
Abstract Storage Interface

DESIGN DECISION: The store talks to a tiny key-value interface.
This allows us to:
1. Keep the expense list in a plain local file
2. Use in-memory storage for testing
3. Swap the backend later without touching the store

The interface is intentionally simple - one string value per key.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for local key-value storage.

    Values are text. Every `set` overwrites the whole value for the key.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite the value stored under a key.

        Args:
            key: Storage key
            value: Text to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass

    def contains(self, key: str) -> bool:
        """Check whether a key is present."""
        return self.get(key) is not None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class InvalidKeyError(StorageError):
    """Key cannot be used with this backend."""
    pass
