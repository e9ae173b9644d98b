"""
Local Key-Value Storage Implementations

FileKeyValueStorage keeps one UTF-8 file per key inside a data directory.
Writes go to a temporary file in the same directory which is then
renamed over the target, so a crash mid-write leaves the previous value
intact.

InMemoryKeyValueStorage is a dict. It is used by tests and by the
"memory" backend for throwaway sessions.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from expense_tracker.services.storage.interface import (
    InvalidKeyError,
    KeyValueStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")
_SUFFIX = ".json"


class FileKeyValueStorage(KeyValueStorageInterface):
    """
    File-backed key-value storage.

    The directory is created on first write, not on construction, so
    pointing the app at a fresh location has no side effects until
    something is saved.
    """

    def __init__(self, directory: Path, fsync: bool = True):
        self._directory = Path(directory)
        self._fsync = fsync

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Return the file that holds a key."""
        if not _KEY_PATTERN.match(key):
            raise InvalidKeyError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        temp_name: Optional[str] = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            # Temp file lives next to the target so os.replace stays on one filesystem
            with tempfile.NamedTemporaryFile(
                mode="wb",
                prefix=f"{key}-",
                suffix=".tmp",
                dir=self._directory,
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(value.encode("utf-8"))
                handle.flush()
                if self._fsync:
                    os.fsync(handle.fileno())
            os.replace(temp_name, path)
            temp_name = None
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        finally:
            if temp_name is not None:
                self._discard(temp_name)

        logger.debug("storage_key_written", key=key, path=str(path), size=len(value))

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e

    def _discard(self, temp_name: str) -> None:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("storage_temp_cleanup_failed", path=temp_name, error=str(e))


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Dict-backed storage. Values vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None
