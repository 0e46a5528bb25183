"""
Key-value persistence for the chat store.

The store only needs two calls: get(key) -> Optional[bytes] and set(key, bytes).
FileStorage keeps one file per key under a data directory (~/.chartbot/data by
default); MemoryStorage is the in-process variant used in tests.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from chartbot.errors import StorageError

DEFAULT_DATA_DIR = Path.home() / ".chartbot" / "data"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Optional[dict[str, bytes]] = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)


class FileStorage:
    """One file per key. Writes go through a temp file + rename."""

    def __init__(self, directory: "Path | str" = DEFAULT_DATA_DIR) -> None:
        self._dir = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key: {key!r}", code="invalid_key")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}", code="read_error")

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}", code="write_error")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError as e:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise StorageError(f"Failed to write {path}: {e}", code="write_error")
