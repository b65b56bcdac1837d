"""
String-to-string key-value stores.
Stand-ins for the host's local storage: one in memory, one backed by a file.
"""
import json
import logging
import os
import tempfile
from threading import Lock
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """
    Thread-safe in-memory key-value store.

    Usage:
        store = InMemoryKeyValueStore()
        store.set_item("us-yt-ratio", "{}")
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._store: Dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get_item(self, key: str) -> Optional[str]:
        """Get value by key, returns None if not found."""
        with self._lock:
            return self._store.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._store[key] = value

    def remove_item(self, key: str) -> bool:
        """Delete key, returns True if existed."""
        with self._lock:
            if key in self._store:
                del self._store[key]
                return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._store)


class FileKeyValueStore:
    """
    Key-value store persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary file and
    ``os.replace``, so readers never observe a half-written file.
    An unreadable file is treated as an empty store.
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._lock = Lock()

    @property
    def path(self) -> str:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> bool:
        with self._lock:
            data = self._read()
            if key not in data:
                return False
            del data[key]
            self._write(data)
            return True

    def clear(self) -> None:
        with self._lock:
            self._write({})

    def size(self) -> int:
        with self._lock:
            return len(self._read())

    def _read(self) -> Dict[str, str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable key-value file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Key-value file {self._path} is not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
