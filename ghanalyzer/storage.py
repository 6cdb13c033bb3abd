"""
Key/value persistence for ghanalyzer.

Holds the credential, search history and bookmarks. Values must be
JSON-serializable.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ghanalyzer.logging import get_logger

logger = get_logger("storage")


class Storage(ABC):
    """Abstract base class for key/value storage backends."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key. Removing a missing key is a no-op."""
        pass

    def __contains__(self, key: object) -> bool:
        sentinel = object()
        return isinstance(key, str) and self.get(key, sentinel) is not sentinel


class MemoryStorage(Storage):
    """In-process storage. Nothing survives the interpreter."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStorage(Storage):
    """
    Storage backed by a single JSON object on disk.

    The whole file is rewritten on every mutation via a temporary file and
    ``os.replace``, so a removed key leaves no trace in the file.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize file storage.

        Args:
            path: Location of the JSON file (created on first write)
        """
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Could not read storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
