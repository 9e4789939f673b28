"""
Key/Value Storage

String key/value persistence used for the API token and the bibliography.

Implementations:
- MemoryStorage: process-local dict (tests, ephemeral sessions)
- JsonFileStorage: a single JSON object file, read and rewritten on every
  call so no handle or transaction is held between operations
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TOKEN_KEY = "scix_ads_api_token"
BIBLIOGRAPHY_KEY = "scix_bibliography"


@runtime_checkable
class KeyValueStorage(Protocol):
    """Synchronous string key/value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """In-memory KeyValueStorage."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStorage:
    """
    KeyValueStorage persisted as one JSON object on disk.

    An unreadable or non-object file is treated as empty; the next write
    replaces it.
    """

    FILE_NAME = "storage.json"

    def __init__(self, data_dir: str | Path, file_name: str | None = None):
        """
        Initialize file storage.

        Args:
            data_dir: Directory holding the storage file (created if missing)
            file_name: Override the default file name
        """
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.data_dir / (file_name or self.FILE_NAME)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected a JSON object")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class TokenStore:
    """API token persistence on top of a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, key: str = TOKEN_KEY):
        self._storage = storage
        self._key = key

    def get_token(self) -> str | None:
        return self._storage.get(self._key)

    def set_token(self, token: str) -> None:
        self._storage.set(self._key, token)

    def clear_token(self) -> None:
        self._storage.remove(self._key)

    def has_token(self) -> bool:
        token = self.get_token()
        return token is not None and len(token) > 0
