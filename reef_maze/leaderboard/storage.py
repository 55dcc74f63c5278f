"""Opaque key/blob storage used to persist the leaderboard window."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from reef_maze.errors import StorageError

PathLike = Union[str, Path]

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class BlobStorage(ABC):
    """Minimal get/set/delete interface over string blobs."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous blob."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is not an error."""


class MemoryStorage(BlobStorage):
    """In-process storage, handy for tests and headless sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._blobs


class JsonFileStorage(BlobStorage):
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: PathLike) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Storage key '{key}' contains unsupported characters")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(f"Failed to delete {path}: {exc}") from exc


__all__ = ["BlobStorage", "JsonFileStorage", "MemoryStorage", "PathLike"]
