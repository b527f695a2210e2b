"""Local persistence adapter — one storage boundary, backend chosen by config."""

from __future__ import annotations

from typing import Optional

from hrm.config import Settings, get_settings
from hrm.storage.base import NAMESPACE_KEYS, StorageBackendError, StorageService
from hrm.storage.file import JsonFileStorage
from hrm.storage.memory import MemoryStorage
from hrm.storage.sql import SqlStorage


def create_storage(config: Optional[Settings] = None) -> StorageService:
    """Build the storage backend named by ``STORAGE_BACKEND``."""
    config = config or get_settings()
    backend = config.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return JsonFileStorage(config.STORAGE_PATH)
    if backend == "sql":
        return SqlStorage(config.STORAGE_DATABASE_URL)
    raise ValueError(
        f"Unknown STORAGE_BACKEND {config.STORAGE_BACKEND!r} (expected memory, file or sql)"
    )


__all__ = [
    "NAMESPACE_KEYS",
    "JsonFileStorage",
    "MemoryStorage",
    "SqlStorage",
    "StorageBackendError",
    "StorageService",
    "create_storage",
]
