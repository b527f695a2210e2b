"""In-process storage backend."""

from __future__ import annotations

from typing import Iterable, Optional

from hrm.storage.base import StorageService


class MemoryStorage(StorageService):
    """Holds raw JSON strings in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._items[key] = raw

    def _delete(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._items)
