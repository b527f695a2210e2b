"""JSON-file storage backend.

The file holds one JSON object mapping each key to its raw JSON string.
Every mutation rewrites the file through a temp file + ``os.replace``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from hrm.storage.base import StorageBackendError, StorageService

logger = logging.getLogger(__name__)


class JsonFileStorage(StorageService):
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._items: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError):
            logger.error("Storage file %s is unreadable; starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.error("Storage file %s is not a JSON object; starting empty", self.path)
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def _flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".hrm-", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._items, fh, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            raise StorageBackendError(f"Cannot write {self.path}: {e}") from e

    def _read(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def _write(self, key: str, raw: str) -> None:
        previous = self._items.get(key)
        self._items[key] = raw
        try:
            self._flush()
        except StorageBackendError:
            if previous is None:
                self._items.pop(key, None)
            else:
                self._items[key] = previous
            raise

    def _delete(self, key: str) -> None:
        if key not in self._items:
            return
        previous = self._items.pop(key)
        try:
            self._flush()
        except StorageBackendError:
            self._items[key] = previous
            raise

    def keys(self) -> Iterable[str]:
        return list(self._items)
