"""Key-value storage contract shared by every backend.

Values are JSON-serialised on the way in and parsed on the way out, the
way browser ``localStorage`` holds strings. Backends only move raw strings.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional, Union

from hrm.common.constants import TOKEN_KEY, USER_KEY, StorageKey

logger = logging.getLogger(__name__)

Key = Union[StorageKey, str]

# Keys wiped by ``clear()``; anything else in the backend is left alone.
NAMESPACE_KEYS: tuple[str, ...] = tuple(k.value for k in StorageKey) + (TOKEN_KEY, USER_KEY)


class StorageBackendError(Exception):
    """Raised by a backend when the underlying medium fails."""


def _key(key: Key) -> str:
    return key.value if isinstance(key, StorageKey) else key


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class StorageService(ABC):
    """get / set / remove / clear over a fixed string namespace."""

    # ── Backend primitives ──────────────────────────────────────────

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        ...

    @abstractmethod
    def _delete(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> Iterable[str]:
        ...

    # ── Public contract ─────────────────────────────────────────────

    def get(self, key: Key) -> Any:
        """Return the parsed value, or ``None`` if missing or malformed."""
        name = _key(key)
        try:
            raw = self._read(name)
        except StorageBackendError:
            logger.exception("Error reading storage item %r", name)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.error("Error parsing storage item %r; treating as empty", name)
            return None

    def set(self, key: Key, value: Any) -> None:
        """Serialise and persist *value*. Failures are logged, not raised."""
        name = _key(key)
        try:
            raw = json.dumps(value, default=_json_default)
            self._write(name, raw)
        except (TypeError, ValueError, StorageBackendError):
            logger.exception("Error saving storage item %r", name)

    def remove(self, key: Key) -> None:
        name = _key(key)
        try:
            self._delete(name)
        except StorageBackendError:
            logger.exception("Error removing storage item %r", name)

    def clear(self) -> None:
        """Remove every namespaced key."""
        for name in NAMESPACE_KEYS:
            self.remove(name)

    def close(self) -> None:
        """Release backend resources (no-op by default)."""
