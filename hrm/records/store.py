"""Generic CRUD record store over the key-value storage adapter.

Each store owns one storage key holding a JSON array. Every mutation reads
the raw array, changes the one entry it targets, and writes the array back.
"""

from __future__ import annotations

import logging
import random
import string
import time
from typing import Any, Callable, ClassVar, Generic, Mapping, Optional, TypeVar

from pydantic import ValidationError

from hrm.common.constants import StorageKey
from hrm.common.exceptions import ValidationException
from hrm.common.filters import apply_filters
from hrm.records.schemas import LocalRecord
from hrm.storage.base import StorageService

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=LocalRecord)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(prefix: str, *, now: Optional[Callable[[], float]] = None) -> str:
    """``{prefix}_{epoch millis}_{9 base-36 chars}``."""
    millis = int((now or time.time)() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{prefix}_{millis}_{suffix}"


class RecordStore(Generic[R]):
    """get_all / get_by_id / add / update / remove for one record type."""

    model: ClassVar[type[LocalRecord]]
    key: ClassVar[StorageKey]
    prefix: ClassVar[str]

    def __init__(self, storage: StorageService) -> None:
        self.storage = storage

    # ── Read ────────────────────────────────────────────────────────

    def get_all(self) -> list[R]:
        records: list[R] = []
        for item in self._load_raw():
            try:
                records.append(self.model.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed %s entry: %s", self.model.__name__, e.errors()[:1]
                )
        return records

    def get_by_id(self, record_id: str) -> Optional[R]:
        return next((r for r in self.get_all() if r.id == record_id), None)

    def filter(self, **filters: Any) -> list[R]:
        """Records matching ``apply_filters`` semantics (``status="active"``, ``date__from=...``)."""
        return apply_filters(self.get_all(), filters)

    # ── Write ───────────────────────────────────────────────────────
    # Writes work on the raw stored array: only the touched entry is
    # validated, every other entry is written back exactly as it was read.

    def add(self, data: Mapping[str, Any] | LocalRecord) -> R:
        """Append a new record under a freshly generated id."""
        values = self._as_dict(data)
        values["id"] = generate_id(self.prefix)
        record = self._validate(values)

        raw = self._load_raw()
        raw.append(record.to_storage())
        self.storage.set(self.key, raw)
        return record

    def update(self, record_id: str, partial: Mapping[str, Any]) -> Optional[R]:
        """Shallow-merge *partial* onto the stored record; ``None`` if absent."""
        raw = self._load_raw()
        index = self._index_of(raw, record_id)
        if index is None:
            return None

        changes = self._to_aliases(self._normalise_keys(partial))
        changes.pop("id", None)
        current = raw[index]
        record = self._validate({**current, **changes})

        # unknown keys on the stored entry survive the merge
        stored = {**current, **record.to_storage()}
        for alias, value in changes.items():
            if value is None:
                stored.pop(alias, None)
        raw[index] = stored
        self.storage.set(self.key, raw)
        return record

    def remove(self, record_id: str) -> bool:
        raw = self._load_raw()
        index = self._index_of(raw, record_id)
        if index is None:
            return False
        del raw[index]
        self.storage.set(self.key, raw)
        return True

    # ── Internal helpers ────────────────────────────────────────────

    def _load_raw(self) -> list[Any]:
        raw = self.storage.get(self.key)
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning("Storage key %s does not hold a list; ignoring", self.key.value)
            return []
        return raw

    @staticmethod
    def _index_of(raw: list[Any], record_id: str) -> Optional[int]:
        return next(
            (i for i, item in enumerate(raw) if isinstance(item, dict) and item.get("id") == record_id),
            None,
        )

    def _validate(self, values: dict[str, Any]) -> R:
        try:
            return self.model.model_validate(values)
        except ValidationError as e:
            raise ValidationException.from_pydantic(e) from e

    def _as_dict(self, data: Mapping[str, Any] | LocalRecord) -> dict[str, Any]:
        if isinstance(data, LocalRecord):
            return data.model_dump()
        return self._normalise_keys(data)

    def _normalise_keys(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Accept both snake_case names and camelCase aliases."""
        fields = self.model.model_fields
        by_alias = {f.alias: name for name, f in fields.items() if f.alias}
        return {by_alias.get(k, k): v for k, v in data.items() if by_alias.get(k, k) in fields}

    def _to_aliases(self, values: Mapping[str, Any]) -> dict[str, Any]:
        fields = self.model.model_fields
        return {(fields[name].alias or name): value for name, value in values.items()}
