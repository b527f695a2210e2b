"""Feature view base — load / search / filter / form / delete state machine.

A view holds its own copy of the records it shows. Failures never escape
``load``, ``submit`` or ``delete``: they are logged, kept on the view as
``error`` / ``error_kind`` and published on the notification bus.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from hrm.common.diagnostics import log_component_error
from hrm.common.exceptions import AppException, ErrorKind, NotFoundException, ValidationException
from hrm.common.filters import apply_filters, apply_search
from hrm.notifications import NotificationBus
from hrm.records.store import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

Confirm = Callable[[str], bool]


def wire_body(model: type[BaseModel], values: dict[str, Any]) -> dict[str, Any]:
    """Validate form *values* against a request model and dump them for the wire."""
    try:
        return model.model_validate(values).to_wire()  # type: ignore[attr-defined]
    except ValidationError as e:
        raise ValidationException.from_pydantic(e) from e


# ═════════════════════════════════════════════════════════════════════
# Form state
# ═════════════════════════════════════════════════════════════════════


@dataclass
class FormState:
    """Create/edit dialog state."""

    mode: Optional[str] = None  # "create" | "edit" | None
    editing_id: Optional[str] = None
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        return self.mode is not None

    def open_create(self, defaults: Optional[dict[str, Any]] = None) -> None:
        self.mode = "create"
        self.editing_id = None
        self.values = dict(defaults or {})

    def open_edit(self, record_id: str, values: dict[str, Any]) -> None:
        self.mode = "edit"
        self.editing_id = record_id
        self.values = dict(values)

    def close(self) -> None:
        self.mode = None
        self.editing_id = None
        self.values = {}


# ═════════════════════════════════════════════════════════════════════
# Base view
# ═════════════════════════════════════════════════════════════════════


class FeatureView(Generic[T]):
    """Common behaviour for every dashboard module."""

    title: ClassVar[str] = "records"
    entity: ClassVar[str] = "Record"
    search_fields: ClassVar[tuple[str, ...]] = ()
    filter_fields: ClassVar[tuple[str, ...]] = ()
    required_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, bus: Optional[NotificationBus] = None) -> None:
        self.bus = bus or NotificationBus()
        self.records: list[T] = []
        self.is_loading = False
        self.error: Optional[str] = None
        self.error_kind: Optional[ErrorKind] = None
        self.search_term = ""
        self.filters: dict[str, Any] = {name: "all" for name in self.filter_fields}
        self.form = FormState()
        self.form_errors: dict[str, str] = {}

    # ── Loading ─────────────────────────────────────────────────────

    async def fetch(self) -> list[T]:
        raise NotImplementedError

    async def load(self) -> bool:
        """Fetch into ``records``; ``False`` (with ``error`` set) on failure."""
        self.is_loading = True
        self.error = None
        self.error_kind = None
        try:
            self.records = await self.fetch()
        except AppException as e:
            self._fail(e, f"Failed to load {self.title}")
            return False
        finally:
            self.is_loading = False
        return True

    async def retry(self) -> bool:
        return await self.load()

    # ── Search / filter ─────────────────────────────────────────────

    @property
    def filtered(self) -> list[T]:
        matches = apply_search(self.records, self.search_term, self.search_fields)
        return apply_filters(matches, self.filters)

    def set_filter(self, name: str, value: Any) -> None:
        self.filters[name] = value

    # ── Form ────────────────────────────────────────────────────────

    def open_create(self, defaults: Optional[dict[str, Any]] = None) -> None:
        self.form_errors = {}
        self.form.open_create(defaults)

    def open_edit(self, record: T) -> None:
        self.form_errors = {}
        self.form.open_edit(self.record_id(record), self.form_values(record))

    def close_form(self) -> None:
        self.form_errors = {}
        self.form.close()

    def validate_form(self, values: dict[str, Any]) -> dict[str, str]:
        return {
            name: f"{name.replace('_', ' ').capitalize()} is required"
            for name in self.required_fields
            if values.get(name) in (None, "")
        }

    async def submit(self) -> Optional[Any]:
        """Create or update from ``form.values``; ``None`` when nothing was saved."""
        if not self.form.is_open:
            return None

        values = dict(self.form.values)
        self.form_errors = self.validate_form(values)
        if self.form_errors:
            self.bus.warning("Validation Error", "Please fill in all required fields")
            return None

        editing = self.form.mode == "edit"
        try:
            if editing:
                saved = await self.update(self.form.editing_id, values)
            else:
                saved = await self.create(values)
        except AppException as e:
            verb = "update" if editing else "create"
            self._fail(e, f"Failed to {verb} {self.entity.lower()}")
            return None

        self.close_form()
        self.bus.success(f"{self.entity} {'updated' if editing else 'created'} successfully")
        await self.load()
        return saved

    async def create(self, values: dict[str, Any]) -> Any:
        raise NotImplementedError

    async def update(self, record_id: str, values: dict[str, Any]) -> Any:
        raise NotImplementedError

    # ── Delete ──────────────────────────────────────────────────────

    async def delete(self, record_id: str, confirm: Confirm) -> bool:
        """Remove after *confirm* agrees; declining is a silent no-op."""
        if not confirm(f"Are you sure you want to delete this {self.entity.lower()}?"):
            return False
        try:
            await self.remove(record_id)
        except AppException as e:
            self._fail(e, f"Failed to delete {self.entity.lower()}")
            return False

        self.bus.success(f"{self.entity} deleted successfully")
        await self.load()
        return True

    async def remove(self, record_id: str) -> None:
        raise NotImplementedError

    # ── Record helpers ──────────────────────────────────────────────

    def record_id(self, record: T) -> str:
        return getattr(record, "id")

    def form_values(self, record: T) -> dict[str, Any]:
        if isinstance(record, BaseModel):
            return record.model_dump(exclude={"id"})
        return dict(record)  # type: ignore[call-overload]

    def find(self, record_id: str) -> Optional[T]:
        return next((r for r in self.records if self.record_id(r) == record_id), None)

    # ── Internal helpers ────────────────────────────────────────────

    def _fail(self, error: AppException, title: str) -> None:
        self.error = error.message
        self.error_kind = error.kind
        log_component_error(type(self).__name__, error)
        self.bus.error(title, error.message, entity_type=self.entity)


# ═════════════════════════════════════════════════════════════════════
# Local-store backed view
# ═════════════════════════════════════════════════════════════════════


class LocalStoreView(FeatureView[T]):
    """View over a ``RecordStore``; writes go straight to local storage."""

    def __init__(self, store: RecordStore, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(bus)
        self.store = store

    async def fetch(self) -> list[T]:
        return self.store.get_all()

    async def create(self, values: dict[str, Any]) -> T:
        return self.store.add(values)

    async def update(self, record_id: str, values: dict[str, Any]) -> T:
        updated = self.store.update(record_id, values)
        if updated is None:
            raise NotFoundException(self.entity, record_id)
        return updated

    async def remove(self, record_id: str) -> None:
        if not self.store.remove(record_id):
            raise NotFoundException(self.entity, record_id)

    def _set_status(self, record_id: str, status: str) -> Optional[T]:
        updated = self.store.update(record_id, {"status": status})
        if updated is None:
            self._fail(NotFoundException(self.entity, record_id), f"Failed to update {self.entity.lower()}")
            return None
        self.records = self.store.get_all()
        return updated
