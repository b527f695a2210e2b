"""Document management — local document index with archiving."""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from hrm.common.constants import DocumentStatus
from hrm.notifications import NotificationBus
from hrm.records.schemas import Document
from hrm.records.service import DocumentStore
from hrm.views.base import LocalStoreView


class DocumentStats(BaseModel):
    total: int = 0
    active: int = 0
    archived: int = 0
    total_size: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)


class DocumentManagementView(LocalStoreView[Document]):
    title = "documents"
    entity = "Document"
    search_fields = ("name", "type", "uploaded_by")
    filter_fields = ("category", "status")
    required_fields = ("name",)

    def __init__(self, store: DocumentStore, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(store, bus)

    def stats(self) -> DocumentStats:
        return DocumentStats(
            total=len(self.records),
            active=sum(1 for d in self.records if d.status == DocumentStatus.active),
            archived=sum(1 for d in self.records if d.status == DocumentStatus.archived),
            total_size=sum(d.size for d in self.records),
            by_category=dict(Counter(d.category for d in self.records)),
        )

    @property
    def categories(self) -> list[str]:
        return sorted({d.category for d in self.records})

    def upload(
        self,
        name: str,
        *,
        type: str = "",
        size: int = 0,
        uploaded_by: str = "",
        category: str = "General",
        today: Optional[date] = None,
    ) -> Document:
        """Register a document's metadata (file contents are not stored)."""
        document = self.store.add({
            "name": name,
            "type": type,
            "size": size,
            "uploaded_by": uploaded_by,
            "category": category,
            "upload_date": (today or date.today()).isoformat(),
        })
        self.records = self.store.get_all()
        self.bus.success("Document uploaded", name)
        return document

    def archive(self, record_id: str) -> Optional[Document]:
        updated = self._set_status(record_id, DocumentStatus.archived.value)
        if updated is not None:
            self.bus.success("Document archived", updated.name)
        return updated

    def restore(self, record_id: str) -> Optional[Document]:
        updated = self._set_status(record_id, DocumentStatus.active.value)
        if updated is not None:
            self.bus.success("Document restored", updated.name)
        return updated
