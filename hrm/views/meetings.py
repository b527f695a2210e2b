"""Meetings management — local meeting calendar with status transitions."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from hrm.common.constants import MeetingStatus
from hrm.common.exceptions import NotFoundException, ValidationException
from hrm.notifications import NotificationBus
from hrm.records.schemas import Meeting
from hrm.records.service import MeetingStore
from hrm.views.base import LocalStoreView

_TRANSITIONS = {
    MeetingStatus.scheduled: {MeetingStatus.in_progress, MeetingStatus.completed, MeetingStatus.cancelled},
    MeetingStatus.in_progress: {MeetingStatus.completed, MeetingStatus.cancelled},
    MeetingStatus.completed: set(),
    MeetingStatus.cancelled: {MeetingStatus.scheduled},
}


class MeetingStats(BaseModel):
    total: int = 0
    today: int = 0
    upcoming: int = 0
    completed: int = 0


class MeetingsManagementView(LocalStoreView[Meeting]):
    title = "meetings"
    entity = "Meeting"
    search_fields = ("title", "description")
    filter_fields = ("date", "type")
    required_fields = ("title", "date", "time")

    def __init__(self, store: MeetingStore, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(store, bus)

    def open_create(self, defaults: Optional[dict] = None) -> None:
        base = {"time": "09:00", "duration": 30, "type": "video", "priority": "medium"}
        super().open_create({**base, **(defaults or {})})

    def stats(self, now: Optional[datetime] = None) -> MeetingStats:
        now = now or datetime.now()
        today = now.date().isoformat()
        upcoming = {m.id for m in self.store.get_upcoming(now)}
        return MeetingStats(
            total=len(self.records),
            today=sum(1 for m in self.records if m.date == today),
            upcoming=sum(1 for m in self.records if m.id in upcoming),
            completed=sum(1 for m in self.records if m.status == MeetingStatus.completed),
        )

    # ── Status transitions ──────────────────────────────────────────

    def start(self, record_id: str) -> Optional[Meeting]:
        return self.transition(record_id, MeetingStatus.in_progress)

    def complete(self, record_id: str) -> Optional[Meeting]:
        return self.transition(record_id, MeetingStatus.completed)

    def cancel(self, record_id: str) -> Optional[Meeting]:
        return self.transition(record_id, MeetingStatus.cancelled)

    def reschedule(self, record_id: str, date: str, time: str) -> Optional[Meeting]:
        """Move a scheduled or cancelled meeting to a new slot."""
        meeting = self.store.get_by_id(record_id)
        if meeting is None:
            self._fail(NotFoundException(self.entity, record_id), "Meeting update failed")
            return None
        if meeting.status not in (MeetingStatus.scheduled, MeetingStatus.cancelled):
            self._fail(
                ValidationException({"status": [f"Cannot reschedule a meeting that is '{meeting.status}'"]}),
                "Meeting update failed",
            )
            return None
        updated = self.store.update(
            record_id, {"date": date, "time": time, "status": MeetingStatus.scheduled.value},
        )
        self.records = self.store.get_all()
        self.bus.success("Meeting rescheduled", f"{updated.title} · {date} {time}")
        return updated

    def transition(self, record_id: str, target: MeetingStatus) -> Optional[Meeting]:
        meeting = self.store.get_by_id(record_id)
        if meeting is not None and target not in _TRANSITIONS[MeetingStatus(meeting.status)]:
            self._fail(
                ValidationException(
                    {"status": [f"Cannot move meeting from '{meeting.status}' to '{target.value}'"]},
                ),
                "Meeting update failed",
            )
            return None
        updated = self._set_status(record_id, target.value)
        if updated is not None:
            self.bus.success(f"Meeting {target.value.replace('-', ' ')}", updated.title)
        return updated
