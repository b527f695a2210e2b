"""Attendance management — local daily records with check-in / check-out."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from hrm.common.constants import AttendanceStatus
from hrm.common.exceptions import ValidationException
from hrm.config import get_settings
from hrm.notifications import NotificationBus
from hrm.records.schemas import AttendanceRecord
from hrm.records.service import AttendanceStore
from hrm.views.base import LocalStoreView

_ATTENDED = (AttendanceStatus.present, AttendanceStatus.late, AttendanceStatus.half_day)


class AttendanceSummary(BaseModel):
    date: str
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    half_day: int = 0
    attendance_rate: float = 0
    average_hours: float = 0


class AttendanceManagementView(LocalStoreView[AttendanceRecord]):
    title = "attendance"
    entity = "Attendance record"
    search_fields = ("employee_name", "employee_id")
    filter_fields = ("date", "status")
    required_fields = ("employee_id", "date")

    def __init__(self, store: AttendanceStore, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(store, bus)

    def day_summary(self, day: str) -> AttendanceSummary:
        records = [r for r in self.records if r.date == day]
        counts = {status: sum(1 for r in records if r.status == status) for status in AttendanceStatus}
        attended = sum(counts[s] for s in _ATTENDED)
        worked = [r.hours_worked for r in records if r.hours_worked]
        return AttendanceSummary(
            date=day,
            total=len(records),
            present=counts[AttendanceStatus.present],
            absent=counts[AttendanceStatus.absent],
            late=counts[AttendanceStatus.late],
            half_day=counts[AttendanceStatus.half_day],
            attendance_rate=round(attended / len(records) * 100, 1) if records else 0,
            average_hours=round(sum(worked) / len(worked), 1) if worked else 0,
        )

    # ── Clock in / out ──────────────────────────────────────────────

    def check_in(
        self,
        employee_id: str,
        employee_name: str = "",
        at: Optional[datetime] = None,
    ) -> Optional[AttendanceRecord]:
        """Open today's record; arriving after the work-day start marks it late."""
        at = at or datetime.now()
        day = at.date().isoformat()
        clock = at.strftime("%H:%M")

        if any(r.employee_id == employee_id and r.date == day for r in self.store.get_all()):
            self._fail(
                ValidationException({"employee_id": [f"Already checked in on {day}"]}),
                "Check-in failed",
            )
            return None

        late = clock > get_settings().WORK_DAY_START
        record = self.store.add({
            "employee_id": employee_id,
            "employee_name": employee_name,
            "date": day,
            "check_in": clock,
            "status": AttendanceStatus.late if late else AttendanceStatus.present,
        })
        self.records = self.store.get_all()
        self.bus.success("Attendance updated successfully!", f"{employee_name or employee_id} checked in at {clock}")
        return record

    def check_out(self, record_id: str, at: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        record = self.store.get_by_id(record_id)
        if record is None or not record.check_in:
            self._fail(
                ValidationException({"check_in": ["No open check-in for this record"]}),
                "Check-out failed",
            )
            return None

        at = at or datetime.now()
        clock = at.strftime("%H:%M")
        updated = self.store.update(record_id, {
            "check_out": clock,
            "hours_worked": hours_between(record.check_in, clock),
        })
        self.records = self.store.get_all()
        self.bus.success("Attendance updated successfully!", f"{record.employee_name or record.employee_id} checked out at {clock}")
        return updated


def hours_between(start: str, end: str) -> float:
    """Hours from ``HH:MM`` *start* to *end*, two decimals; 0 if *end* is earlier."""
    start_h, start_m = (int(p) for p in start.split(":"))
    end_h, end_m = (int(p) for p in end.split(":"))
    minutes = (end_h * 60 + end_m) - (start_h * 60 + start_m)
    return round(max(minutes, 0) / 60, 2)
