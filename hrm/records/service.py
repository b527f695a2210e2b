"""Per-entity record stores plus sample-data seeding."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from hrm.common.constants import EmployeeStatus, MeetingStatus, StorageKey
from hrm.common.diagnostics import log_info
from hrm.records.schemas import AttendanceRecord, Document, Employee, Meeting, PayrollRecord
from hrm.records.store import RecordStore
from hrm.storage.base import StorageService


# ═════════════════════════════════════════════════════════════════════
# Stores
# ═════════════════════════════════════════════════════════════════════


class EmployeeStore(RecordStore[Employee]):
    model = Employee
    key = StorageKey.employees
    prefix = "emp"

    def get_by_department(self, department: str) -> list[Employee]:
        return [e for e in self.get_all() if e.department == department]

    def get_by_status(self, status: EmployeeStatus | str) -> list[Employee]:
        return self.filter(status=status)


class AttendanceStore(RecordStore[AttendanceRecord]):
    model = AttendanceRecord
    key = StorageKey.attendance
    prefix = "att"

    def get_by_employee(self, employee_id: str) -> list[AttendanceRecord]:
        return [r for r in self.get_all() if r.employee_id == employee_id]

    def get_by_date_range(self, start_date: str, end_date: str) -> list[AttendanceRecord]:
        """Inclusive range; ISO dates compare correctly as strings."""
        return [r for r in self.get_all() if start_date <= r.date <= end_date]


class PayrollStore(RecordStore[PayrollRecord]):
    model = PayrollRecord
    key = StorageKey.payroll
    prefix = "pay"

    def get_by_employee(self, employee_id: str) -> list[PayrollRecord]:
        return [r for r in self.get_all() if r.employee_id == employee_id]

    def get_by_period(self, pay_period: str) -> list[PayrollRecord]:
        return [r for r in self.get_all() if r.pay_period == pay_period]


class DocumentStore(RecordStore[Document]):
    model = Document
    key = StorageKey.documents
    prefix = "doc"

    def get_by_category(self, category: str) -> list[Document]:
        return [d for d in self.get_all() if d.category == category]


class MeetingStore(RecordStore[Meeting]):
    model = Meeting
    key = StorageKey.meetings
    prefix = "meet"

    def get_upcoming(self, now: Optional[datetime] = None) -> list[Meeting]:
        """Scheduled meetings starting after *now*."""
        now = now or datetime.now()
        upcoming = []
        for meeting in self.get_all():
            if meeting.status != MeetingStatus.scheduled:
                continue
            starts = _meeting_start(meeting)
            if starts is not None and starts > now:
                upcoming.append(meeting)
        return upcoming


def _meeting_start(meeting: Meeting) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(f"{meeting.date}T{meeting.time}")
    except ValueError:
        return None


# ═════════════════════════════════════════════════════════════════════
# Bundle
# ═════════════════════════════════════════════════════════════════════


@dataclass
class RecordStores:
    """All local stores bound to one storage backend."""

    employees: EmployeeStore
    attendance: AttendanceStore
    payroll: PayrollStore
    documents: DocumentStore
    meetings: MeetingStore

    @classmethod
    def from_storage(cls, storage: StorageService) -> "RecordStores":
        return cls(
            employees=EmployeeStore(storage),
            attendance=AttendanceStore(storage),
            payroll=PayrollStore(storage),
            documents=DocumentStore(storage),
            meetings=MeetingStore(storage),
        )


# ═════════════════════════════════════════════════════════════════════
# Sample data
# ═════════════════════════════════════════════════════════════════════


SAMPLE_EMPLOYEES = [
    {
        "name": "John Doe",
        "email": "john.doe@company.com",
        "phone": "+1 234 567 8900",
        "position": "Software Engineer",
        "department": "Engineering",
        "salary": 75000,
        "start_date": "2023-01-15",
        "status": "active",
    },
    {
        "name": "Jane Smith",
        "email": "jane.smith@company.com",
        "phone": "+1 234 567 8901",
        "position": "HR Manager",
        "department": "Human Resources",
        "salary": 65000,
        "start_date": "2022-06-01",
        "status": "active",
    },
    {
        "name": "Mike Johnson",
        "email": "mike.johnson@company.com",
        "phone": "+1 234 567 8902",
        "position": "Marketing Specialist",
        "department": "Marketing",
        "salary": 55000,
        "start_date": "2023-03-10",
        "status": "active",
    },
]


def seed_sample_data(stores: RecordStores, today: Optional[date] = None) -> dict[str, int]:
    """Insert sample employees and a standup meeting into empty collections.

    Returns how many records were added per collection.
    """
    added = {"employees": 0, "meetings": 0}

    if not stores.employees.get_all():
        for employee in SAMPLE_EMPLOYEES:
            stores.employees.add(employee)
            added["employees"] += 1

    if not stores.meetings.get_all():
        tomorrow = (today or date.today()) + timedelta(days=1)
        stores.meetings.add({
            "title": "Team Standup",
            "description": "Daily team standup meeting",
            "date": tomorrow.isoformat(),
            "time": "09:00",
            "duration": 30,
            "type": "video",
            "attendees": ["john.doe@company.com", "jane.smith@company.com"],
            "agenda": ["Yesterday progress", "Today goals", "Blockers"],
            "priority": "medium",
            "status": "scheduled",
            "meeting_link": "https://meet.example.com/team-standup",
        })
        added["meetings"] += 1

    if any(added.values()):
        log_info("Sample data seeded", "seed_sample_data", added)

    return added
