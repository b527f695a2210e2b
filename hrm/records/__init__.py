"""Domain record stores — CRUD over one storage key per entity."""

from hrm.records.schemas import (
    AttendanceRecord,
    Document,
    Employee,
    LocalRecord,
    Meeting,
    PayrollRecord,
)
from hrm.records.service import (
    AttendanceStore,
    DocumentStore,
    EmployeeStore,
    MeetingStore,
    PayrollStore,
    RecordStores,
    seed_sample_data,
)
from hrm.records.store import RecordStore, generate_id

__all__ = [
    "AttendanceRecord",
    "AttendanceStore",
    "Document",
    "DocumentStore",
    "Employee",
    "EmployeeStore",
    "LocalRecord",
    "Meeting",
    "MeetingStore",
    "PayrollRecord",
    "PayrollStore",
    "RecordStore",
    "RecordStores",
    "generate_id",
    "seed_sample_data",
]
