"""Local record schemas — pydantic v2 models persisted by the record stores.

Naming conventions:
  - Python attributes are snake_case.
  - Persisted JSON uses the camelCase aliases (``employeeId``, ``startDate``)
    so stored collections stay compatible with the browser dashboard.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from hrm.common.constants import (
    AttendanceStatus,
    DocumentStatus,
    EmployeeStatus,
    MeetingPriority,
    MeetingStatus,
    MeetingType,
    PayrollStatus,
)


class LocalRecord(BaseModel):
    """Base for all stored records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )

    id: str

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class Employee(LocalRecord):
    name: str
    email: str
    phone: str = ""
    position: str = ""
    department: str = ""
    salary: float = 0
    start_date: str = ""
    status: EmployeeStatus = EmployeeStatus.active
    avatar: Optional[str] = None


# ═════════════════════════════════════════════════════════════════════
# Attendance
# ═════════════════════════════════════════════════════════════════════


class AttendanceRecord(LocalRecord):
    employee_id: str
    employee_name: str = ""
    date: str = Field(..., description="ISO date, YYYY-MM-DD")
    check_in: str = ""
    check_out: str = ""
    status: AttendanceStatus = AttendanceStatus.present
    hours_worked: float = 0


# ═════════════════════════════════════════════════════════════════════
# Payroll
# ═════════════════════════════════════════════════════════════════════


class PayrollRecord(LocalRecord):
    employee_id: str
    employee_name: str = ""
    position: str = ""
    base_salary: float = 0
    allowances: float = 0
    deductions: float = 0
    net_salary: Optional[float] = None
    pay_period: str = Field(..., description="YYYY-MM")
    status: PayrollStatus = PayrollStatus.pending

    @model_validator(mode="after")
    def _default_net_salary(self) -> "PayrollRecord":
        if self.net_salary is None:
            self.net_salary = self.base_salary + self.allowances - self.deductions
        return self


# ═════════════════════════════════════════════════════════════════════
# Documents
# ═════════════════════════════════════════════════════════════════════


class Document(LocalRecord):
    name: str
    type: str = ""
    size: int = 0
    upload_date: str = ""
    uploaded_by: str = ""
    category: str = "General"
    status: DocumentStatus = DocumentStatus.active


# ═════════════════════════════════════════════════════════════════════
# Meetings
# ═════════════════════════════════════════════════════════════════════


class Meeting(LocalRecord):
    title: str
    description: str = ""
    date: str
    time: str = "09:00"
    duration: int = 30
    type: MeetingType = MeetingType.video
    attendees: list[str] = Field(default_factory=list)
    agenda: list[str] = Field(default_factory=list)
    priority: MeetingPriority = MeetingPriority.medium
    status: MeetingStatus = MeetingStatus.scheduled
    meeting_link: Optional[str] = None
    location: Optional[str] = None
