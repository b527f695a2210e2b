"""Analytics & reports — workforce figures from remote employees plus local records."""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from hrm.client.api import ApiClient
from hrm.client.schemas import RemoteEmployee
from hrm.common.constants import DEPARTED_STATUSES, AttendanceStatus
from hrm.notifications import NotificationBus
from hrm.records.service import RecordStores
from hrm.views.base import FeatureView

_ATTENDED = {AttendanceStatus.present.value, AttendanceStatus.late.value, AttendanceStatus.half_day.value}


class AnalyticsReport(BaseModel):
    headcount: int = 0
    headcount_by_department: dict[str, int] = Field(default_factory=dict)
    attrition_rate: float = 0
    average_tenure_years: float = 0
    average_salary: float = 0
    payroll_total: float = 0
    attendance_rate: float = 0


class AnalyticsReportsView(FeatureView[RemoteEmployee]):
    title = "analytics"
    entity = "Report"
    search_fields = ("name", "department", "position")
    filter_fields = ("department",)

    def __init__(
        self,
        client: ApiClient,
        stores: RecordStores,
        bus: Optional[NotificationBus] = None,
    ) -> None:
        super().__init__(bus)
        self.client = client
        self.stores = stores

    async def fetch(self) -> list[RemoteEmployee]:
        return [RemoteEmployee.model_validate(e) for e in await self.client.get_all_employees()]

    def report(self, today: Optional[date] = None, pay_period: Optional[str] = None) -> AnalyticsReport:
        today = today or date.today()
        employees = self.filtered
        total = len(employees)

        departed = sum(1 for e in employees if e.status in {s.value for s in DEPARTED_STATUSES})
        tenures = [
            (today - joined).days / 365.25
            for e in employees
            if (joined := _parse_date(e.joining_date)) is not None and joined <= today
        ]
        salaries = [e.salary for e in employees if e.salary]

        payroll = (
            self.stores.payroll.get_by_period(pay_period) if pay_period
            else self.stores.payroll.get_all()
        )
        attendance = self.stores.attendance.get_all()
        attended = sum(1 for r in attendance if r.status in _ATTENDED)

        return AnalyticsReport(
            headcount=total,
            headcount_by_department=dict(
                Counter(e.department or "Unassigned" for e in employees).most_common()
            ),
            attrition_rate=round(departed / total * 100, 1) if total else 0,
            average_tenure_years=round(sum(tenures) / len(tenures), 1) if tenures else 0,
            average_salary=round(sum(salaries) / len(salaries), 2) if salaries else 0,
            payroll_total=round(sum(r.net_salary or 0 for r in payroll), 2),
            attendance_rate=round(attended / len(attendance) * 100, 1) if attendance else 0,
        )


def _parse_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None
