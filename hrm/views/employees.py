"""Employee management — remote directory with CSV export / import."""

from __future__ import annotations

from typing import Any, Optional

from hrm.client.api import ApiClient
from hrm.client.schemas import EmployeeCreate, EmployeeUpdate, RemoteEmployee
from hrm.csv_io import ImportReport, export_employees, import_employees
from hrm.notifications import NotificationBus
from hrm.views.base import FeatureView, wire_body


class EmployeeManagementView(FeatureView[RemoteEmployee]):
    title = "employees"
    entity = "Employee"
    search_fields = ("name", "email", "employee_id", "department")
    filter_fields = ("department", "status")
    required_fields = ("name", "email")

    def __init__(self, client: ApiClient, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(bus)
        self.client = client

    async def fetch(self) -> list[RemoteEmployee]:
        return [RemoteEmployee.model_validate(e) for e in await self.client.get_all_employees()]

    async def create(self, values: dict[str, Any]) -> Any:
        return await self.client.add_employee(wire_body(EmployeeCreate, values))

    async def update(self, record_id: str, values: dict[str, Any]) -> Any:
        return await self.client.update_employee(record_id, wire_body(EmployeeUpdate, values))

    async def remove(self, record_id: str) -> None:
        await self.client.delete_employee(record_id)

    def form_values(self, record: RemoteEmployee) -> dict[str, Any]:
        return record.model_dump(include=set(EmployeeUpdate.model_fields), exclude_none=True)

    # ── Derived ─────────────────────────────────────────────────────

    @property
    def departments(self) -> list[str]:
        return sorted({e.department for e in self.records if e.department})

    # ── CSV ─────────────────────────────────────────────────────────

    def export_csv(self) -> str:
        """Currently filtered employees as CSV text."""
        text = export_employees(self.filtered)
        self.bus.success("Export complete", f"Exported {len(self.filtered)} employees")
        return text

    async def import_csv(self, text: str) -> ImportReport:
        report = await import_employees(self.client, text)
        if report.succeeded:
            self.bus.success("Import complete", report.summary())
            await self.load()
        else:
            self.bus.error("Import failed", report.summary())
        return report
