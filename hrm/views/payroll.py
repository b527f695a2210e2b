"""Payroll management — local pay records, status workflow and payroll runs."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel

from hrm.common.constants import DEPARTED_STATUSES, PayrollStatus
from hrm.common.exceptions import ValidationException
from hrm.notifications import NotificationBus
from hrm.records.schemas import Employee, PayrollRecord
from hrm.records.service import PayrollStore
from hrm.views.base import LocalStoreView

# pending → processed → paid; target → status it must come from
_REQUIRED_PREVIOUS = {
    PayrollStatus.processed: PayrollStatus.pending,
    PayrollStatus.paid: PayrollStatus.processed,
}


class PayrollStats(BaseModel):
    total_payroll: float = 0
    average_net: float = 0
    pending_count: int = 0
    processed_amount: float = 0
    paid_amount: float = 0


class PayrollManagementView(LocalStoreView[PayrollRecord]):
    title = "payroll"
    entity = "Payroll record"
    search_fields = ("employee_name", "employee_id", "position")
    filter_fields = ("pay_period", "status")
    required_fields = ("employee_id", "pay_period")

    def __init__(self, store: PayrollStore, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(store, bus)

    def stats(self) -> PayrollStats:
        records = self.filtered
        if not records:
            return PayrollStats()
        total = sum(r.net_salary or 0 for r in records)
        return PayrollStats(
            total_payroll=round(total, 2),
            average_net=round(total / len(records), 2),
            pending_count=sum(1 for r in records if r.status == PayrollStatus.pending),
            processed_amount=round(
                sum(r.net_salary or 0 for r in records if r.status == PayrollStatus.processed), 2,
            ),
            paid_amount=round(
                sum(r.net_salary or 0 for r in records if r.status == PayrollStatus.paid), 2,
            ),
        )

    # ── Status workflow ─────────────────────────────────────────────

    def process(self, record_id: str) -> Optional[PayrollRecord]:
        return self._advance(record_id, PayrollStatus.processed)

    def mark_paid(self, record_id: str) -> Optional[PayrollRecord]:
        return self._advance(record_id, PayrollStatus.paid)

    def _advance(self, record_id: str, target: PayrollStatus) -> Optional[PayrollRecord]:
        record = self.store.get_by_id(record_id)
        if record is not None and record.status != _REQUIRED_PREVIOUS[target].value:
            self._fail(
                ValidationException(
                    {"status": [f"Cannot move from '{record.status}' to '{target.value}'"]},
                ),
                "Payroll update failed",
            )
            return None
        updated = self._set_status(record_id, target.value)
        if updated is not None:
            self.bus.success(f"Payroll {target.value}", f"{updated.employee_name} · {updated.pay_period}")
        return updated

    # ── Payroll run ─────────────────────────────────────────────────

    def run_payroll(self, pay_period: str, employees: Iterable[Employee]) -> list[PayrollRecord]:
        """Create pending records for current employees lacking one in *pay_period*.

        Base salary is the annual salary divided by twelve.
        """
        covered = {r.employee_id for r in self.store.get_by_period(pay_period)}
        created: list[PayrollRecord] = []
        for employee in employees:
            if employee.id in covered or employee.status in {s.value for s in DEPARTED_STATUSES}:
                continue
            created.append(self.store.add({
                "employee_id": employee.id,
                "employee_name": employee.name,
                "position": employee.position,
                "base_salary": round(employee.salary / 12, 2),
                "pay_period": pay_period,
                "status": PayrollStatus.pending,
            }))
        self.records = self.store.get_all()
        self.bus.success("Payroll run complete", f"{len(created)} records created for {pay_period}")
        return created
