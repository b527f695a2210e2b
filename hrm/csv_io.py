"""Employee CSV export / import.

Export quotes every field. Import is line-oriented: each line is split on
commas and surrounding quotes are stripped, so quoted fields containing
commas are not supported.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Optional

from hrm.client.schemas import EmployeeCreate
from hrm.common.exceptions import AppException
from hrm.common.filters import get_field

if TYPE_CHECKING:
    from hrm.client.api import ApiClient

logger = logging.getLogger(__name__)

EXPORT_HEADER = (
    "Name", "Email", "Phone", "Position", "Department", "Salary", "Joining Date", "Status",
)

# First non-empty attribute wins (remote employees vs. local records)
_EXPORT_FIELDS = (
    ("name",),
    ("email",),
    ("phone_number", "phone", "phoneNumber"),
    ("position",),
    ("department",),
    ("salary",),
    ("joining_date", "start_date", "joiningDate"),
    ("status",),
)

# normalised header cell → EmployeeCreate field
_IMPORT_COLUMNS = {
    "name": "name",
    "email": "email",
    "phone": "phone_number",
    "phonenumber": "phone_number",
    "position": "position",
    "department": "department",
    "salary": "salary",
    "joiningdate": "joining_date",
    "startdate": "joining_date",
    "status": "status",
}


@dataclass
class ImportReport:
    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def summary(self) -> str:
        text = f"Imported {self.succeeded} employees successfully"
        if self.failed:
            text += f" ({self.failed} failed)"
        return text


# ═════════════════════════════════════════════════════════════════════
# Export
# ═════════════════════════════════════════════════════════════════════


def export_employees(employees: Iterable[Any]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for employee in employees:
        writer.writerow([_cell(employee, names) for names in _EXPORT_FIELDS])
    return buffer.getvalue()


def _cell(record: Any, names: tuple[str, ...]) -> str:
    for name in names:
        value = get_field(record, name)
        if value not in (None, ""):
            value = getattr(value, "value", value)
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            return str(value)
    return ""


# ═════════════════════════════════════════════════════════════════════
# Import
# ═════════════════════════════════════════════════════════════════════


def _unquote(cell: str) -> str:
    cell = cell.strip()
    if len(cell) >= 2 and cell[0] == cell[-1] == '"':
        cell = cell[1:-1].replace('""', '"')
    return cell.strip()


def _split(line: str) -> list[str]:
    return [_unquote(cell) for cell in line.split(",")]


def parse_employee_rows(text: str) -> tuple[list[tuple[int, dict[str, Any]]], list[str]]:
    """Map each data line onto ``EmployeeCreate`` fields.

    Returns ``(rows, errors)`` where *rows* pairs the 1-based line number with
    the field dict and *errors* lists lines rejected before any request.
    """
    lines = [(n, line) for n, line in enumerate(text.splitlines(), start=1) if line.strip()]
    if not lines:
        return [], []

    _, header_line = lines[0]
    columns = [
        _IMPORT_COLUMNS.get(cell.lower().replace(" ", "").replace("_", ""))
        for cell in _split(header_line)
    ]

    rows: list[tuple[int, dict[str, Any]]] = []
    errors: list[str] = []
    for number, line in lines[1:]:
        values: dict[str, Any] = {}
        for column, cell in zip(columns, _split(line)):
            if column and cell:
                values[column] = cell

        if not values.get("name") or not values.get("email"):
            errors.append(f"Line {number}: name and email are required")
            continue

        if "salary" in values:
            salary = _parse_salary(values["salary"])
            if salary is None:
                errors.append(f"Line {number}: invalid salary {values['salary']!r}")
                continue
            values["salary"] = salary

        rows.append((number, values))
    return rows, errors


def _parse_salary(raw: str) -> Optional[float]:
    try:
        return float(raw.replace("$", "").replace(" ", ""))
    except ValueError:
        return None


async def import_employees(client: "ApiClient", text: str) -> ImportReport:
    """POST one ``add_employee`` request per parsed row, sequentially."""
    rows, errors = parse_employee_rows(text)
    report = ImportReport(failed=len(errors), errors=list(errors))

    for number, values in rows:
        try:
            await client.add_employee(EmployeeCreate.model_validate(values).to_wire())
        except AppException as e:
            report.failed += 1
            report.errors.append(f"Line {number}: {e.message}")
            logger.warning("CSV import line %d failed: %s", number, e.message)
        else:
            report.succeeded += 1

    logger.info("CSV import finished: %d ok, %d failed", report.succeeded, report.failed)
    return report
