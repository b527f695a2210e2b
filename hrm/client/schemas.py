"""Remote (REST backend) Pydantic v2 schemas.

The backend speaks camelCase with Mongo-style ``_id`` keys, except for the
project's money/payment fields which are snake_case on the wire.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from hrm.common.constants import MilestoneStatus, ProjectPriority, ProjectStatus


def _id_field() -> Any:
    return Field(default="", validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")


class RemoteModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ═════════════════════════════════════════════════════════════════════
# Employees
# ═════════════════════════════════════════════════════════════════════


class RemoteEmployee(RemoteModel):
    id: str = _id_field()
    name: str = ""
    email: str = ""
    role: str = "employee"
    department: Optional[str] = None
    position: Optional[str] = None
    employee_id: Optional[str] = None
    salary: Optional[float] = None
    joining_date: Optional[str] = None
    phone_number: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


class EmployeeCreate(RemoteModel):
    """Body for ``POST /dashboard/admin/add_employee``."""

    name: str
    email: str
    position: Optional[str] = None
    phone_number: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[str] = None
    salary: Optional[float] = None
    status: Optional[str] = None


class EmployeeUpdate(RemoteModel):
    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    phone_number: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[str] = None
    salary: Optional[float] = None
    status: Optional[str] = None


# ═════════════════════════════════════════════════════════════════════
# Projects
# ═════════════════════════════════════════════════════════════════════


class Client(RemoteModel):
    name: str = ""
    email: str = ""
    company: str = ""
    phone: str = ""


class EmployeeRef(RemoteModel):
    id: str = _id_field()
    name: str = ""
    email: str = ""
    department: Optional[str] = None
    position: Optional[str] = None


class Allocation(RemoteModel):
    id: str = _id_field()
    date: Optional[str] = None
    amount: float = 0


class TeamMember(RemoteModel):
    id: str = _id_field()
    employee: EmployeeRef
    role: str = "other"
    allocation: list[Allocation] = Field(default_factory=list)

    @field_validator("employee", mode="before")
    @classmethod
    def _employee_ref(cls, value: Any) -> Any:
        # unpopulated references arrive as a bare id
        if isinstance(value, str):
            return {"_id": value}
        return value

    @field_validator("allocation", mode="before")
    @classmethod
    def _allocation_list(cls, value: Any) -> Any:
        # older endpoints send a single number
        if value is None:
            return []
        if isinstance(value, (int, float)):
            return [{"amount": value}]
        return value

    @property
    def current_allocation(self) -> float:
        return self.allocation[0].amount if self.allocation else 0


class Expense(RemoteModel):
    id: str = _id_field()
    description: str = ""
    amount: float = 0
    category: str = "other"
    date: Optional[str] = None


class Milestone(RemoteModel):
    id: str = _id_field()
    title: str
    description: str = ""
    due_date: Optional[str] = None
    completed_date: Optional[str] = None
    status: MilestoneStatus = MilestoneStatus.pending


class Project(RemoteModel):
    id: str = _id_field()
    name: str
    project_value: float = Field(
        default=0,
        validation_alias=AliasChoices("project_value", "budget", "projectValue"),
        serialization_alias="project_value",
    )
    status: ProjectStatus = ProjectStatus.planning
    priority: ProjectPriority = ProjectPriority.medium
    description: str = ""
    payment_type: Optional[str] = Field(default=None, alias="payment_type")
    payment_terms: Optional[str] = Field(default=None, alias="payment_terms")
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    actual_end_date: Optional[str] = None
    client: Optional[Client] = None
    team: list[TeamMember] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    profit: float = 0
    progress: float = 0
    is_overdue: bool = False
    duration: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    # ── Derived figures (reported, never enforced) ──────────────────

    @property
    def total_allocations(self) -> float:
        return sum(member.current_allocation for member in self.team)

    @property
    def total_expenses(self) -> float:
        return sum(expense.amount for expense in self.expenses)

    @property
    def expected_profit(self) -> float:
        return self.project_value - self.total_allocations - self.total_expenses

    @property
    def completed_milestones(self) -> int:
        return sum(1 for m in self.milestones if m.status == MilestoneStatus.completed)


class TeamMemberCreate(RemoteModel):
    employee: str
    role: str = "other"
    allocation: list[dict[str, Any]] = Field(default_factory=list)


class ProjectCreate(RemoteModel):
    """Body for ``POST /projects``."""

    name: str
    project_value: float = Field(alias="project_value")
    description: str = ""
    status: Optional[str] = None
    priority: Optional[str] = None
    payment_type: Optional[str] = Field(default=None, alias="payment_type")
    payment_terms: Optional[str] = Field(default=None, alias="payment_terms")
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    client: Optional[Client] = None
    team: list[TeamMemberCreate] = Field(default_factory=list)
    expenses: list[dict[str, Any]] = Field(default_factory=list)


class ProjectUpdate(RemoteModel):
    name: Optional[str] = None
    project_value: Optional[float] = Field(default=None, alias="project_value")
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    payment_type: Optional[str] = Field(default=None, alias="payment_type")
    payment_terms: Optional[str] = Field(default=None, alias="payment_terms")
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    actual_end_date: Optional[str] = None
    client: Optional[Client] = None


class MilestoneCreate(RemoteModel):
    title: str
    description: str = ""
    due_date: Optional[str] = None
    status: Optional[str] = None


class MilestoneUpdate(RemoteModel):
    milestone_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    completed_date: Optional[str] = None
    status: Optional[str] = None


class ProjectAnalytics(RemoteModel):
    project_id: str = ""
    project_name: str = ""
    status: str = ""
    priority: str = ""
    progress: float = 0
    is_overdue: bool = False
    duration: Optional[int] = None
    budget: float = 0
    total_allocation: float = 0
    total_expenses: float = 0
    profit: float = 0
    profit_margin: Union[str, float] = "0"
    team_size: int = 0
    milestones_completed: int = 0
    total_milestones: int = 0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    actual_end_date: Optional[str] = None


class ProfitsSummary(RemoteModel):
    total_projects: int = 0
    total_budget: float = 0
    total_allocations: float = 0
    total_expenses: float = 0
    total_profit: float = 0
    profit_margin: Union[str, float] = "0"

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class TotalProfits(RemoteModel):
    summary: ProfitsSummary = Field(default_factory=ProfitsSummary)
    project_details: list[dict[str, Any]] = Field(default_factory=list)


# ═════════════════════════════════════════════════════════════════════
# Dashboard / auth
# ═════════════════════════════════════════════════════════════════════


class AdminDashboard(RemoteModel):
    message: str = ""
    role: str = ""
    employee_count: int = 0
    total_profits: float = 0


class LoginCredentials(BaseModel):
    email: str
    password: str


class RegisterData(BaseModel):
    name: str
    email: str
    password: str
    role: Optional[str] = None
