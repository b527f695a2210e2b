"""Project management — remote projects, team, milestones and portfolio metrics."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from hrm.client.api import ApiClient
from hrm.client.schemas import (
    MilestoneCreate,
    MilestoneUpdate,
    ProfitsSummary,
    Project,
    ProjectAnalytics,
    ProjectCreate,
    ProjectUpdate,
    RemoteEmployee,
    TeamMemberCreate,
    TotalProfits,
)
from hrm.common.constants import ProjectStatus
from hrm.common.diagnostics import log_error
from hrm.common.exceptions import AppException
from hrm.notifications import NotificationBus
from hrm.views.base import FeatureView, wire_body

logger = logging.getLogger(__name__)


class MonthlyRollup(BaseModel):
    month: str
    projects: int = 0
    revenue: float = 0
    profit: float = 0


class PortfolioMetrics(BaseModel):
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    overdue_projects: int = 0
    average_progress: float = 0
    total_team_members: int = 0
    total_value: float = 0
    total_profit: float = 0
    status_distribution: dict[str, int] = Field(default_factory=dict)
    priority_distribution: dict[str, int] = Field(default_factory=dict)
    monthly: list[MonthlyRollup] = Field(default_factory=list)


class ProjectManagementView(FeatureView[Project]):
    title = "projects"
    entity = "Project"
    search_fields = ("name", "description", "client.name", "client.company")
    filter_fields = ("status", "priority")
    required_fields = ("name", "project_value", "end_date")

    def __init__(self, client: ApiClient, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(bus)
        self.client = client
        self.employees: list[RemoteEmployee] = []
        self.profits_summary = ProfitsSummary()
        self.analytics: list[ProjectAnalytics] = []

    # ═════════════════════════════════════════════════════════════════
    # Loading
    # ═════════════════════════════════════════════════════════════════

    async def fetch(self) -> list[Project]:
        projects_response, employees = await asyncio.gather(
            self.client.get_projects(),
            self.client.get_all_employees(),
        )
        projects = [Project.model_validate(p) for p in (projects_response or {}).get("projects") or []]
        self.employees = [RemoteEmployee.model_validate(e) for e in employees]
        await self.load_analytics(projects)
        return projects

    async def load_analytics(self, projects: Optional[list[Project]] = None) -> None:
        """Profit summary plus per-project analytics; failures are logged only."""
        projects = self.records if projects is None else projects
        try:
            profits = await self.client.get_total_profits()
            totals = TotalProfits.model_validate({k: v for k, v in profits.items() if v is not None})
            self.profits_summary = totals.summary
            if projects:
                results = await asyncio.gather(
                    *(self.client.get_project_analytics(p.id) for p in projects)
                )
                self.analytics = [ProjectAnalytics.model_validate(a or {}) for a in results]
        except AppException as e:
            log_error(e, "ProjectManagementView.load_analytics")

    # ═════════════════════════════════════════════════════════════════
    # CRUD
    # ═════════════════════════════════════════════════════════════════

    def open_create(self, defaults: Optional[dict[str, Any]] = None) -> None:
        base = {
            "name": "",
            "project_value": 0,
            "description": "",
            "status": ProjectStatus.planning.value,
            "priority": "medium",
            "payment_type": "milestone",
        }
        super().open_create({**base, **(defaults or {})})

    def validate_form(self, values: dict[str, Any]) -> dict[str, str]:
        errors = super().validate_form(values)
        if "project_value" not in errors:
            try:
                positive = float(values["project_value"]) > 0
            except (TypeError, ValueError):
                positive = False
            if not positive:
                errors["project_value"] = "Project value must be greater than zero"
        return errors

    async def create(self, values: dict[str, Any]) -> Project:
        values = dict(values)
        if not values.get("start_date"):
            values["start_date"] = datetime.now(timezone.utc).isoformat()
        created = await self.client.create_project(wire_body(ProjectCreate, values))
        return Project.model_validate(created or {})

    async def update(self, record_id: str, values: dict[str, Any]) -> Project:
        updated = await self.client.update_project(record_id, wire_body(ProjectUpdate, values))
        return Project.model_validate(updated or {})

    async def remove(self, record_id: str) -> None:
        await self.client.delete_project(record_id)

    def form_values(self, record: Project) -> dict[str, Any]:
        return record.model_dump(mode="json", include=set(ProjectUpdate.model_fields), exclude_none=True)

    # ── Team ────────────────────────────────────────────────────────

    async def add_team_member(
        self,
        project_id: str,
        employee_id: str,
        *,
        role: str = "other",
        amount: float = 0,
        allocation_date: Optional[str] = None,
    ) -> Optional[Project]:
        member = TeamMemberCreate(
            employee=employee_id,
            role=role,
            allocation=[{
                "date": allocation_date or datetime.now(timezone.utc).isoformat(),
                "amount": amount,
            }],
        )
        return await self._mutate(
            self.client.add_team_member(project_id, member.to_wire()),
            "Team member added successfully",
            "Failed to add team member",
        )

    async def remove_team_member(self, project_id: str, employee_id: str) -> Optional[Project]:
        return await self._mutate(
            self.client.remove_team_member(project_id, employee_id),
            "Team member removed successfully",
            "Failed to remove team member",
        )

    # ── Milestones ──────────────────────────────────────────────────

    async def add_milestone(self, project_id: str, values: dict[str, Any]) -> Optional[Project]:
        try:
            body = wire_body(MilestoneCreate, values)
        except AppException as e:
            self._fail(e, "Failed to add milestone")
            return None
        return await self._mutate(
            self.client.add_milestone(project_id, body),
            "Milestone added successfully",
            "Failed to add milestone",
        )

    async def update_milestone(
        self,
        project_id: str,
        milestone_id: str,
        values: dict[str, Any],
    ) -> Optional[Project]:
        try:
            body = wire_body(MilestoneUpdate, {**values, "milestone_id": milestone_id})
        except AppException as e:
            self._fail(e, "Failed to update milestone")
            return None
        return await self._mutate(
            self.client.update_milestone(project_id, body),
            "Milestone updated successfully",
            "Failed to update milestone",
        )

    async def _mutate(self, call, success: str, failure: str) -> Optional[Project]:
        try:
            raw = await call
        except AppException as e:
            self._fail(e, failure)
            return None
        if not raw:
            await self.load()
            self.bus.success(success)
            return None
        project = Project.model_validate(raw)
        self.records = [project if p.id == project.id else p for p in self.records]
        self.bus.success(success)
        return project

    # ═════════════════════════════════════════════════════════════════
    # Portfolio metrics
    # ═════════════════════════════════════════════════════════════════

    def portfolio_metrics(self, projects: Optional[list[Project]] = None) -> PortfolioMetrics:
        projects = self.records if projects is None else projects
        total = len(projects)
        if not total:
            return PortfolioMetrics()

        monthly: dict[tuple[int, int], MonthlyRollup] = {}
        for project in projects:
            started = _parse_datetime(project.start_date)
            if started is None:
                continue
            bucket = monthly.setdefault(
                (started.year, started.month),
                MonthlyRollup(month=started.strftime("%b %Y")),
            )
            bucket.projects += 1
            bucket.revenue += project.project_value
            bucket.profit += project.profit

        return PortfolioMetrics(
            total_projects=total,
            active_projects=sum(1 for p in projects if p.status == ProjectStatus.active),
            completed_projects=sum(1 for p in projects if p.status == ProjectStatus.completed),
            overdue_projects=sum(1 for p in projects if p.is_overdue),
            average_progress=round(sum(p.progress for p in projects) / total, 1),
            total_team_members=sum(len(p.team) for p in projects),
            total_value=sum(p.project_value for p in projects),
            total_profit=sum(p.profit for p in projects),
            status_distribution=dict(Counter(_value(p.status) for p in projects)),
            priority_distribution=dict(Counter(_value(p.priority) for p in projects)),
            monthly=[monthly[key] for key in sorted(monthly)],
        )

    def team_candidates(self, project: Project) -> list[RemoteEmployee]:
        """Employees not yet on *project*'s team."""
        on_team = {member.employee.id for member in project.team}
        return [e for e in self.employees if e.id not in on_team]


def _value(value: Any) -> str:
    return getattr(value, "value", value)


def _parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
