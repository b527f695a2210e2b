"""Dashboard Pydantic v2 schemas — derived figures, never persisted."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Headline KPI cards, merged from the admin and profit summaries."""

    employee_count: int = 0
    total_profits: float = 0
    total_projects: int = 0
    total_budget: float = 0
    total_allocations: float = 0


class DepartmentCount(BaseModel):
    department: str
    count: int = 0


class DashboardOverview(BaseModel):
    """Stats plus client-side percentages (1 decimal place)."""

    stats: DashboardStats = Field(default_factory=DashboardStats)
    active_employees: int = 0
    attrition_rate: float = Field(0, description="Inactive/terminated share of all employees, %")
    growth_rate: float = Field(0, description="Recent joiners relative to the existing base, %")
    profit_margin: float = Field(0, description="Total profit over total budget, %")
    department_breakdown: list[DepartmentCount] = Field(default_factory=list)
