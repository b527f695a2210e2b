"""Dashboard aggregator — merges several backend summaries into one view model.

All methods are static async. Independent calls run concurrently through
``asyncio.gather``; the first failure propagates unchanged so callers can
branch on ``exc.kind``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import date, timedelta
from typing import Any, Optional

from hrm.client.api import ApiClient
from hrm.client.schemas import ProfitsSummary
from hrm.common.constants import DEPARTED_STATUSES, EmployeeStatus
from hrm.common.diagnostics import log_error
from hrm.common.exceptions import AppException
from hrm.config import get_settings
from hrm.dashboard.schemas import DashboardOverview, DashboardStats, DepartmentCount

logger = logging.getLogger(__name__)


def _today() -> date:
    """Current local date."""
    return date.today()


class DashboardService:
    """Async dashboard aggregation over the REST client."""

    # ═════════════════════════════════════════════════════════════════
    # KPI cards
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_dashboard_stats(client: ApiClient) -> DashboardStats:
        """Fetch admin + profit summaries concurrently and merge them."""
        try:
            admin, profits = await asyncio.gather(
                client.get_admin_dashboard(),
                client.get_admin_projects_summary(),
            )
        except AppException as e:
            log_error(e, "DashboardService.get_dashboard_stats")
            raise

        return _merge_stats(admin, profits)

    # ═════════════════════════════════════════════════════════════════
    # Overview (stats + derived percentages)
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_overview(
        client: ApiClient,
        today: Optional[date] = None,
    ) -> DashboardOverview:
        today = today or _today()
        try:
            admin, employees, profits = await asyncio.gather(
                client.get_admin_dashboard(),
                client.get_all_employees(),
                client.get_admin_projects_summary(),
            )
        except AppException as e:
            log_error(e, "DashboardService.get_overview")
            raise

        stats = _merge_stats(admin, profits)
        total = len(employees)

        departed = sum(1 for e in employees if _status(e) in DEPARTED_STATUSES)
        active = sum(1 for e in employees if _status(e) == EmployeeStatus.active)

        window_start = today - timedelta(days=get_settings().GROWTH_WINDOW_DAYS)
        recent = sum(
            1 for e in employees
            if (joined := _joined(e)) is not None and window_start <= joined <= today
        )
        existing = total - recent

        departments = Counter((e.get("department") or "Unassigned") for e in employees)

        overview = DashboardOverview(
            stats=stats,
            active_employees=active,
            attrition_rate=_percent(departed, total),
            growth_rate=_percent(recent, existing),
            profit_margin=_percent(stats.total_profits, stats.total_budget),
            department_breakdown=[
                DepartmentCount(department=name, count=count)
                for name, count in sorted(departments.items(), key=lambda kv: (-kv[1], kv[0]))
            ],
        )
        logger.debug("Dashboard overview computed for %d employees", total)
        return overview


# ── Internal helpers ────────────────────────────────────────────────


def _merge_stats(admin: Any, profits: Any) -> DashboardStats:
    admin = admin or {}
    summary = ProfitsSummary.model_validate((profits or {}).get("summary") or {})
    return DashboardStats(
        employee_count=admin.get("employeeCount") or 0,
        total_profits=summary.total_profit,
        total_projects=summary.total_projects,
        total_budget=summary.total_budget,
        total_allocations=summary.total_allocations,
    )


def _status(employee: dict[str, Any]) -> EmployeeStatus:
    # the backend omits status for freshly added employees
    try:
        return EmployeeStatus(employee.get("status") or EmployeeStatus.active.value)
    except ValueError:
        return EmployeeStatus.active


def _joined(employee: dict[str, Any]) -> Optional[date]:
    raw = employee.get("joiningDate") or employee.get("createdAt")
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        return None


def _percent(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)
