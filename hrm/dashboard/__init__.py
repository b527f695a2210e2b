"""Dashboard — data aggregator and the module shell."""

from hrm.dashboard.schemas import DashboardOverview, DashboardStats, DepartmentCount
from hrm.dashboard.service import DashboardService
from hrm.dashboard.shell import MODULES, DashboardShell, ModuleInfo, visible_modules, work_day_progress

__all__ = [
    "MODULES",
    "DashboardOverview",
    "DashboardService",
    "DashboardShell",
    "DashboardStats",
    "DepartmentCount",
    "ModuleInfo",
    "visible_modules",
    "work_day_progress",
]
