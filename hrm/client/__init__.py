"""Remote REST client — auth session, endpoint wrappers, wire schemas."""

from hrm.client.api import ApiClient
from hrm.client.schemas import (
    AdminDashboard,
    EmployeeCreate,
    EmployeeUpdate,
    LoginCredentials,
    Milestone,
    MilestoneCreate,
    MilestoneUpdate,
    ProfitsSummary,
    Project,
    ProjectAnalytics,
    ProjectCreate,
    ProjectUpdate,
    RegisterData,
    RemoteEmployee,
    TeamMember,
    TeamMemberCreate,
    TotalProfits,
)
from hrm.client.session import AuthSession

__all__ = [
    "AdminDashboard",
    "ApiClient",
    "AuthSession",
    "EmployeeCreate",
    "EmployeeUpdate",
    "LoginCredentials",
    "Milestone",
    "MilestoneCreate",
    "MilestoneUpdate",
    "ProfitsSummary",
    "Project",
    "ProjectAnalytics",
    "ProjectCreate",
    "ProjectUpdate",
    "RegisterData",
    "RemoteEmployee",
    "TeamMember",
    "TeamMemberCreate",
    "TotalProfits",
]
