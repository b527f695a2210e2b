"""Enums and constants for Omyra HRM — matching the persisted / wire values."""

from __future__ import annotations

import enum


# ── Storage namespace ───────────────────────────────────────────────

class StorageKey(str, enum.Enum):
    employees = "hrm_employees"
    attendance = "hrm_attendance"
    payroll = "hrm_payroll"
    documents = "hrm_documents"
    meetings = "hrm_meetings"
    settings = "hrm_settings"


TOKEN_KEY = "token"
USER_KEY = "user"


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    admin = "admin"
    hr = "hr"
    manager = "manager"
    employee = "employee"
    intern = "intern"


# ── Employee ────────────────────────────────────────────────────────

class EmployeeStatus(str, enum.Enum):
    active = "active"
    on_leave = "on-leave"
    inactive = "inactive"
    terminated = "terminated"


DEPARTED_STATUSES = frozenset({EmployeeStatus.inactive, EmployeeStatus.terminated})


# ── Attendance ──────────────────────────────────────────────────────

class AttendanceStatus(str, enum.Enum):
    present = "present"
    absent = "absent"
    late = "late"
    half_day = "half-day"


# ── Payroll ─────────────────────────────────────────────────────────

class PayrollStatus(str, enum.Enum):
    pending = "pending"
    processed = "processed"
    paid = "paid"


# ── Documents ───────────────────────────────────────────────────────

class DocumentStatus(str, enum.Enum):
    active = "active"
    archived = "archived"


# ── Meetings ────────────────────────────────────────────────────────

class MeetingType(str, enum.Enum):
    video = "video"
    in_person = "in-person"
    hybrid = "hybrid"


class MeetingPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class MeetingStatus(str, enum.Enum):
    scheduled = "scheduled"
    in_progress = "in-progress"
    completed = "completed"
    cancelled = "cancelled"


# ── Projects ────────────────────────────────────────────────────────

class ProjectStatus(str, enum.Enum):
    planning = "planning"
    active = "active"
    completed = "completed"
    on_hold = "on-hold"
    cancelled = "cancelled"


class ProjectPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class MilestoneStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"
    overdue = "overdue"


# ── Recruitment ─────────────────────────────────────────────────────

class JobStatus(str, enum.Enum):
    active = "active"
    closed = "closed"
    draft = "draft"


class CandidateStatus(str, enum.Enum):
    applied = "applied"
    screening = "screening"
    interview = "interview"
    offer = "offer"
    hired = "hired"
    rejected = "rejected"


CANDIDATE_PIPELINE = (
    CandidateStatus.applied,
    CandidateStatus.screening,
    CandidateStatus.interview,
    CandidateStatus.offer,
    CandidateStatus.hired,
)


# ── Dashboard shell ─────────────────────────────────────────────────

class ModuleId(str, enum.Enum):
    overview = "overview"
    employees = "employees"
    projects = "projects"
    attendance = "attendance"
    payroll = "payroll"
    documents = "documents"
    meetings = "meetings"
    analytics = "analytics"
    recruitment = "recruitment"
    settings = "settings"


class SidebarMode(str, enum.Enum):
    full = "full"
    mini = "mini"
    hidden = "hidden"


SIDEBAR_CYCLE = {
    SidebarMode.full: SidebarMode.mini,
    SidebarMode.mini: SidebarMode.hidden,
    SidebarMode.hidden: SidebarMode.full,
}


# ── Permissions (RBAC) ──────────────────────────────────────────────

PERMISSIONS: dict[str, str] = {
    "view_employees": "View employee directory",
    "create_employee": "Add employees",
    "edit_employee": "Edit employee records",
    "delete_employee": "Remove employees",
    "view_payroll": "View payroll",
    "process_payroll": "Process payroll runs",
    "view_reports": "View analytics and reports",
    "export_reports": "Export reports",
    "manage_settings": "Change system settings",
    "manage_roles": "Manage roles",
}

ROLE_PERMISSIONS: dict[UserRole, frozenset[str]] = {
    UserRole.admin: frozenset(PERMISSIONS),
    UserRole.hr: frozenset({
        "view_employees",
        "create_employee",
        "edit_employee",
        "view_payroll",
        "process_payroll",
        "view_reports",
        "export_reports",
    }),
    UserRole.manager: frozenset({"view_employees", "view_reports"}),
    UserRole.employee: frozenset({"view_employees"}),
    UserRole.intern: frozenset({"view_employees"}),
}

# Permission a role needs before a module shows up in the sidebar.
MODULE_PERMISSIONS: dict[ModuleId, str | None] = {
    ModuleId.overview: None,
    ModuleId.employees: "view_employees",
    ModuleId.projects: "view_reports",
    ModuleId.attendance: "view_employees",
    ModuleId.payroll: "view_payroll",
    ModuleId.documents: "view_employees",
    ModuleId.meetings: None,
    ModuleId.analytics: "view_reports",
    ModuleId.recruitment: "create_employee",
    ModuleId.settings: "manage_settings",
}


# ── Misc ────────────────────────────────────────────────────────────

DEPARTMENTS = (
    "Engineering",
    "Human Resources",
    "Finance",
    "Marketing",
    "Sales",
    "Operations",
    "Product",
    "Design",
    "Legal",
    "Administration",
)

DATE_FORMAT = "%Y-%m-%d"
PERIOD_FORMAT = "%Y-%m"


# ── Notifications ───────────────────────────────────────────────────

class NotificationType(str, enum.Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"
