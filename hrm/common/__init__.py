"""Common module — shared utilities for Omyra HRM."""

from hrm.common.constants import (
    DATE_FORMAT,
    DEPARTMENTS,
    MODULE_PERMISSIONS,
    PERIOD_FORMAT,
    PERMISSIONS,
    ROLE_PERMISSIONS,
    AttendanceStatus,
    CandidateStatus,
    DocumentStatus,
    EmployeeStatus,
    JobStatus,
    MeetingPriority,
    MeetingStatus,
    MeetingType,
    MilestoneStatus,
    ModuleId,
    NotificationType,
    PayrollStatus,
    ProjectPriority,
    ProjectStatus,
    SidebarMode,
    StorageKey,
    UserRole,
)
from hrm.common.exceptions import (
    ApiError,
    AppException,
    ErrorKind,
    NotFoundException,
    TransportError,
    UnauthenticatedError,
    ValidationException,
    is_auth_error,
    kind_for_status,
)
from hrm.common.filters import apply_filters, apply_search, apply_sorting, get_field

__all__ = [
    # Constants / Enums
    "AttendanceStatus",
    "CandidateStatus",
    "DocumentStatus",
    "EmployeeStatus",
    "JobStatus",
    "MeetingPriority",
    "MeetingStatus",
    "MeetingType",
    "MilestoneStatus",
    "ModuleId",
    "NotificationType",
    "PayrollStatus",
    "ProjectPriority",
    "ProjectStatus",
    "SidebarMode",
    "StorageKey",
    "UserRole",
    "PERMISSIONS",
    "ROLE_PERMISSIONS",
    "MODULE_PERMISSIONS",
    "DEPARTMENTS",
    "DATE_FORMAT",
    "PERIOD_FORMAT",
    # Exceptions
    "ApiError",
    "AppException",
    "ErrorKind",
    "NotFoundException",
    "TransportError",
    "UnauthenticatedError",
    "ValidationException",
    "is_auth_error",
    "kind_for_status",
    # Filters
    "apply_filters",
    "apply_search",
    "apply_sorting",
    "get_field",
]
