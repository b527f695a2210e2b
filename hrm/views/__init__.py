"""Feature views — one controller per dashboard module."""

from __future__ import annotations

from typing import Optional

from hrm.client.api import ApiClient
from hrm.common.constants import ModuleId
from hrm.notifications import NotificationBus
from hrm.records.service import RecordStores
from hrm.storage.base import StorageService
from hrm.views.analytics import AnalyticsReport, AnalyticsReportsView
from hrm.views.attendance import AttendanceManagementView, AttendanceSummary
from hrm.views.base import FeatureView, FormState, LocalStoreView
from hrm.views.documents import DocumentManagementView, DocumentStats
from hrm.views.employees import EmployeeManagementView
from hrm.views.meetings import MeetingStats, MeetingsManagementView
from hrm.views.overview import OverviewView
from hrm.views.payroll import PayrollManagementView, PayrollStats
from hrm.views.projects import PortfolioMetrics, ProjectManagementView
from hrm.views.recruitment import Candidate, JobPosting, PipelineStats, RecruitmentView
from hrm.views.settings import SettingsView


def build_views(
    client: ApiClient,
    storage: StorageService,
    bus: Optional[NotificationBus] = None,
    stores: Optional[RecordStores] = None,
) -> dict[ModuleId, FeatureView]:
    """One view per module, all sharing the same bus and storage."""
    bus = bus or NotificationBus()
    stores = stores or RecordStores.from_storage(storage)
    return {
        ModuleId.overview: OverviewView(client, bus),
        ModuleId.employees: EmployeeManagementView(client, bus),
        ModuleId.projects: ProjectManagementView(client, bus),
        ModuleId.attendance: AttendanceManagementView(stores.attendance, bus),
        ModuleId.payroll: PayrollManagementView(stores.payroll, bus),
        ModuleId.documents: DocumentManagementView(stores.documents, bus),
        ModuleId.meetings: MeetingsManagementView(stores.meetings, bus),
        ModuleId.analytics: AnalyticsReportsView(client, stores, bus),
        ModuleId.recruitment: RecruitmentView(bus),
        ModuleId.settings: SettingsView(storage, bus),
    }


__all__ = [
    "AnalyticsReport",
    "AnalyticsReportsView",
    "AttendanceManagementView",
    "AttendanceSummary",
    "Candidate",
    "DocumentManagementView",
    "DocumentStats",
    "EmployeeManagementView",
    "FeatureView",
    "FormState",
    "JobPosting",
    "LocalStoreView",
    "MeetingStats",
    "MeetingsManagementView",
    "OverviewView",
    "PayrollManagementView",
    "PayrollStats",
    "PipelineStats",
    "PortfolioMetrics",
    "ProjectManagementView",
    "RecruitmentView",
    "SettingsView",
    "build_views",
]
