"""Overview — the dashboard landing module, backed by the aggregator."""

from __future__ import annotations

from datetime import date
from typing import Optional

from hrm.client.api import ApiClient
from hrm.common.exceptions import ErrorKind
from hrm.dashboard.schemas import DashboardOverview, DepartmentCount
from hrm.dashboard.service import DashboardService
from hrm.notifications import NotificationBus
from hrm.views.base import FeatureView


class OverviewView(FeatureView[DepartmentCount]):
    """Records are the department breakdown; ``overview`` holds the full figures."""

    title = "dashboard data"
    entity = "Overview"
    search_fields = ("department",)

    def __init__(
        self,
        client: ApiClient,
        bus: Optional[NotificationBus] = None,
        today: Optional[date] = None,
    ) -> None:
        super().__init__(bus)
        self.client = client
        self.today = today
        self.overview: Optional[DashboardOverview] = None

    async def fetch(self) -> list[DepartmentCount]:
        self.overview = await DashboardService.get_overview(self.client, self.today)
        return self.overview.department_breakdown

    @property
    def needs_login(self) -> bool:
        return self.error_kind is ErrorKind.unauthenticated

    def record_id(self, record: DepartmentCount) -> str:
        return record.department
