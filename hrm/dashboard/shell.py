"""Dashboard shell — active module, sidebar mode, work-day clock.

Switching modules is asynchronous: a short loading delay, commit, then the
module's view is mounted (``await view.load()``). A newer switch cancels a
pending one, so a slow mount can never overwrite a later selection.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol

from hrm.common.constants import (
    MODULE_PERMISSIONS,
    ROLE_PERMISSIONS,
    SIDEBAR_CYCLE,
    ModuleId,
    SidebarMode,
    UserRole,
)
from hrm.common.exceptions import ValidationException
from hrm.config import Settings, get_settings
from hrm.notifications import NotificationBus

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class Mountable(Protocol):
    async def load(self) -> bool: ...


@dataclass(frozen=True)
class ModuleInfo:
    id: ModuleId
    label: str
    description: str


MODULES: tuple[ModuleInfo, ...] = (
    ModuleInfo(ModuleId.overview, "Overview", "Dashboard home"),
    ModuleInfo(ModuleId.employees, "Employees", "Manage workforce"),
    ModuleInfo(ModuleId.projects, "Projects", "Track delivery and profit"),
    ModuleInfo(ModuleId.attendance, "Attendance", "Track presence"),
    ModuleInfo(ModuleId.payroll, "Payroll", "Process payments"),
    ModuleInfo(ModuleId.documents, "Documents", "File management"),
    ModuleInfo(ModuleId.meetings, "Meetings", "Schedule and run meetings"),
    ModuleInfo(ModuleId.analytics, "Analytics", "View insights"),
    ModuleInfo(ModuleId.recruitment, "Recruitment", "Hire talent"),
    ModuleInfo(ModuleId.settings, "Settings", "System config"),
)


# ═════════════════════════════════════════════════════════════════════
# Pure helpers
# ═════════════════════════════════════════════════════════════════════


def _minutes(hhmm: str) -> int:
    hours, minutes = (int(p) for p in hhmm.split(":"))
    return hours * 60 + minutes


def work_day_progress(now: datetime, start: str = "09:00", end: str = "18:00") -> float:
    """Percentage of the work day elapsed at *now*, clamped to [0, 100], 1 decimal."""
    start_min, end_min = _minutes(start), _minutes(end)
    span = end_min - start_min
    if span <= 0:
        return 0.0
    elapsed = now.hour * 60 + now.minute + now.second / 60 - start_min
    return round(min(max(elapsed / span * 100, 0.0), 100.0), 1)


def visible_modules(role: UserRole | str | None) -> list[ModuleId]:
    """Modules whose permission the role holds; unknown roles see only open modules."""
    try:
        granted = ROLE_PERMISSIONS[UserRole(role)] if role else frozenset()
    except ValueError:
        granted = frozenset()
    return [
        info.id for info in MODULES
        if (needed := MODULE_PERMISSIONS.get(info.id)) is None or needed in granted
    ]


# ═════════════════════════════════════════════════════════════════════
# Shell
# ═════════════════════════════════════════════════════════════════════


class DashboardShell:
    """State holder for the dashboard frame around the feature views."""

    def __init__(
        self,
        views: Optional[Mapping[ModuleId, Mountable]] = None,
        *,
        bus: Optional[NotificationBus] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
        config: Optional[Settings] = None,
    ) -> None:
        self.views: dict[ModuleId, Mountable] = dict(views or {})
        self.bus = bus or NotificationBus()
        self.config = config or get_settings()
        self._sleep = sleep
        self._clock = clock

        self.active_module = ModuleId.overview
        self.is_loading = False
        self.show_success = False
        self.sidebar_mode = SidebarMode.full
        self.dark_mode = False
        self.now = clock()
        self.progress = self.work_day_progress(self.now)

        self._switch_task: Optional[asyncio.Task] = None
        self._toast_task: Optional[asyncio.Task] = None
        self._clock_task: Optional[asyncio.Task] = None

    @property
    def active_view(self) -> Optional[Mountable]:
        return self.views.get(self.active_module)

    # ── Module switching ────────────────────────────────────────────

    async def change_module(self, module_id: ModuleId | str) -> bool:
        """Switch to *module_id*; ``False`` if a newer switch superseded this one."""
        try:
            module = ModuleId(module_id)
        except ValueError:
            raise ValidationException(
                {"module": [f"Unknown module '{module_id}'"]},
                message=f"Unknown module '{module_id}'",
            ) from None

        if self._switch_task is not None and not self._switch_task.done():
            logger.debug("Cancelling pending switch in favour of %s", module.value)
            self._switch_task.cancel()

        task = asyncio.ensure_future(self._switch(module))
        self._switch_task = task
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            return False
        task.result()
        return True

    async def _switch(self, module: ModuleId) -> None:
        self.is_loading = True
        try:
            await self._sleep(self.config.MODULE_SWITCH_DELAY)
        except asyncio.CancelledError:
            if self._switch_task is asyncio.current_task():
                self.is_loading = False
            raise

        self.active_module = module
        self.is_loading = False
        logger.info("Switched to module: %s", module.value)

        view = self.views.get(module)
        if view is not None:
            await view.load()

        label = next(m.label for m in MODULES if m.id == module)
        self.bus.success(f"{label} loaded", entity_type="module", entity_id=module.value)
        self._flash_success()

    def _flash_success(self) -> None:
        if self._toast_task is not None and not self._toast_task.done():
            self._toast_task.cancel()
        self.show_success = True
        self._toast_task = asyncio.ensure_future(self._hide_success())

    async def _hide_success(self) -> None:
        await self._sleep(self.config.SUCCESS_TOAST_SECONDS)
        self.show_success = False

    # ── Sidebar / theme ─────────────────────────────────────────────

    def toggle_sidebar(self) -> SidebarMode:
        self.sidebar_mode = SIDEBAR_CYCLE[self.sidebar_mode]
        return self.sidebar_mode

    def handle_resize(self, width: int) -> SidebarMode:
        self.sidebar_mode = (
            SidebarMode.hidden if width < self.config.SIDEBAR_BREAKPOINT else SidebarMode.full
        )
        return self.sidebar_mode

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    # ── Clock ───────────────────────────────────────────────────────

    def work_day_progress(self, now: Optional[datetime] = None) -> float:
        return work_day_progress(
            now or self._clock(), self.config.WORK_DAY_START, self.config.WORK_DAY_END,
        )

    def tick(self) -> float:
        self.now = self._clock()
        self.progress = self.work_day_progress(self.now)
        return self.progress

    def start_clock(self) -> None:
        if self._clock_task is None or self._clock_task.done():
            self._clock_task = asyncio.ensure_future(self._run_clock())

    async def stop_clock(self) -> None:
        if self._clock_task is None:
            return
        self._clock_task.cancel()
        try:
            await self._clock_task
        except asyncio.CancelledError:
            pass
        self._clock_task = None

    async def _run_clock(self) -> None:
        while True:
            self.tick()
            await self._sleep(self.config.CLOCK_TICK_SECONDS)

    # ── Teardown ────────────────────────────────────────────────────

    async def close(self) -> None:
        """Cancel background tasks (pending switch, toast timer, clock)."""
        pending = [
            task for task in (self._switch_task, self._toast_task)
            if task is not None and not task.done()
        ]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        await self.stop_clock()
