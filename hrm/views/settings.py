"""System settings — sectioned preferences persisted under ``hrm_settings``."""

from __future__ import annotations

import copy
from typing import Any, Optional

from pydantic import BaseModel, Field

from hrm.common.constants import StorageKey
from hrm.common.exceptions import ValidationException
from hrm.notifications import NotificationBus
from hrm.storage.base import StorageService
from hrm.views.base import FeatureView

DEFAULT_SETTINGS: dict[str, dict[str, Any]] = {
    "general": {
        "company_name": "Omyra Technologies",
        "industry": "Technology",
        "company_size": "201-500 employees",
        "time_zone": "Pacific Standard Time (PST)",
        "company_address": "123 Tech Street, San Francisco, CA 94105",
        "date_format": "MM/DD/YYYY",
        "currency": "USD ($)",
        "language": "English",
    },
    "security": {
        "two_factor_auth": True,
        "session_timeout": True,
        "api_key": "",
        "webhook_url": "",
        "rate_limit": "1000 requests/hour",
    },
    "notifications": {
        "email_new_employee": True,
        "email_leave_requests": True,
        "email_payroll": False,
        "email_reports": True,
        "push_enabled": True,
    },
    "appearance": {
        "primary_color": "#3B82F6",
        "secondary_color": "#10B981",
        "theme": "light",
    },
    "integrations": {},
    "billing": {},
}

SECTION_INFO: dict[str, tuple[str, str]] = {
    "general": ("General", "Basic company and system settings"),
    "security": ("Security", "Authentication and access control"),
    "notifications": ("Notifications", "Email and push notification preferences"),
    "appearance": ("Appearance", "Theme and branding customization"),
    "integrations": ("Integrations", "Third-party services and APIs"),
    "billing": ("Billing", "Subscription and payment settings"),
}


class SettingsSection(BaseModel):
    id: str
    title: str
    description: str = ""
    values: dict[str, Any] = Field(default_factory=dict)


class SettingsView(FeatureView[SettingsSection]):
    """Each section is one record; stored values override the defaults."""

    title = "settings"
    entity = "Settings"
    search_fields = ("title", "description")

    def __init__(self, storage: StorageService, bus: Optional[NotificationBus] = None) -> None:
        super().__init__(bus)
        self.storage = storage
        self.active_section = "general"

    async def fetch(self) -> list[SettingsSection]:
        merged = self.effective()
        return [
            SettingsSection(id=key, title=title, description=description, values=merged[key])
            for key, (title, description) in SECTION_INFO.items()
        ]

    def effective(self) -> dict[str, dict[str, Any]]:
        """Defaults overlaid with whatever is stored."""
        merged = copy.deepcopy(DEFAULT_SETTINGS)
        stored = self.storage.get(StorageKey.settings)
        if isinstance(stored, dict):
            for section, values in stored.items():
                if section in merged and isinstance(values, dict):
                    merged[section].update(values)
        return merged

    def section(self, section: str) -> dict[str, Any]:
        return self.effective().get(section, {})

    async def update(self, record_id: str, values: dict[str, Any]) -> dict[str, Any]:
        """Merge *values* into one section and persist; returns the effective section."""
        section = record_id
        if section not in DEFAULT_SETTINGS:
            raise ValidationException({"section": [f"Unknown settings section '{section}'"]})

        stored = self.storage.get(StorageKey.settings)
        stored = stored if isinstance(stored, dict) else {}
        stored[section] = {**stored.get(section, {}), **values}
        self.storage.set(StorageKey.settings, stored)
        self.records = await self.fetch()
        return self.section(section)

    def open_section(self, section: str) -> None:
        """Start editing *section* through the shared form flow (``submit``)."""
        self.active_section = section
        self.open_edit(next(r for r in self.records if r.id == section))

    def form_values(self, record: SettingsSection) -> dict[str, Any]:
        return dict(record.values)

    async def reset(self) -> None:
        self.storage.remove(StorageKey.settings)
        self.bus.success("Settings reset", "All sections restored to defaults")
        await self.load()

    def record_id(self, record: SettingsSection) -> str:
        return record.id
