"""Async REST client for the HRM backend.

One method per endpoint. Every call:
  - reads the bearer token from the ``AuthSession`` at call time,
  - raises a typed ``AppException`` on transport failure or non-2xx status,
  - returns parsed JSON, unwrapped from the response envelope where the
    backend wraps a single resource (``{"project": {...}}``).

No retries and no request cancellation; the timeout comes from settings.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from hrm.client.schemas import LoginCredentials, RegisterData
from hrm.client.session import AuthSession
from hrm.common.diagnostics import log_api_error, log_network_error
from hrm.common.exceptions import (
    AUTH_REQUIRED_MESSAGE,
    DEFAULT_ERROR_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    ApiError,
    TransportError,
    UnauthenticatedError,
)
from hrm.config import get_settings

logger = logging.getLogger(__name__)

Json = Any


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient``; use as an async context manager."""

    def __init__(
        self,
        session: AuthSession,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        config = get_settings()
        self.session = session
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.API_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ═════════════════════════════════════════════════════════════════
    # Plumbing
    # ═════════════════════════════════════════════════════════════════

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        auth_required: bool = False,
    ) -> Json:
        if auth_required and not self.session.is_authenticated:
            logger.warning("⚠️ No authentication token found. Please login first.")
            raise UnauthenticatedError(AUTH_REQUIRED_MESSAGE)

        url = f"{self.base_url}{path}"
        logger.debug("🔄 %s %s", method, url)
        try:
            response = await self._http.request(method, url, json=json, headers=self._headers())
        except httpx.TransportError as e:
            log_network_error(url, method, e)
            raise TransportError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise self._error_for(response, url, method)

        logger.info("✅ %s %s - Success (%s)", method, url, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _error_for(response: httpx.Response, url: str, method: str) -> Exception:
        status = response.status_code
        try:
            payload: Any = response.json()
        except ValueError:
            payload = response.text
            message: Optional[str] = DEFAULT_ERROR_MESSAGE
        else:
            message = _message_from(payload)

        log_api_error(url, method, status, payload)

        if status == 401:
            return UnauthenticatedError(
                message or SESSION_EXPIRED_MESSAGE, status_code=401, payload=payload,
            )
        return ApiError(status, message or "Request failed", payload)

    # ═════════════════════════════════════════════════════════════════
    # Auth
    # ═════════════════════════════════════════════════════════════════

    async def login(self, credentials: LoginCredentials | dict[str, Any]) -> Json:
        body = _body(credentials)
        logger.info("🔄 Login attempt for %s", body.get("email"))
        data = await self._request("POST", "/auth/login", json=body)
        self._remember(data)
        return data

    async def register(self, user_data: RegisterData | dict[str, Any]) -> Json:
        body = _body(user_data)
        logger.info("🔄 Registering %s", body.get("email"))
        data = await self._request("POST", "/auth/signup", json=body)
        self._remember(data)
        return data

    async def get_me(self) -> Json:
        return await self._request("GET", "/auth/me")

    def logout(self) -> None:
        self.session.clear()

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def current_user(self) -> Optional[dict[str, Any]]:
        return self.session.user

    def _remember(self, data: Json) -> None:
        if not isinstance(data, dict) or not data.get("token"):
            return
        # admins get a flat body, employees a nested ``user``
        user = data.get("user") or {k: v for k, v in data.items() if k != "token"}
        self.session.save(data["token"], user)

    # ═════════════════════════════════════════════════════════════════
    # Dashboard / employees
    # ═════════════════════════════════════════════════════════════════

    async def get_admin_dashboard(self) -> Json:
        return await self._request("GET", "/dashboard/admin", auth_required=True)

    async def get_employee_dashboard(self) -> Json:
        return await self._request("GET", "/dashboard/employee", auth_required=True)

    async def get_admin_projects_summary(self) -> Json:
        """Profit roll-up across projects (``summary`` + ``projectDetails``)."""
        return await self._request("GET", "/dashboard/admin/projects", auth_required=True)

    async def get_all_employees(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/dashboard/admin/employees", auth_required=True)
        return (data or {}).get("employees") or []

    async def add_employee(self, employee_data: dict[str, Any]) -> Json:
        return await self._request(
            "POST", "/dashboard/admin/add_employee", json=_body(employee_data), auth_required=True,
        )

    async def update_employee(self, employee_id: str, update_data: dict[str, Any]) -> Json:
        return await self._request(
            "PUT",
            f"/dashboard/admin/employee/{employee_id}",
            json=_body(update_data),
            auth_required=True,
        )

    async def delete_employee(self, employee_id: str) -> Json:
        return await self._request(
            "DELETE", f"/dashboard/admin/employee/{employee_id}", auth_required=True,
        )

    # ═════════════════════════════════════════════════════════════════
    # Projects
    # ═════════════════════════════════════════════════════════════════

    async def get_projects(self) -> Json:
        """``{"count": n, "projects": [...]}``"""
        return await self._request("GET", "/projects")

    async def get_project(self, project_id: str) -> Json:
        data = await self._request("GET", f"/projects/{project_id}")
        return (data or {}).get("project")

    async def create_project(self, project_data: dict[str, Any]) -> Json:
        data = await self._request("POST", "/projects", json=_body(project_data))
        return (data or {}).get("project")

    async def update_project(self, project_id: str, update_data: dict[str, Any]) -> Json:
        data = await self._request("PUT", f"/projects/{project_id}", json=_body(update_data))
        return (data or {}).get("project")

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    async def get_project_analytics(self, project_id: str) -> Json:
        data = await self._request("GET", f"/projects/{project_id}/analytics")
        return (data or {}).get("analytics")

    async def get_total_profits(self) -> dict[str, Any]:
        data = await self._request("GET", "/projects/profits/total") or {}
        return {"summary": data.get("summary"), "projectDetails": data.get("projectDetails")}

    async def get_all_project_analytics(self) -> Json:
        """``{"analytics": [...], "summary": {...}}``"""
        return await self._request("GET", "/analytics/projects")

    # ── Team ────────────────────────────────────────────────────────

    async def add_team_member(self, project_id: str, member_data: dict[str, Any]) -> Json:
        data = await self._request("POST", f"/projects/{project_id}/team", json=member_data)
        return (data or {}).get("project")

    async def remove_team_member(self, project_id: str, employee_id: str) -> Json:
        data = await self._request(
            "DELETE", f"/projects/{project_id}/team", json={"employeeId": employee_id},
        )
        return (data or {}).get("project")

    # ── Milestones ──────────────────────────────────────────────────

    async def add_milestone(self, project_id: str, milestone_data: dict[str, Any]) -> Json:
        data = await self._request(
            "POST", f"/projects/{project_id}/milestones", json=milestone_data,
        )
        return (data or {}).get("project")

    async def update_milestone(self, project_id: str, milestone_data: dict[str, Any]) -> Json:
        data = await self._request(
            "PUT", f"/projects/{project_id}/milestones", json=milestone_data,
        )
        return (data or {}).get("project")


# ── Internal helpers ────────────────────────────────────────────────


def _body(data: Any) -> dict[str, Any]:
    if hasattr(data, "to_wire"):
        return data.to_wire()
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json", exclude_none=True)
    return dict(data)


def _message_from(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    for field in ("message", "detail", "error"):
        value = payload.get(field)
        if isinstance(value, str) and value:
            return value
    return None
