"""Structured diagnostic logging for API calls, network faults and views.

Each helper emits a single multi-line record so related context stays
together in the log stream.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger("hrm.diagnostics")


def log_info(message: str, context: Optional[str] = None, data: Any = None) -> None:
    lines = [f"ℹ️ Info: {message}"]
    if context:
        lines.append(f"   📍 Context: {context}")
    if data is not None:
        lines.append(f"   📦 Data: {data!r}")
    logger.info("\n".join(lines))


def log_error(error: BaseException | str, context: Optional[str] = None, data: Any = None) -> None:
    message = str(error)
    lines = [f"🚨 Error: {message}"]
    if context:
        lines.append(f"   📍 Context: {context}")
    if data is not None:
        lines.append(f"   📦 Data: {data!r}")
    exc_info = error if isinstance(error, BaseException) else None
    logger.error("\n".join(lines), exc_info=exc_info)


def log_api_error(url: str, method: str, status: int, response: Any) -> None:
    logger.error(
        "🔥 API Error\n   🌐 URL: %s %s\n   📊 Status: %s\n   📦 Response: %r",
        method, url, status, response,
    )


def log_network_error(url: str, method: str, error: BaseException) -> None:
    logger.error(
        "🌐 Network Error\n   🌐 URL: %s %s\n   ❌ Error: %s",
        method, url, error,
    )


def log_component_error(component: str, error: BaseException, props: Any = None) -> None:
    lines = [f"🧩 Component Error: {component}", f"   ❌ Error: {error}"]
    if props is not None:
        lines.append(f"   🎛️ Props: {props!r}")
    logger.error("\n".join(lines))


def log_auth_status(status: dict[str, Any]) -> dict[str, Any]:
    """Log an authentication snapshot (see ``AuthSession.status``) and return it."""
    lines = [
        "🔐 Authentication Status Check",
        f"   ✅ Token exists: {status.get('token_exists')}",
        f"   ✅ User data exists: {status.get('user_exists')}",
        f"   ✅ Is authenticated: {status.get('is_authenticated')}",
    ]
    user = status.get("user")
    if user:
        lines.append(
            f"   👤 User: {user.get('name')} <{user.get('email')}> ({user.get('role')})"
        )
    logger.info("\n".join(lines))
    return status
