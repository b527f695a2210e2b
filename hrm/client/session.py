"""Auth session — bearer token and cached user record in local storage."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from jose import JWTError, jwt

from hrm.common.constants import TOKEN_KEY, USER_KEY
from hrm.common.diagnostics import log_auth_status
from hrm.storage.base import StorageService

logger = logging.getLogger(__name__)


class AuthSession:
    """Reads the token from storage at call time; never caches it."""

    def __init__(self, storage: StorageService) -> None:
        self.storage = storage

    # ── Token ───────────────────────────────────────────────────────

    @property
    def token(self) -> Optional[str]:
        token = self.storage.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def claims(self) -> dict[str, Any]:
        """Unverified JWT claims; empty for opaque or malformed tokens."""
        token = self.token
        if not token:
            return {}
        try:
            return jwt.get_unverified_claims(token)
        except JWTError:
            return {}

    def is_expired(self, now: Optional[float] = None) -> bool:
        exp = self.claims().get("exp")
        if exp is None:
            return False
        return float(exp) <= (now if now is not None else time.time())

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and not self.is_expired()

    # ── User ────────────────────────────────────────────────────────

    @property
    def user(self) -> Optional[dict[str, Any]]:
        user = self.storage.get(USER_KEY)
        return user if isinstance(user, dict) else None

    # ── Mutations ───────────────────────────────────────────────────

    def save(self, token: str, user: dict[str, Any]) -> None:
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, user)
        logger.info("Login successful for user: %s", user.get("email") or user.get("name"))

    def clear(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)

    def status(self, *, log: bool = False) -> dict[str, Any]:
        snapshot = {
            "is_authenticated": self.is_authenticated,
            "token_exists": self.token is not None,
            "user_exists": self.user is not None,
            "user": self.user,
        }
        return log_auth_status(snapshot) if log else snapshot
