"""In-process notification bus.

Replaces toast popups: the shell and views publish, front ends subscribe.
History is kept newest-last and bounded.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, Field

from hrm.common.constants import NotificationType

logger = logging.getLogger(__name__)

Subscriber = Callable[["Notification"], None]


class Notification(BaseModel):
    type: NotificationType = NotificationType.info
    title: str
    message: str = ""
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationBus:
    """Fan-out of notifications to subscribers, plus a bounded history."""

    def __init__(self, max_history: int = 100) -> None:
        self._subscribers: list[Subscriber] = []
        self._history: deque[Notification] = deque(maxlen=max_history)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(
        self,
        title: str,
        message: str = "",
        *,
        type: NotificationType = NotificationType.info,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> Notification:
        notification = Notification(
            type=type,
            title=title,
            message=message,
            entity_type=entity_type,
            entity_id=entity_id,
        )
        self._history.append(notification)
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception:
                # one broken subscriber must not block the rest
                logger.exception("Notification subscriber %r failed", callback)
        return notification

    # ── Convenience ─────────────────────────────────────────────────

    def success(self, title: str, message: str = "", **kwargs) -> Notification:
        return self.publish(title, message, type=NotificationType.success, **kwargs)

    def error(self, title: str, message: str = "", **kwargs) -> Notification:
        return self.publish(title, message, type=NotificationType.error, **kwargs)

    def warning(self, title: str, message: str = "", **kwargs) -> Notification:
        return self.publish(title, message, type=NotificationType.warning, **kwargs)

    # ── History ─────────────────────────────────────────────────────

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._history if not n.is_read)

    def latest(self, type: Optional[NotificationType] = None) -> Optional[Notification]:
        for notification in reversed(self._history):
            if type is None or notification.type == type:
                return notification
        return None

    def mark_all_read(self) -> int:
        """Mark every notification read; returns how many changed."""
        count = 0
        for notification in self._history:
            if not notification.is_read:
                notification.is_read = True
                count += 1
        return count

    def clear(self) -> None:
        self._history.clear()
