"""
Notification Center - ephemeral user-facing messages.

One display slot holds the current notification. Showing a new one
supersedes the current one and cancels its pending auto-dismiss timer, so a
stale timer can never clear a newer message. Every notification is also
kept in a bounded history for the notifications feed.
"""

import asyncio
import itertools
import logging
from collections import deque
from typing import Deque, List, Optional

from alertnet.models.base import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationCenter:

    def __init__(self, dismiss_seconds: float = 7.0, history_size: int = 50):
        self.dismiss_seconds = dismiss_seconds
        self._current: Optional[Notification] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._history: Deque[Notification] = deque(maxlen=history_size)
        self._ids = itertools.count(1)

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    @property
    def history(self) -> List[Notification]:
        """All retained notifications, newest first."""
        return list(reversed(self._history))

    def show(self, message: str, type: NotificationType = NotificationType.INFO) -> Notification:
        self._cancel_timer()
        notification = Notification(id=next(self._ids), message=message, type=type)
        self._current = notification
        self._history.append(notification)
        logger.info(f"[{type.value}] {message}")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous caller (scripts, plain unit tests): no auto-dismiss
            logger.debug("No running event loop; notification will not auto-dismiss")
            return notification

        if self.dismiss_seconds > 0:
            self._timer = loop.call_later(self.dismiss_seconds, self._expire, notification.id)
        return notification

    def dismiss(self, notification_id: Optional[int] = None) -> bool:
        """
        Clear the display slot.

        With an id, only clears if that notification is still the current one.
        Returns True if something was dismissed.
        """
        if self._current is None:
            return False
        if notification_id is not None and self._current.id != notification_id:
            return False
        self._cancel_timer()
        self._current = None
        return True

    def close(self) -> None:
        self._cancel_timer()

    def _expire(self, notification_id: int) -> None:
        self._timer = None
        if self._current is not None and self._current.id == notification_id:
            self._current = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
