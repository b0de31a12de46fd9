"""Single-slot toast notifications with auto-expiry.

Only one notification is ever visible. Showing a new one replaces the old one
and restarts the countdown; when the countdown elapses the notification
clears itself.

Thread Safety:
- The slot and its timer are guarded by one lock
- Expiry callbacks run on the timer thread and only clear the notification
  they were scheduled for
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from starry_geo.config.settings import config

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, eq=False)
class Notification:
    """A message shown to the user.

    Compared by identity: two toasts with the same text are still different
    notifications with different timers.
    """
    message: str
    kind: NotificationKind = NotificationKind.ERROR

    @property
    def is_error(self) -> bool:
        return self.kind is NotificationKind.ERROR


class NotificationQueue:
    """Holds at most one live notification and expires it after a TTL.

    Example:
        >>> queue = NotificationQueue(ttl_seconds=3.2)
        >>> notification = queue.show("Selected history deleted.", NotificationKind.SUCCESS)
        >>> queue.current is notification
        True
        >>> queue.current.message
        'Selected history deleted.'
    """

    def __init__(
        self,
        ttl_seconds: float = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        on_change: Optional[Callable[[Optional[Notification]], None]] = None,
    ):
        """Initialize the queue.

        Args:
            ttl_seconds: Seconds a notification stays visible (default from config)
            timer_factory: Builds the expiry timer; called as factory(ttl, callback)
            on_change: Called with the new current notification after each change
        """
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.NOTIFICATION_TTL_SECONDS
        self._timer_factory = timer_factory
        self._on_change = on_change
        self._current: Optional[Notification] = None
        self._timer = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[Notification]:
        """The visible notification, if any."""
        with self._lock:
            return self._current

    def show(self, message: str, kind: NotificationKind = NotificationKind.ERROR) -> Notification:
        """Replace the current notification and restart the countdown."""
        notification = Notification(message=message, kind=NotificationKind(kind))

        with self._lock:
            self._cancel_timer()
            self._current = notification
            timer = self._timer_factory(self.ttl_seconds, lambda: self._expire(notification))
            timer.daemon = True
            self._timer = timer
            timer.start()

        logger.debug(f"Showing {notification.kind.value} notification: {message}")
        self._notify(notification)
        return notification

    def clear(self) -> None:
        """Remove the current notification immediately."""
        with self._lock:
            self._cancel_timer()
            changed = self._current is not None
            self._current = None

        if changed:
            self._notify(None)

    def close(self) -> None:
        """Cancel any pending expiry timer (teardown)."""
        with self._lock:
            self._cancel_timer()

    def _expire(self, notification: Notification) -> None:
        with self._lock:
            # A newer notification owns the slot now
            if self._current is not notification:
                return
            self._current = None
            self._timer = None

        logger.debug("Notification expired")
        self._notify(None)

    def _cancel_timer(self) -> None:
        """Cancel the pending timer. Caller must hold the lock."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self, notification: Optional[Notification]) -> None:
        if self._on_change is not None:
            self._on_change(notification)
