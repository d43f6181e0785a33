"""
Notification feed for the presentation layer.

After each mutation the API layer tells the ``NotificationService``
whether it succeeded, with a short title and a human-readable message.
The service keeps a bounded feed that clients poll to show toasts.
It is informed, never consulted: a failure inside the notifier is
logged and dropped so the underlying operation is never affected.
"""

import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import List, Optional

from ..schemas.notification import Notification


logger = logging.getLogger(__name__)


class NotificationService:
    """Bounded, in-memory notification feed."""

    def __init__(self, history: int = 50) -> None:
        self._lock = threading.Lock()
        self._feed: deque[Notification] = deque(maxlen=max(history, 1))

    def _record(self, notification: Notification) -> None:
        with self._lock:
            self._feed.append(notification)

    def notify(self, success: bool, title: str, message: str) -> Optional[Notification]:
        """Publish a notification.  Never raises."""
        try:
            notification = Notification(
                success=success,
                title=title,
                message=message,
                created_at=datetime.now(timezone.utc),
            )
            self._record(notification)
            logger.log(
                logging.INFO if success else logging.WARNING,
                "%s: %s",
                title,
                message,
            )
            return notification
        except Exception as e:
            logger.warning("Failed to publish notification %r: %s", title, e)
            return None

    def recent(self, limit: Optional[int] = None) -> List[Notification]:
        """Most recent notifications, newest first."""
        with self._lock:
            items = list(reversed(self._feed))
        if limit is not None:
            items = items[:limit]
        return items
