"""Notifier that routes editor notifications to the log and keeps a history."""

import logging
from collections import deque

from customer_diary.application.interfaces import Notifier
from customer_diary.domain.entities import Notification

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Logs every notification; errors at WARNING, the rest at INFO.

    The last ``history_size`` notifications are kept in ``history`` so a
    console UI (or a test) can render them like toasts.
    """

    def __init__(self, history_size: int = 50):
        self.history: deque[Notification] = deque(maxlen=history_size)

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        text = notification.title
        if notification.description:
            text = f"{text}: {notification.description}"
        level = logging.WARNING if notification.is_error else logging.INFO
        logger.log(level, "%s %s", text, notification.context or "")

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None
