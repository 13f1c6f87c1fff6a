"""Abstract interface (port) for user-facing notifications."""

from abc import ABC, abstractmethod

from customer_diary.domain.entities import Notification


class Notifier(ABC):

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification. Must not raise."""
        ...
