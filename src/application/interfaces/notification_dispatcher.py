"""Notification dispatcher interface for dependency inversion."""

from abc import ABC, abstractmethod

from domain.value_objects import NotifyCommand


class INotificationDispatcher(ABC):
    """
    Abstract interface for sending e-mails and in-app notifications.

    Delivery is best effort. Implementations may retry internally; the
    workflow never waits for them to decide whether an action succeeded.
    """

    @abstractmethod
    async def send(self, command: NotifyCommand) -> None:
        """
        Deliver one notification.

        Args:
            command: Audience, template, payload and resolved recipients
        """
        pass
