"""Notification repository interface - Abstract definition."""

from abc import ABC, abstractmethod
from uuid import UUID

from domain.entities import Notification
from domain.enums import NotificationAudience


class INotificationRepository(ABC):
    """Abstract repository interface for in-app notifications."""

    @abstractmethod
    async def add(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def list_for_application(
        self,
        application_id: UUID,
        audience: NotificationAudience,
        limit: int = 50,
    ) -> list[Notification]:
        """
        List the newest notifications of one application.

        Args:
            application_id: Application UUID
            audience: Applicant or admin notifications
            limit: Maximum number of notifications to return

        Returns:
            Notifications, newest first
        """
        pass

    @abstractmethod
    async def mark_all_read(self, application_id: UUID, audience: NotificationAudience) -> int:
        """Mark unread notifications as read and return how many changed."""
        pass
