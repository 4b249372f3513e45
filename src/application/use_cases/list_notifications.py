"""Use Case for reading in-app notifications."""

from uuid import UUID

from domain.enums import NotificationAudience
from domain.repositories import INotificationRepository
from infrastructure.config import get_logger


class ListNotificationsUseCase:
    """Return the notifications of one application, optionally marking them read."""

    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repo = notification_repository
        self.logger = get_logger(self.__class__.__name__)

    async def execute(
        self,
        application_id: UUID,
        audience: NotificationAudience,
        mark_read: bool = False,
        limit: int = 50,
    ) -> dict:
        """
        Returns:
            {
                "notifications": List[Notification],
                "unread_count": int
            }
        """
        notifications = await self.notification_repo.list_for_application(application_id, audience, limit)
        unread_count = sum(1 for n in notifications if not n.is_read)

        if mark_read and unread_count:
            changed = await self.notification_repo.mark_all_read(application_id, audience)
            self.logger.info(f"Marked {changed} {audience.value} notifications read for {application_id}")

        return {"notifications": notifications, "unread_count": unread_count}
