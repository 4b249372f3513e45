"""SQLAlchemy implementation of notification repository."""

from uuid import UUID
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities import Notification
from domain.enums import NotificationAudience, NotificationTemplate
from domain.repositories import INotificationRepository
from infrastructure.database.models import NotificationModel


class SQLAlchemyNotificationRepository(INotificationRepository):
    """Concrete implementation of INotificationRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def add(self, notification: Notification) -> Notification:
        """Store a notification."""
        model = NotificationModel(
            id=notification.id,
            application_id=notification.application_id,
            audience=notification.audience.value,
            template=notification.template.value,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
        self.session.add(model)
        await self.session.flush()
        return notification

    async def list_for_application(
        self,
        application_id: UUID,
        audience: NotificationAudience,
        limit: int = 50,
    ) -> list[Notification]:
        """List notifications, newest first."""
        stmt = (
            select(NotificationModel)
            .where(
                NotificationModel.application_id == application_id,
                NotificationModel.audience == audience.value,
            )
            .order_by(NotificationModel.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def mark_all_read(self, application_id: UUID, audience: NotificationAudience) -> int:
        """Mark unread notifications as read."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.application_id == application_id,
                NotificationModel.audience == audience.value,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    def _model_to_entity(self, model: NotificationModel) -> Notification:
        """Convert ORM model to domain entity."""
        return Notification(
            id=model.id,
            application_id=model.application_id,
            audience=NotificationAudience(model.audience),
            template=NotificationTemplate(model.template),
            title=model.title,
            message=model.message,
            is_read=model.is_read,
            created_at=model.created_at,
        )
