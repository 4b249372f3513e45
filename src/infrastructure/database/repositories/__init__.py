"""Repository implementations."""

from .sqlalchemy_application_repository import SQLAlchemyApplicationRepository
from .sqlalchemy_notification_repository import SQLAlchemyNotificationRepository

__all__ = ["SQLAlchemyApplicationRepository", "SQLAlchemyNotificationRepository"]
