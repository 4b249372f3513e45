"""Domain Repository Interfaces - Abstract definitions."""

from .application_repository import IApplicationRepository
from .notification_repository import INotificationRepository

__all__ = ["IApplicationRepository", "INotificationRepository"]
