"""SQLAlchemy ORM models."""

from .application_model import ApplicationModel
from .notification_model import NotificationModel

__all__ = ["ApplicationModel", "NotificationModel"]
