"""Database infrastructure module."""

from .session import Base, get_engine, get_session, get_session_factory, init_db, close_db
from .models import ApplicationModel, NotificationModel

__all__ = [
    "Base",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "close_db",
    "ApplicationModel",
    "NotificationModel",
]
