"""Application interfaces - Port definitions for external services."""

from .notification_dispatcher import INotificationDispatcher
from .certificate_renderer import ICertificateRenderer, RenderError

__all__ = ["INotificationDispatcher", "ICertificateRenderer", "RenderError"]
