"""Domain Entities - Objects with identity."""

from .application_record import ApplicationRecord, generate_application_number
from .notification import Notification

__all__ = ["ApplicationRecord", "generate_application_number", "Notification"]
