"""In-app notification entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from domain.enums import NotificationAudience, NotificationTemplate


@dataclass
class Notification:
    """
    Entity representing a dashboard notification.

    Admin notifications are shared by all administrators; applicant
    notifications belong to a single application.
    """

    application_id: Optional[UUID]
    audience: NotificationAudience
    template: NotificationTemplate
    title: str
    message: str
    id: UUID = field(default_factory=uuid4)
    is_read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Validate notification."""
        if not self.title or not self.title.strip():
            raise ValueError("Notification title cannot be empty")

    def mark_read(self) -> None:
        self.is_read = True

    def __str__(self) -> str:
        return f"Notification({self.audience.value}: {self.title})"
