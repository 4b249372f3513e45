"""Side-effect commands produced by accepted transitions."""

from dataclasses import dataclass, field
from typing import Any, Union

from domain.entities import ApplicationRecord
from domain.enums import NotificationAudience, NotificationTemplate


@dataclass(frozen=True)
class NotifyCommand:
    """
    Ask the notification dispatcher to send a message.

    Delivery is best effort; it never decides whether the transition
    succeeded.

    Attributes:
        audience: Recipient class (applicant or admins)
        template: Which message to send
        payload: Values substituted into the template
        recipients: Resolved e-mail addresses, may be empty
    """

    audience: NotificationAudience
    template: NotificationTemplate
    payload: dict[str, Any] = field(default_factory=dict)
    recipients: tuple[str, ...] = ()


@dataclass(frozen=True)
class RenderCertificateCommand:
    """Render a certificate from the record snapshot; must succeed."""

    snapshot: ApplicationRecord


SideEffectCommand = Union[NotifyCommand, RenderCertificateCommand]
