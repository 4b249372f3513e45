"""Domain Enums - Constant values used across the domain."""

from .application_status import ApplicationStatus
from .payment_choice import PaymentChoice
from .action_kind import ActionKind
from .actor_role import ActorRole
from .notification import NotificationAudience, NotificationTemplate
from .unmet_condition import UnmetCondition

__all__ = [
    "ApplicationStatus",
    "PaymentChoice",
    "ActionKind",
    "ActorRole",
    "NotificationAudience",
    "NotificationTemplate",
    "UnmetCondition",
]
