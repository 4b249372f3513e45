"""Lifecycle statuses of a marriage-certificate application."""

from enum import Enum


class ApplicationStatus(str, Enum):
    """Status of an application as it moves through the workflow."""

    SUBMITTED = "submitted"
    ADMIN_REVIEW = "admin_review"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_VERIFIED = "payment_verified"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Cancelled and completed applications never change status again."""
        return self in (ApplicationStatus.CANCELLED, ApplicationStatus.COMPLETED)

    def __str__(self) -> str:
        return self.value
