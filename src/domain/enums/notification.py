"""Notification audiences and templates."""

from enum import Enum


class NotificationAudience(str, Enum):
    """Recipient class of a notification."""

    APPLICANT = "applicant"
    ADMINS = "admins"

    def __str__(self) -> str:
        return self.value


class NotificationTemplate(str, Enum):
    """Messages the workflow can send."""

    # Intake
    APPLICATION_RECEIVED = "application_received"
    ADMIN_NEW_APPLICATION = "admin_new_application"

    # Review and payment
    APPLICATION_APPROVED = "application_approved"
    PAYMENT_PATH_CHOSEN = "payment_path_chosen"
    PAYMENT_SKIPPED = "payment_skipped"
    RECEIPT_SUBMITTED = "receipt_submitted"
    PAYMENT_VERIFIED = "payment_verified"
    DEPOSIT_DETAILS = "deposit_details"

    # Issuance
    CERTIFICATE_READY = "certificate_ready"
    APPLICATION_CANCELLED = "application_cancelled"

    def __str__(self) -> str:
        return self.value
