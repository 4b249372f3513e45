"""Subjects and bodies of workflow notifications."""

from dataclasses import dataclass
from typing import Any

from domain.enums import NotificationTemplate


@dataclass(frozen=True)
class MessageTemplate:
    """Title (used as e-mail subject and in-app title) and body format strings."""

    title: str
    body: str


class _Blank(dict):
    """Format mapping that renders unknown or empty fields as '-'."""

    def __missing__(self, key: str) -> str:
        return "-"


TEMPLATES: dict[NotificationTemplate, MessageTemplate] = {
    NotificationTemplate.APPLICATION_RECEIVED: MessageTemplate(
        title="Application Received - #{application_number}",
        body=(
            "Assalamu alaikum,\n\n"
            "We have received the marriage certificate application of "
            "{groom_full_name} and {bride_full_name}.\n"
            "Your reference number is {application_number}. An administrator will review it shortly."
        ),
    ),
    NotificationTemplate.ADMIN_NEW_APPLICATION: MessageTemplate(
        title="New Application Received - #{application_number}",
        body=(
            "A new application was submitted by {groom_full_name} and {bride_full_name}.\n"
            "Reference: {application_number}"
        ),
    ),
    NotificationTemplate.APPLICATION_APPROVED: MessageTemplate(
        title="Application Approved - #{application_number}",
        body=(
            "Your application {application_number} has been approved.\n\n"
            "Sign in to the applicant portal at {portal_url} with {portal_email} "
            "to choose whether to pay the deposit of {deposit_amount}.\n"
            "Total fee: {total_fee}"
        ),
    ),
    NotificationTemplate.PAYMENT_PATH_CHOSEN: MessageTemplate(
        title="Payment Required - #{application_number}",
        body=(
            "Please transfer the deposit of {deposit_amount} and upload the receipt "
            "in the applicant portal."
        ),
    ),
    NotificationTemplate.PAYMENT_SKIPPED: MessageTemplate(
        title="Payment Skipped - #{application_number}",
        body="Payment was skipped. Your application {application_number} will proceed.",
    ),
    NotificationTemplate.RECEIPT_SUBMITTED: MessageTemplate(
        title="Payment Receipt Received - #{application_number}",
        body=(
            "The applicant for #{application_number} ({groom_full_name} and {bride_full_name}) "
            "has uploaded a payment receipt: {receipt_ref}"
        ),
    ),
    NotificationTemplate.PAYMENT_VERIFIED: MessageTemplate(
        title="Payment Verified - #{application_number}",
        body="Your payment has been successfully verified.",
    ),
    NotificationTemplate.DEPOSIT_DETAILS: MessageTemplate(
        title="Documents Verified - #{application_number}",
        body=(
            "Your documents have been verified. The deposit for your application is {deposit_amount}.\n"
            "Visit {portal_url} for the next steps."
        ),
    ),
    NotificationTemplate.CERTIFICATE_READY: MessageTemplate(
        title="Your Nikah Certificate is Ready - #{application_number}",
        body="The marriage certificate for application {application_number} can now be downloaded from the portal.",
    ),
    NotificationTemplate.APPLICATION_CANCELLED: MessageTemplate(
        title="Application Cancelled - #{application_number}",
        body="Your application {application_number} has been cancelled. Reason: {reason}",
    ),
}


def render_message(template: NotificationTemplate, payload: dict[str, Any]) -> tuple[str, str]:
    """
    Fill a template with payload values.

    Args:
        template: Which message to render
        payload: Values from the notify command

    Returns:
        (title, body) tuple
    """
    message = TEMPLATES[template]
    values = _Blank({key: value for key, value in payload.items() if value not in (None, "")})
    body = message.body.format_map(values)
    if template == NotificationTemplate.DEPOSIT_DETAILS and payload.get("payment_choice_required"):
        body += "\nPlease choose whether you will pay the deposit or skip payment."
    return message.title.format_map(values), body
