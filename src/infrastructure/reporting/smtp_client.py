"""SMTP Client for sending emails via standard library."""

import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from typing import Optional, Sequence

from infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)


class SMTPNotConfiguredError(RuntimeError):
    """Raised when no SMTP server or credentials are configured."""


def is_smtp_configured(settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    return bool(settings.smtp_server and settings.smtp_email and settings.smtp_password)


def send_email(
    recipients: Sequence[str],
    subject: str,
    body_text: str,
    body_html: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """
    Send an e-mail using SMTP with STARTTLS.

    Blocking; callers on the event loop run it in a worker thread.

    Args:
        recipients: Addresses put in the To field
        subject: The subject of the email
        body_text: Plain-text body
        body_html: Optional HTML alternative
        settings: Settings override, defaults to the cached settings

    Raises:
        SMTPNotConfiguredError: If SMTP settings are missing
        ValueError: If there is no recipient
        smtplib.SMTPException: If the server rejects the message
    """
    settings = settings or get_settings()

    # Validation
    if not is_smtp_configured(settings):
        raise SMTPNotConfiguredError("SMTP configuration missing")

    recipients = [email.strip() for email in recipients if email and email.strip()]
    if not recipients:
        raise ValueError("No recipient emails given")

    # Create message
    msg = MIMEMultipart("alternative")
    msg['From'] = formataddr((settings.smtp_sender_name, settings.smtp_email))
    msg['To'] = ', '.join(recipients)  # Multiple recipients in To field
    msg['Subject'] = subject

    msg.attach(MIMEText(body_text, 'plain', 'utf-8'))
    if body_html:
        msg.attach(MIMEText(body_html, 'html', 'utf-8'))

    logger.info(f"Connecting to SMTP server: {settings.smtp_server}:{settings.smtp_port}...")

    with smtplib.SMTP(settings.smtp_server, settings.smtp_port, timeout=30) as server:
        server.ehlo()
        server.starttls()
        server.ehlo()
        server.login(settings.smtp_email, settings.smtp_password)
        server.send_message(msg, to_addrs=recipients)

    logger.info(f"Email '{subject}' sent to {', '.join(recipients)}")
