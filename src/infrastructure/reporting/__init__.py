"""Certificate rendering and notification delivery adapters."""

from infrastructure.reporting.pdf_generator import CertificatePDFGenerator
from infrastructure.reporting.certificate_renderer import PDFCertificateRenderer
from infrastructure.reporting.email_templates import TEMPLATES, render_message
from infrastructure.reporting.notification_dispatcher import EmailNotificationDispatcher
from infrastructure.reporting.smtp_client import SMTPNotConfiguredError, is_smtp_configured, send_email

__all__ = [
    "CertificatePDFGenerator",
    "PDFCertificateRenderer",
    "TEMPLATES",
    "render_message",
    "EmailNotificationDispatcher",
    "SMTPNotConfiguredError",
    "is_smtp_configured",
    "send_email",
]
