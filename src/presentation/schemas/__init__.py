"""Pydantic schemas for request/response validation."""

from .application_schemas import (
    SubmitApplicationRequest,
    ApproveRequest,
    PaymentChoiceRequest,
    ReceiptRequest,
    CertificateRequest,
    CancelRequest,
    ApplicationResponse,
    ApplicationListResponse,
    NotificationResponse,
    NotificationListResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "SubmitApplicationRequest",
    "ApproveRequest",
    "PaymentChoiceRequest",
    "ReceiptRequest",
    "CertificateRequest",
    "CancelRequest",
    "ApplicationResponse",
    "ApplicationListResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "ErrorResponse",
    "HealthResponse",
]
