"""Application workflow Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities import ApplicationRecord, Notification
from domain.enums import ActionKind, ApplicationStatus, NotificationAudience, NotificationTemplate, PaymentChoice


class SubmitApplicationRequest(BaseModel):
    """Request schema for a new marriage-certificate application."""

    applicant_email: str = Field(..., description="Portal/contact e-mail of the applicant", min_length=3, max_length=255)
    groom_full_name: str = Field(..., description="Groom's full name", min_length=1, max_length=255)
    bride_full_name: str = Field(..., description="Bride's full name", min_length=1, max_length=255)
    application_number: Optional[str] = Field(None, description="Reference number, generated if omitted", max_length=50)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "applicant_email": "couple@example.com",
                    "groom_full_name": "Yusuf Rahman",
                    "bride_full_name": "Aisha Karim"
                }
            ]
        }
    }


class ApproveRequest(BaseModel):
    """Request schema for approving an application."""

    documents_required: bool = Field(False, description="Whether documents must be verified before issuance")
    deposit_amount: Optional[Decimal] = Field(None, description="Deposit override, configured default if omitted")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"documents_required": True, "deposit_amount": "200.00"}
            ]
        }
    }


class PaymentChoiceRequest(BaseModel):
    """Request schema for the applicant's payment decision."""

    choice: PaymentChoice = Field(..., description="will_pay or skipped")

    model_config = {
        "json_schema_extra": {
            "examples": [{"choice": "will_pay"}]
        }
    }


class ReceiptRequest(BaseModel):
    """Request schema for a payment receipt upload."""

    receipt_ref: str = Field(..., description="Reference (URL or path) of the uploaded receipt", min_length=1, max_length=500)


class CertificateRequest(BaseModel):
    notify_applicant: bool = Field(True, description="Send the certificate-ready notification")


class CancelRequest(BaseModel):
    reason: str = Field("", description="Why the application is cancelled", max_length=1000)


class ApplicationResponse(BaseModel):
    """Response schema for an application and the actions it currently accepts."""

    id: UUID
    application_number: str
    status: ApplicationStatus
    applicant_email: Optional[str] = None
    groom_full_name: Optional[str] = None
    bride_full_name: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    deposit_amount: Optional[Decimal] = None
    documents_required: bool
    payment_choice: PaymentChoice
    payment_receipt_present: bool
    payment_receipt_ref: Optional[str] = None
    payment_verified_at: Optional[datetime] = None
    payment_verified_by: Optional[str] = None
    documents_verified_at: Optional[datetime] = None
    documents_verified_by: Optional[str] = None
    certificate_generated_at: Optional[datetime] = None
    certificate_ref: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    version: int
    available_actions: list[ActionKind] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ApplicationRecord, available_actions: list[ActionKind]) -> "ApplicationResponse":
        return cls(
            id=record.id,
            application_number=record.application_number,
            status=record.status,
            applicant_email=record.applicant_email,
            groom_full_name=record.groom_full_name,
            bride_full_name=record.bride_full_name,
            approved_at=record.approved_at,
            approved_by=record.approved_by,
            deposit_amount=record.deposit_amount,
            documents_required=record.documents_required,
            payment_choice=record.payment_choice,
            payment_receipt_present=record.payment_receipt_present,
            payment_receipt_ref=record.payment_receipt_ref,
            payment_verified_at=record.payment_verified_at,
            payment_verified_by=record.payment_verified_by,
            documents_verified_at=record.documents_verified_at,
            documents_verified_by=record.documents_verified_by,
            certificate_generated_at=record.certificate_generated_at,
            certificate_ref=record.certificate_ref,
            cancelled_at=record.cancelled_at,
            cancellation_reason=record.cancellation_reason,
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
            available_actions=available_actions,
        )


class ApplicationListResponse(BaseModel):
    """One page of the administrator's application overview."""

    applications: list[ApplicationResponse]
    total: int = Field(..., description="Number of applications matching the filters")
    page: int
    limit: int
    pages: int


class NotificationResponse(BaseModel):
    """In-app notification."""

    id: UUID
    audience: NotificationAudience
    template: NotificationTemplate
    title: str
    message: str
    is_read: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            audience=notification.audience,
            template=notification.template,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int


class ErrorResponse(BaseModel):
    """Error body returned for every failed workflow request."""

    success: bool = False
    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable reason")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": False,
                    "error": "precondition_failed",
                    "message": "Payment must be verified before the certificate can be generated."
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "version": "1.0.0"
                }
            ]
        }
    }
