"""Application record entity: one marriage-certificate application."""

import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from domain.enums import ApplicationStatus, PaymentChoice


_APPROVED_STATUSES = (
    ApplicationStatus.PAYMENT_PENDING,
    ApplicationStatus.PAYMENT_VERIFIED,
    ApplicationStatus.COMPLETED,
)


def generate_application_number(now: Optional[datetime] = None) -> str:
    """
    Build a human-facing reference such as ``NKH-38412930-042``.

    Not guaranteed unique; the store enforces uniqueness and intake retries.
    """
    now = now or datetime.utcnow()
    stamp = str(int(now.timestamp() * 1000))[-8:]
    return f"NKH-{stamp}-{random.randint(0, 999):03d}"


@dataclass
class ApplicationRecord:
    """
    Entity representing a marriage-certificate application.

    The record is plain data. It is only changed through the transition
    engine, which produces a new record for every accepted action.
    Construction validates the lifecycle invariants, so a record that
    exists is a record that could have been reached.

    Attributes:
        id: Immutable identifier assigned at intake
        status: Current lifecycle status
        approved_at: When an administrator approved the application
        deposit_amount: Deposit requested from the applicant
        payment_choice: Applicant's payment decision
        payment_receipt_present: Whether proof of transfer was uploaded
        payment_verified_at: When an administrator accepted the receipt
        documents_required: Whether document verification gates issuance
        documents_verified_at: When an administrator accepted the documents
        certificate_generated_at: When the latest certificate was rendered
        certificate_ref: Reference (URL/path) of the latest certificate
        version: Optimistic concurrency counter
    """

    id: UUID = field(default_factory=uuid4)
    application_number: str = field(default_factory=generate_application_number)
    status: ApplicationStatus = ApplicationStatus.SUBMITTED

    # Applicant information
    applicant_email: Optional[str] = None
    groom_full_name: Optional[str] = None
    bride_full_name: Optional[str] = None

    # Approval
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    deposit_amount: Optional[Decimal] = None
    documents_required: bool = False

    # Payment
    payment_choice: PaymentChoice = PaymentChoice.UNDECIDED
    payment_receipt_present: bool = False
    payment_receipt_ref: Optional[str] = None
    payment_verified_at: Optional[datetime] = None
    payment_verified_by: Optional[str] = None

    # Documents
    documents_verified_at: Optional[datetime] = None
    documents_verified_by: Optional[str] = None

    # Certificate
    certificate_generated_at: Optional[datetime] = None
    certificate_ref: Optional[str] = None

    # Cancellation
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    # Tracking
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 0

    def __post_init__(self) -> None:
        """Validate lifecycle invariants."""
        violations = self.invariant_violations()
        if violations:
            raise ValueError(violations[0])

    @property
    def is_approved(self) -> bool:
        return self.approved_at is not None

    @property
    def is_payment_settled(self) -> bool:
        """True when the payment gate no longer blocks issuance."""
        return self.payment_choice == PaymentChoice.SKIPPED or self.payment_verified_at is not None

    @property
    def is_documents_gate_open(self) -> bool:
        return not self.documents_required or self.documents_verified_at is not None

    def invariant_violations(self) -> list[str]:
        """
        List every lifecycle invariant this record breaks.

        Returns:
            Human-readable descriptions, empty when the record is consistent
        """
        violations = []

        if self.version < 0:
            violations.append("Version cannot be negative")
        if self.deposit_amount is not None and self.deposit_amount <= 0:
            violations.append("Deposit amount must be positive")
        if self.status in _APPROVED_STATUSES and not self.is_approved:
            violations.append(f"Status '{self.status.value}' requires an approved application")
        if self.payment_choice != PaymentChoice.UNDECIDED and not self.is_approved:
            violations.append("A payment choice can only be recorded after approval")
        if self.status == ApplicationStatus.PAYMENT_PENDING:
            if self.payment_choice != PaymentChoice.WILL_PAY:
                violations.append("Payment pending requires the applicant to have chosen to pay")
            if self.deposit_amount is None:
                violations.append("Payment pending requires a deposit amount")
        if self.status == ApplicationStatus.PAYMENT_VERIFIED and self.payment_verified_at is None:
            violations.append("Payment verified status requires a payment verification time")
        if self.certificate_generated_at is not None:
            if not self.is_payment_settled:
                violations.append("A certificate requires a verified payment or a skipped payment")
            if not self.is_documents_gate_open:
                violations.append("A certificate requires verified documents")

        return violations

    def copy_with(self, **changes) -> "ApplicationRecord":
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes)

    def __str__(self) -> str:
        return f"ApplicationRecord(id={self.id}, number={self.application_number}, status={self.status.value})"
