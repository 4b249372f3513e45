"""Application SQLAlchemy model."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4
from sqlalchemy import String, Integer, Boolean, DateTime, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.session import Base


class ApplicationModel(Base):
    """SQLAlchemy model for marriage-certificate applications."""

    __tablename__ = "applications"

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4
    )

    application_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False
    )
    status: Mapped[str] = mapped_column(String(30), index=True, nullable=False)

    # Applicant information
    applicant_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    groom_full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bride_full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Approval
    approved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    deposit_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    documents_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Payment
    payment_choice: Mapped[str] = mapped_column(String(20), nullable=False)
    payment_receipt_present: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    payment_receipt_ref: Mapped[str | None] = mapped_column(String(500), nullable=True)
    payment_verified_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    payment_verified_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Documents
    documents_verified_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    documents_verified_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Certificate
    certificate_generated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    certificate_ref: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Cancellation
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    # Optimistic concurrency
    version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<ApplicationModel(id={self.id}, number={self.application_number}, status={self.status})>"
