"""Unit tests for ApplicationRecord entity."""

import re
from datetime import datetime
from decimal import Decimal

import pytest
from domain.entities import ApplicationRecord, Notification, generate_application_number
from domain.enums import ApplicationStatus, NotificationAudience, NotificationTemplate, PaymentChoice


APPROVED_AT = datetime(2024, 5, 1, 12, 0, 0)


class TestApplicationRecordDefaults:
    """Test a freshly created record."""

    def test_new_record_is_submitted(self):
        """Test default field values of a new application."""
        record = ApplicationRecord()
        assert record.status == ApplicationStatus.SUBMITTED
        assert record.payment_choice == PaymentChoice.UNDECIDED
        assert record.payment_receipt_present is False
        assert record.documents_required is False
        assert record.version == 0
        assert record.is_approved is False

    def test_application_number_format(self):
        """Test generated application numbers look like NKH-<8 digits>-<3 digits>."""
        assert re.fullmatch(r"NKH-\d{8}-\d{3}", ApplicationRecord().application_number)
        assert re.fullmatch(r"NKH-\d{8}-\d{3}", generate_application_number(datetime(2024, 1, 1)))

    def test_ids_are_unique(self):
        assert ApplicationRecord().id != ApplicationRecord().id


class TestApplicationRecordInvariants:
    """Test that unreachable records cannot be constructed."""

    def test_payment_pending_requires_approval(self):
        with pytest.raises(ValueError, match="requires an approved application"):
            ApplicationRecord(
                status=ApplicationStatus.PAYMENT_PENDING,
                payment_choice=PaymentChoice.WILL_PAY,
                deposit_amount=Decimal("200"),
            )

    def test_completed_requires_approval(self):
        with pytest.raises(ValueError, match="requires an approved application"):
            ApplicationRecord(status=ApplicationStatus.COMPLETED)

    def test_payment_choice_requires_approval(self):
        with pytest.raises(ValueError, match="only be recorded after approval"):
            ApplicationRecord(payment_choice=PaymentChoice.SKIPPED)

    def test_payment_pending_requires_will_pay(self):
        with pytest.raises(ValueError, match="chosen to pay"):
            ApplicationRecord(
                status=ApplicationStatus.PAYMENT_PENDING,
                approved_at=APPROVED_AT,
                deposit_amount=Decimal("200"),
                payment_choice=PaymentChoice.SKIPPED,
            )

    def test_payment_pending_requires_deposit(self):
        with pytest.raises(ValueError, match="requires a deposit amount"):
            ApplicationRecord(
                status=ApplicationStatus.PAYMENT_PENDING,
                approved_at=APPROVED_AT,
                payment_choice=PaymentChoice.WILL_PAY,
            )

    def test_payment_verified_requires_timestamp(self):
        with pytest.raises(ValueError, match="payment verification time"):
            ApplicationRecord(
                status=ApplicationStatus.PAYMENT_VERIFIED,
                approved_at=APPROVED_AT,
                deposit_amount=Decimal("200"),
                payment_choice=PaymentChoice.WILL_PAY,
            )

    def test_certificate_requires_settled_payment(self):
        with pytest.raises(ValueError, match="verified payment or a skipped payment"):
            ApplicationRecord(
                status=ApplicationStatus.COMPLETED,
                approved_at=APPROVED_AT,
                deposit_amount=Decimal("200"),
                payment_choice=PaymentChoice.WILL_PAY,
                certificate_generated_at=APPROVED_AT,
            )

    def test_certificate_requires_verified_documents(self):
        with pytest.raises(ValueError, match="verified documents"):
            ApplicationRecord(
                status=ApplicationStatus.COMPLETED,
                approved_at=APPROVED_AT,
                payment_choice=PaymentChoice.SKIPPED,
                documents_required=True,
                certificate_generated_at=APPROVED_AT,
            )

    def test_deposit_must_be_positive(self):
        with pytest.raises(ValueError, match="Deposit amount must be positive"):
            ApplicationRecord(deposit_amount=Decimal("0"))

    def test_skipped_certificate_without_documents_is_valid(self):
        """Test the shortest legal path to a completed record."""
        record = ApplicationRecord(
            status=ApplicationStatus.COMPLETED,
            approved_at=APPROVED_AT,
            payment_choice=PaymentChoice.SKIPPED,
            certificate_generated_at=APPROVED_AT,
        )
        assert record.is_payment_settled
        assert record.is_documents_gate_open
        assert record.invariant_violations() == []


class TestApplicationRecordCopy:
    """Test copy_with behaviour."""

    def test_copy_does_not_mutate_original(self, submitted_record):
        copy = submitted_record.copy_with(applicant_email="other@example.com")
        assert copy.applicant_email == "other@example.com"
        assert submitted_record.applicant_email == "couple@example.com"
        assert copy.id == submitted_record.id

    def test_copy_is_validated(self, submitted_record):
        with pytest.raises(ValueError):
            submitted_record.copy_with(status=ApplicationStatus.PAYMENT_VERIFIED)


class TestNotification:
    """Test Notification entity."""

    def test_empty_title_raises_error(self, submitted_record):
        with pytest.raises(ValueError, match="title cannot be empty"):
            Notification(
                application_id=submitted_record.id,
                audience=NotificationAudience.APPLICANT,
                template=NotificationTemplate.APPLICATION_RECEIVED,
                title="  ",
                message="body",
            )

    def test_mark_read(self, submitted_record):
        notification = Notification(
            application_id=submitted_record.id,
            audience=NotificationAudience.ADMINS,
            template=NotificationTemplate.RECEIPT_SUBMITTED,
            title="Payment Receipt Received",
            message="body",
        )
        assert notification.is_read is False
        notification.mark_read()
        assert notification.is_read is True
