"""Requested workflow actions and their payloads."""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional, Union

from domain.enums import ActionKind, PaymentChoice


@dataclass(frozen=True)
class ApproveApplication:
    """
    Administrator approves the application and opens the payment and
    document-verification sub-flow.

    Attributes:
        documents_required: Whether document verification gates issuance
        deposit_amount: Override of the configured default deposit
    """

    kind: ClassVar[ActionKind] = ActionKind.APPROVE

    documents_required: bool = False
    deposit_amount: Optional[Decimal] = None

    def __post_init__(self) -> None:
        """Validate deposit override."""
        if self.deposit_amount is not None and self.deposit_amount <= 0:
            raise ValueError("Deposit amount must be positive")


@dataclass(frozen=True)
class ChoosePayment:
    """Applicant decides to pay the deposit or to skip payment."""

    kind: ClassVar[ActionKind] = ActionKind.CHOOSE_PAYMENT

    choice: PaymentChoice

    def __post_init__(self) -> None:
        if self.choice == PaymentChoice.UNDECIDED:
            raise ValueError("Payment choice must be either will_pay or skipped")


@dataclass(frozen=True)
class SubmitReceipt:
    """Applicant uploads proof of transfer. Re-uploading replaces the receipt."""

    kind: ClassVar[ActionKind] = ActionKind.SUBMIT_RECEIPT

    receipt_ref: str

    def __post_init__(self) -> None:
        if not self.receipt_ref or not self.receipt_ref.strip():
            raise ValueError("Receipt reference cannot be empty")


@dataclass(frozen=True)
class VerifyPayment:
    kind: ClassVar[ActionKind] = ActionKind.VERIFY_PAYMENT


@dataclass(frozen=True)
class VerifyDocuments:
    kind: ClassVar[ActionKind] = ActionKind.VERIFY_DOCUMENTS


@dataclass(frozen=True)
class GenerateCertificate:
    """Render (or re-render) the certificate and complete the application."""

    kind: ClassVar[ActionKind] = ActionKind.GENERATE_CERTIFICATE

    notify_applicant: bool = True


@dataclass(frozen=True)
class CancelApplication:
    kind: ClassVar[ActionKind] = ActionKind.CANCEL

    reason: str = ""


WorkflowAction = Union[
    ApproveApplication,
    ChoosePayment,
    SubmitReceipt,
    VerifyPayment,
    VerifyDocuments,
    GenerateCertificate,
    CancelApplication,
]
