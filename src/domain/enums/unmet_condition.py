"""Guards that can block a workflow action, with user-facing reasons."""

from enum import Enum


class UnmetCondition(str, Enum):
    """
    A specific precondition that was not satisfied.

    Each member carries a human-readable message so that both the admin
    panel and the applicant dashboard can tell the user what to do next.
    """

    NOT_APPROVED = "not_approved"
    ALREADY_APPROVED = "already_approved"
    NOT_UNDER_REVIEW = "not_under_review"
    DEPOSIT_NOT_SET = "deposit_not_set"
    PAYMENT_CHOICE_PENDING = "payment_choice_pending"
    PAYMENT_CHOICE_ALREADY_MADE = "payment_choice_already_made"
    PAYMENT_SKIPPED = "payment_skipped"
    PAYMENT_NOT_PENDING = "payment_not_pending"
    RECEIPT_MISSING = "receipt_missing"
    PAYMENT_ALREADY_VERIFIED = "payment_already_verified"
    PAYMENT_NOT_VERIFIED = "payment_not_verified"
    DOCUMENTS_NOT_REQUIRED = "documents_not_required"
    DOCUMENTS_ALREADY_VERIFIED = "documents_already_verified"
    DOCUMENTS_NOT_VERIFIED = "documents_not_verified"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    def __str__(self) -> str:
        return self.value


_MESSAGES = {
    UnmetCondition.NOT_APPROVED: "The application has not been approved yet.",
    UnmetCondition.ALREADY_APPROVED: "The application has already been approved; approval e-mails are sent only once.",
    UnmetCondition.NOT_UNDER_REVIEW: "Only submitted applications or applications under review can be approved.",
    UnmetCondition.DEPOSIT_NOT_SET: "Deposit amount must be set before proceeding. Please approve the application first.",
    UnmetCondition.PAYMENT_CHOICE_PENDING: "The applicant has not yet chosen whether to pay the deposit or skip payment.",
    UnmetCondition.PAYMENT_CHOICE_ALREADY_MADE: "A payment choice has already been recorded for this application.",
    UnmetCondition.PAYMENT_SKIPPED: "Payment was skipped for this application, so no receipt is expected.",
    UnmetCondition.PAYMENT_NOT_PENDING: "The application is not awaiting a deposit payment.",
    UnmetCondition.RECEIPT_MISSING: "No payment receipt has been uploaded yet.",
    UnmetCondition.PAYMENT_ALREADY_VERIFIED: "The payment has already been verified.",
    UnmetCondition.PAYMENT_NOT_VERIFIED: "The deposit payment must be verified before the certificate can be issued.",
    UnmetCondition.DOCUMENTS_NOT_REQUIRED: "Document verification is not required for this application.",
    UnmetCondition.DOCUMENTS_ALREADY_VERIFIED: "The documents have already been verified.",
    UnmetCondition.DOCUMENTS_NOT_VERIFIED: "Identity and witness documents must be verified before the certificate can be issued.",
}
