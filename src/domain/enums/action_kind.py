"""Workflow actions that can be requested on an application."""

from enum import Enum


class ActionKind(str, Enum):
    """Identifiers of the actions understood by the transition engine."""

    APPROVE = "approve"
    CHOOSE_PAYMENT = "choose_payment"
    SUBMIT_RECEIPT = "submit_receipt"
    VERIFY_PAYMENT = "verify_payment"
    VERIFY_DOCUMENTS = "verify_documents"
    GENERATE_CERTIFICATE = "generate_certificate"
    CANCEL = "cancel"

    def __str__(self) -> str:
        return self.value
