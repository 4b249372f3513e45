"""Applicant's decision about the deposit payment."""

from enum import Enum


class PaymentChoice(str, Enum):
    """Tri-state payment decision, taken after approval."""

    UNDECIDED = "undecided"
    WILL_PAY = "will_pay"
    SKIPPED = "skipped"

    def __str__(self) -> str:
        return self.value
