"""Configuration values handed to the transition engine."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class WorkflowConfig:
    """
    Immutable value object with the settings the workflow depends on.

    It is passed into every engine call instead of being read from a
    global settings store, so the rules stay deterministic.

    Attributes:
        default_deposit_amount: Deposit requested when approval gives none
        admin_recipients: E-mail addresses notified about admin tasks
        portal_url: Applicant portal address quoted in e-mails
        total_fee: Optional total fee shown in the approval e-mail
    """

    default_deposit_amount: Decimal = Decimal("200")
    admin_recipients: tuple[str, ...] = ()
    portal_url: str = ""
    total_fee: Optional[Decimal] = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.default_deposit_amount <= 0:
            raise ValueError("Default deposit amount must be a positive number")
        if self.total_fee is not None and self.total_fee <= 0:
            raise ValueError("Total fee must be a positive number")
