"""Domain Value Objects - Immutable objects without identity."""

from .actor_context import ActorContext
from .workflow_config import WorkflowConfig
from .workflow_actions import (
    ApproveApplication,
    ChoosePayment,
    SubmitReceipt,
    VerifyPayment,
    VerifyDocuments,
    GenerateCertificate,
    CancelApplication,
    WorkflowAction,
)
from .side_effects import NotifyCommand, RenderCertificateCommand, SideEffectCommand

__all__ = [
    "ActorContext",
    "WorkflowConfig",
    "ApproveApplication",
    "ChoosePayment",
    "SubmitReceipt",
    "VerifyPayment",
    "VerifyDocuments",
    "GenerateCertificate",
    "CancelApplication",
    "WorkflowAction",
    "NotifyCommand",
    "RenderCertificateCommand",
    "SideEffectCommand",
]
