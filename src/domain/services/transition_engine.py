"""Transition engine - the single authority on application lifecycle rules."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from domain.entities import ApplicationRecord
from domain.enums import (
    ActionKind,
    ApplicationStatus,
    NotificationAudience,
    NotificationTemplate,
    PaymentChoice,
    UnmetCondition,
)
from domain.exceptions import InvalidActionError, PreconditionFailedError
from domain.value_objects import (
    ActorContext,
    ApproveApplication,
    CancelApplication,
    ChoosePayment,
    GenerateCertificate,
    NotifyCommand,
    RenderCertificateCommand,
    SideEffectCommand,
    SubmitReceipt,
    WorkflowAction,
    WorkflowConfig,
)


S = ApplicationStatus

# Statuses in which each action is defined. Any other pair is an invalid action.
TRANSITION_TABLE: dict[ActionKind, frozenset[ApplicationStatus]] = {
    ActionKind.APPROVE: frozenset(
        {S.SUBMITTED, S.ADMIN_REVIEW, S.PAYMENT_PENDING, S.PAYMENT_VERIFIED, S.COMPLETED}
    ),
    ActionKind.CHOOSE_PAYMENT: frozenset(
        {S.SUBMITTED, S.ADMIN_REVIEW, S.PAYMENT_PENDING, S.PAYMENT_VERIFIED}
    ),
    ActionKind.SUBMIT_RECEIPT: frozenset({S.ADMIN_REVIEW, S.PAYMENT_PENDING}),
    ActionKind.VERIFY_PAYMENT: frozenset({S.PAYMENT_PENDING, S.PAYMENT_VERIFIED}),
    ActionKind.VERIFY_DOCUMENTS: frozenset(
        {S.SUBMITTED, S.ADMIN_REVIEW, S.PAYMENT_PENDING, S.PAYMENT_VERIFIED}
    ),
    ActionKind.GENERATE_CERTIFICATE: frozenset(
        {S.SUBMITTED, S.ADMIN_REVIEW, S.PAYMENT_PENDING, S.PAYMENT_VERIFIED, S.COMPLETED}
    ),
    ActionKind.CANCEL: frozenset(
        {S.SUBMITTED, S.ADMIN_REVIEW, S.PAYMENT_PENDING, S.PAYMENT_VERIFIED}
    ),
}


def _approve_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    if record.is_approved:
        return UnmetCondition.ALREADY_APPROVED
    if record.status not in (S.SUBMITTED, S.ADMIN_REVIEW):
        return UnmetCondition.NOT_UNDER_REVIEW
    return None


def _choose_payment_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    if not record.is_approved:
        return UnmetCondition.NOT_APPROVED
    if record.payment_choice != PaymentChoice.UNDECIDED:
        return UnmetCondition.PAYMENT_CHOICE_ALREADY_MADE
    return None


def _submit_receipt_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    if record.payment_choice == PaymentChoice.UNDECIDED:
        return UnmetCondition.PAYMENT_CHOICE_PENDING
    if record.payment_choice == PaymentChoice.SKIPPED:
        return UnmetCondition.PAYMENT_SKIPPED
    if record.status != S.PAYMENT_PENDING:
        return UnmetCondition.PAYMENT_NOT_PENDING
    return None


def _verify_payment_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    if record.payment_verified_at is not None:
        return UnmetCondition.PAYMENT_ALREADY_VERIFIED
    if record.status != S.PAYMENT_PENDING:
        return UnmetCondition.PAYMENT_NOT_PENDING
    if not record.payment_receipt_present:
        return UnmetCondition.RECEIPT_MISSING
    return None


def _verify_documents_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    if not record.is_approved:
        return UnmetCondition.NOT_APPROVED
    if not record.documents_required:
        return UnmetCondition.DOCUMENTS_NOT_REQUIRED
    if record.documents_verified_at is not None:
        return UnmetCondition.DOCUMENTS_ALREADY_VERIFIED
    return None


def _generate_certificate_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    if not record.is_approved:
        return UnmetCondition.NOT_APPROVED
    if record.payment_choice == PaymentChoice.UNDECIDED:
        return UnmetCondition.PAYMENT_CHOICE_PENDING
    if not record.is_payment_settled:
        return UnmetCondition.PAYMENT_NOT_VERIFIED
    if not record.is_documents_gate_open:
        return UnmetCondition.DOCUMENTS_NOT_VERIFIED
    return None


def _cancel_guard(record: ApplicationRecord) -> Optional[UnmetCondition]:
    return None


_GUARDS: dict[ActionKind, Callable[[ApplicationRecord], Optional[UnmetCondition]]] = {
    ActionKind.APPROVE: _approve_guard,
    ActionKind.CHOOSE_PAYMENT: _choose_payment_guard,
    ActionKind.SUBMIT_RECEIPT: _submit_receipt_guard,
    ActionKind.VERIFY_PAYMENT: _verify_payment_guard,
    ActionKind.VERIFY_DOCUMENTS: _verify_documents_guard,
    ActionKind.GENERATE_CERTIFICATE: _generate_certificate_guard,
    ActionKind.CANCEL: _cancel_guard,
}


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of an accepted action.

    Attributes:
        record: The new record (version not yet incremented)
        commands: Side effects to execute, in order
    """

    record: ApplicationRecord
    commands: tuple[SideEffectCommand, ...] = ()

    @property
    def render_commands(self) -> list[RenderCertificateCommand]:
        return [c for c in self.commands if isinstance(c, RenderCertificateCommand)]

    @property
    def notify_commands(self) -> list[NotifyCommand]:
        return [c for c in self.commands if isinstance(c, NotifyCommand)]


class TransitionEngine:
    """
    Decides whether an action is legal and what it changes.

    The engine is pure and synchronous: it performs no I/O, never mutates
    the record it is given, and every failure is a deterministic rejection
    based on the record's current state. It holds no per-application state,
    so one instance can be shared across requests.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.utcnow):
        """
        Initialize engine.

        Args:
            clock: Source of the timestamps written into records
        """
        self._clock = clock

    def check(self, record: ApplicationRecord, kind: ActionKind) -> Optional[UnmetCondition]:
        """
        Return the first guard blocking ``kind``, or None if it would pass.

        Raises:
            InvalidActionError: If the action is not defined for the status
        """
        if record.status not in TRANSITION_TABLE[kind]:
            raise InvalidActionError(record.status, kind)
        return _GUARDS[kind](record)

    def legal_actions(self, record: ApplicationRecord) -> list[ActionKind]:
        """List the actions that would currently be accepted for the record."""
        legal = []
        for kind in ActionKind:
            if record.status in TRANSITION_TABLE[kind] and _GUARDS[kind](record) is None:
                legal.append(kind)
        return legal

    def attempt(
        self,
        record: ApplicationRecord,
        action: WorkflowAction,
        actor: ActorContext,
        config: WorkflowConfig,
    ) -> TransitionResult:
        """
        Validate and apply an action.

        Args:
            record: Current application record
            action: Requested action with its payload
            actor: Who requests the action
            config: Deposit default, admin recipients and portal details

        Returns:
            TransitionResult with the new record and pending side effects

        Raises:
            InvalidActionError: If the action is not defined for the status
            PreconditionFailedError: If a guard is not met
        """
        unmet = self.check(record, action.kind)
        if unmet is not None:
            raise PreconditionFailedError(unmet)

        now = self._clock()
        handler = getattr(self, f"_apply_{action.kind.value}")
        return handler(record, action, actor, config, now)

    # Effects

    def _apply_approve(
        self,
        record: ApplicationRecord,
        action: ApproveApplication,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        deposit = action.deposit_amount if action.deposit_amount is not None else config.default_deposit_amount
        new_record = record.copy_with(
            status=S.ADMIN_REVIEW,
            approved_at=now,
            approved_by=actor.actor_id,
            deposit_amount=deposit,
            documents_required=action.documents_required,
            updated_at=now,
        )
        payload = {
            **_record_payload(new_record),
            "portal_email": new_record.applicant_email,
            "portal_url": config.portal_url,
            "deposit_amount": str(deposit),
            "total_fee": str(config.total_fee) if config.total_fee is not None else None,
            "documents_required": action.documents_required,
        }
        return TransitionResult(
            record=new_record,
            commands=(_notify_applicant(new_record, NotificationTemplate.APPLICATION_APPROVED, payload),),
        )

    def _apply_choose_payment(
        self,
        record: ApplicationRecord,
        action: ChoosePayment,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        if action.choice == PaymentChoice.WILL_PAY:
            if record.deposit_amount is None:
                raise PreconditionFailedError(UnmetCondition.DEPOSIT_NOT_SET)
            new_record = record.copy_with(
                payment_choice=PaymentChoice.WILL_PAY,
                status=S.PAYMENT_PENDING,
                updated_at=now,
            )
            template = NotificationTemplate.PAYMENT_PATH_CHOSEN
        else:
            # Skipping closes the payment sub-path; status stays in review.
            new_record = record.copy_with(payment_choice=PaymentChoice.SKIPPED, updated_at=now)
            template = NotificationTemplate.PAYMENT_SKIPPED

        payload = {
            **_record_payload(new_record),
            "deposit_amount": str(new_record.deposit_amount) if new_record.deposit_amount is not None else None,
        }
        return TransitionResult(record=new_record, commands=(_notify_applicant(new_record, template, payload),))

    def _apply_submit_receipt(
        self,
        record: ApplicationRecord,
        action: SubmitReceipt,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        new_record = record.copy_with(
            payment_receipt_present=True,
            payment_receipt_ref=action.receipt_ref,
            updated_at=now,
        )
        command = NotifyCommand(
            audience=NotificationAudience.ADMINS,
            template=NotificationTemplate.RECEIPT_SUBMITTED,
            payload={**_record_payload(new_record), "receipt_ref": action.receipt_ref},
            recipients=tuple(config.admin_recipients),
        )
        return TransitionResult(record=new_record, commands=(command,))

    def _apply_verify_payment(
        self,
        record: ApplicationRecord,
        action: WorkflowAction,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        new_record = record.copy_with(
            status=S.PAYMENT_VERIFIED,
            payment_verified_at=now,
            payment_verified_by=actor.actor_id,
            updated_at=now,
        )
        return TransitionResult(
            record=new_record,
            commands=(
                _notify_applicant(new_record, NotificationTemplate.PAYMENT_VERIFIED, _record_payload(new_record)),
            ),
        )

    def _apply_verify_documents(
        self,
        record: ApplicationRecord,
        action: WorkflowAction,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        new_record = record.copy_with(
            documents_verified_at=now,
            documents_verified_by=actor.actor_id,
            updated_at=now,
        )
        # While the applicant is still undecided this message is what
        # surfaces the payment-choice prompt on the dashboard.
        payload = {
            **_record_payload(new_record),
            "deposit_amount": str(new_record.deposit_amount),
            "portal_url": config.portal_url,
            "payment_choice_required": new_record.payment_choice == PaymentChoice.UNDECIDED,
        }
        return TransitionResult(
            record=new_record,
            commands=(_notify_applicant(new_record, NotificationTemplate.DEPOSIT_DETAILS, payload),),
        )

    def _apply_generate_certificate(
        self,
        record: ApplicationRecord,
        action: GenerateCertificate,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        generated_at = now
        previous = record.certificate_generated_at
        if previous is not None and generated_at <= previous:
            generated_at = previous + timedelta(microseconds=1)

        new_record = record.copy_with(
            status=S.COMPLETED,
            certificate_generated_at=generated_at,
            updated_at=now,
        )
        commands: list[SideEffectCommand] = [RenderCertificateCommand(snapshot=new_record)]
        if action.notify_applicant:
            commands.append(
                _notify_applicant(new_record, NotificationTemplate.CERTIFICATE_READY, _record_payload(new_record))
            )
        return TransitionResult(record=new_record, commands=tuple(commands))

    def _apply_cancel(
        self,
        record: ApplicationRecord,
        action: CancelApplication,
        actor: ActorContext,
        config: WorkflowConfig,
        now: datetime,
    ) -> TransitionResult:
        new_record = record.copy_with(
            status=S.CANCELLED,
            cancelled_at=now,
            cancellation_reason=action.reason or None,
            updated_at=now,
        )
        payload = {**_record_payload(new_record), "reason": action.reason}
        return TransitionResult(
            record=new_record,
            commands=(_notify_applicant(new_record, NotificationTemplate.APPLICATION_CANCELLED, payload),),
        )


def _record_payload(record: ApplicationRecord) -> dict:
    return {
        "application_id": str(record.id),
        "application_number": record.application_number,
        "groom_full_name": record.groom_full_name,
        "bride_full_name": record.bride_full_name,
    }


def _notify_applicant(record: ApplicationRecord, template: NotificationTemplate, payload: dict) -> NotifyCommand:
    recipients = (record.applicant_email,) if record.applicant_email else ()
    return NotifyCommand(
        audience=NotificationAudience.APPLICANT,
        template=template,
        payload=payload,
        recipients=recipients,
    )
