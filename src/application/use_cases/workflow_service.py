"""Workflow service - runs workflow actions against stored applications."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from application.interfaces import ICertificateRenderer, INotificationDispatcher
from application.services import BackgroundNotifier
from domain.entities import ApplicationRecord
from domain.enums import ActionKind, PaymentChoice
from domain.exceptions import (
    ApplicationNotFoundError,
    ConcurrentModificationError,
    RenderFailureError,
)
from domain.repositories import IApplicationRepository
from domain.services import TransitionEngine, TransitionResult
from domain.value_objects import (
    ActorContext,
    ApproveApplication,
    CancelApplication,
    ChoosePayment,
    GenerateCertificate,
    SubmitReceipt,
    VerifyDocuments,
    VerifyPayment,
    WorkflowAction,
    WorkflowConfig,
)
from infrastructure.config import get_logger


class WorkflowService:
    """
    Load, transition, persist, then run side effects.

    Certificate rendering must succeed for the action to succeed and runs
    before the record is saved, so a failed render leaves storage exactly
    as it was. A certificate whose record could not be saved is discarded;
    the one it replaces is only discarded after the save went through.
    Notifications are delivered in the background and never affect the
    outcome.
    """

    # One initial try plus one retry after a version conflict.
    MAX_ATTEMPTS = 2

    def __init__(
        self,
        repository: IApplicationRepository,
        renderer: ICertificateRenderer,
        dispatcher: INotificationDispatcher,
        config: WorkflowConfig,
        engine: Optional[TransitionEngine] = None,
        notifier: Optional[BackgroundNotifier] = None,
    ):
        self.repository = repository
        self.renderer = renderer
        self.config = config
        self.engine = engine or TransitionEngine()
        self.notifier = notifier or BackgroundNotifier(dispatcher)
        self.logger = get_logger(self.__class__.__name__)

    async def perform(
        self,
        application_id: UUID,
        action: WorkflowAction,
        actor: ActorContext,
    ) -> ApplicationRecord:
        """
        Apply an action to a stored application.

        Args:
            application_id: Application UUID
            action: Requested action with payload
            actor: Who requests it

        Returns:
            The persisted record at its new version

        Raises:
            ApplicationNotFoundError: If the application does not exist
            InvalidActionError: If the action is not defined for the status
            PreconditionFailedError: If a guard is not met
            RenderFailureError: If the certificate could not be rendered
            ConcurrentModificationError: If the version conflict survived a retry
            StorageError: If the store is unavailable
        """
        self.logger.info(f"🔄 {actor} requests '{action.kind.value}' on application {application_id}")

        for attempt_number in range(1, self.MAX_ATTEMPTS + 1):
            record = await self.get_application(application_id)
            result = self.engine.attempt(record, action, actor, self.config)
            new_record = await self._render_certificates(result)
            rendered_ref = new_record.certificate_ref if result.render_commands else None

            try:
                saved = await self.repository.save(new_record, expected_version=record.version)
            except ConcurrentModificationError:
                await self._discard_certificate(rendered_ref)
                if attempt_number < self.MAX_ATTEMPTS:
                    self.logger.warning(
                        f"⚠️ Version conflict on application {application_id} "
                        f"(v{record.version}), retrying '{action.kind.value}'"
                    )
                    continue
                self.logger.error(f"❌ Version conflict on application {application_id} persisted after retry")
                raise
            except Exception:
                await self._discard_certificate(rendered_ref)
                raise

            if rendered_ref and record.certificate_ref != rendered_ref:
                # The stored record no longer points at the old certificate.
                await self._discard_certificate(record.certificate_ref)

            self.logger.info(
                f"✅ Application {saved.application_number} -> {saved.status.value} (v{saved.version})"
            )
            self.notifier.schedule(result.notify_commands)
            return saved

        # The loop either returns or raises.
        raise ConcurrentModificationError(application_id)

    async def get_application(self, application_id: UUID) -> ApplicationRecord:
        record = await self.repository.get_by_id(application_id)
        if record is None:
            raise ApplicationNotFoundError(application_id)
        return record

    async def available_actions(self, application_id: UUID) -> list[ActionKind]:
        """List the actions the engine would accept right now."""
        record = await self.get_application(application_id)
        return self.engine.legal_actions(record)

    async def drain_notifications(self) -> None:
        await self.notifier.drain()

    # One operation per action

    async def approve(
        self,
        application_id: UUID,
        actor: ActorContext,
        documents_required: bool = False,
        deposit_amount: Optional[Decimal] = None,
    ) -> ApplicationRecord:
        action = ApproveApplication(documents_required=documents_required, deposit_amount=deposit_amount)
        return await self.perform(application_id, action, actor)

    async def choose_payment(
        self,
        application_id: UUID,
        actor: ActorContext,
        choice: PaymentChoice,
    ) -> ApplicationRecord:
        return await self.perform(application_id, ChoosePayment(choice=choice), actor)

    async def submit_receipt(
        self,
        application_id: UUID,
        actor: ActorContext,
        receipt_ref: str,
    ) -> ApplicationRecord:
        return await self.perform(application_id, SubmitReceipt(receipt_ref=receipt_ref), actor)

    async def verify_payment(self, application_id: UUID, actor: ActorContext) -> ApplicationRecord:
        return await self.perform(application_id, VerifyPayment(), actor)

    async def verify_documents(self, application_id: UUID, actor: ActorContext) -> ApplicationRecord:
        return await self.perform(application_id, VerifyDocuments(), actor)

    async def generate_certificate(
        self,
        application_id: UUID,
        actor: ActorContext,
        notify_applicant: bool = True,
    ) -> ApplicationRecord:
        return await self.perform(application_id, GenerateCertificate(notify_applicant=notify_applicant), actor)

    async def cancel(self, application_id: UUID, actor: ActorContext, reason: str = "") -> ApplicationRecord:
        return await self.perform(application_id, CancelApplication(reason=reason), actor)

    async def _render_certificates(self, result: TransitionResult) -> ApplicationRecord:
        """Run render commands and write the new reference into the record."""
        record = result.record
        for command in result.render_commands:
            try:
                certificate_ref = await self.renderer.render(command.snapshot)
            except Exception as e:
                self.logger.error(
                    f"❌ Certificate rendering failed for {record.application_number}: {str(e)}",
                    exc_info=True,
                )
                raise RenderFailureError(f"Failed to generate certificate: {str(e)}") from e
            record = record.copy_with(certificate_ref=certificate_ref)
        return record

    async def _discard_certificate(self, certificate_ref: Optional[str]) -> None:
        if certificate_ref:
            await self.renderer.discard(certificate_ref)
