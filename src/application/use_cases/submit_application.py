"""Use Case for application intake."""

from typing import Optional

from application.services import BackgroundNotifier
from domain.entities import ApplicationRecord, generate_application_number
from domain.enums import NotificationAudience, NotificationTemplate
from domain.exceptions import DuplicateApplicationNumberError
from domain.repositories import IApplicationRepository
from domain.value_objects import NotifyCommand, WorkflowConfig
from infrastructure.config import get_logger


class SubmitApplicationUseCase:
    """Create a submitted application and acknowledge it."""

    # Generated numbers are short and can collide; try a few fresh ones.
    MAX_NUMBER_ATTEMPTS = 3

    def __init__(
        self,
        repository: IApplicationRepository,
        notifier: BackgroundNotifier,
        config: WorkflowConfig,
    ):
        self.repository = repository
        self.notifier = notifier
        self.config = config
        self.logger = get_logger(self.__class__.__name__)

    async def execute(
        self,
        applicant_email: str,
        groom_full_name: str,
        bride_full_name: str,
        application_number: Optional[str] = None,
    ) -> ApplicationRecord:
        """
        Register a new application in the submitted status.

        Args:
            applicant_email: Portal/contact e-mail of the applicant
            groom_full_name: Groom's full name
            bride_full_name: Bride's full name
            application_number: Externally assigned reference, generated if omitted

        Returns:
            The stored ApplicationRecord

        Raises:
            DuplicateApplicationNumberError: If the given number is taken, or
                every generated number collided
        """
        record = ApplicationRecord(
            applicant_email=applicant_email,
            groom_full_name=groom_full_name,
            bride_full_name=bride_full_name,
        )
        if application_number:
            record = record.copy_with(application_number=application_number)

        created = await self._create(record, number_given=bool(application_number))
        self.logger.info(f"✅ Application {created.application_number} submitted")

        payload = {
            "application_id": str(created.id),
            "application_number": created.application_number,
            "groom_full_name": created.groom_full_name,
            "bride_full_name": created.bride_full_name,
            "portal_url": self.config.portal_url,
        }
        self.notifier.schedule([
            NotifyCommand(
                audience=NotificationAudience.APPLICANT,
                template=NotificationTemplate.APPLICATION_RECEIVED,
                payload=payload,
                recipients=(created.applicant_email,) if created.applicant_email else (),
            ),
            NotifyCommand(
                audience=NotificationAudience.ADMINS,
                template=NotificationTemplate.ADMIN_NEW_APPLICATION,
                payload=payload,
                recipients=tuple(self.config.admin_recipients),
            ),
        ])
        return created

    async def _create(self, record: ApplicationRecord, number_given: bool) -> ApplicationRecord:
        for attempt_number in range(1, self.MAX_NUMBER_ATTEMPTS + 1):
            try:
                return await self.repository.create(record)
            except DuplicateApplicationNumberError:
                if number_given or attempt_number == self.MAX_NUMBER_ATTEMPTS:
                    raise
                self.logger.warning(f"⚠️ Application number {record.application_number} taken, generating another")
                record = record.copy_with(application_number=generate_application_number())
        raise DuplicateApplicationNumberError(record.application_number)
