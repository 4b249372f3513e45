"""SQLAlchemy implementation of application repository."""

from typing import Optional
from uuid import UUID
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities import ApplicationRecord
from domain.enums import ApplicationStatus, PaymentChoice
from domain.exceptions import (
    ApplicationNotFoundError,
    ConcurrentModificationError,
    DuplicateApplicationNumberError,
    StorageError,
)
from domain.repositories import IApplicationRepository
from infrastructure.database.models import ApplicationModel
from infrastructure.config import get_logger


class SQLAlchemyApplicationRepository(IApplicationRepository):
    """
    Concrete implementation of IApplicationRepository using SQLAlchemy.

    ``save`` is a compare-and-swap on the version column: the UPDATE only
    matches the row if nobody saved it since it was read.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.logger = get_logger(self.__class__.__name__)

    async def create(self, record: ApplicationRecord) -> ApplicationRecord:
        """Create a new application in the database."""
        model = ApplicationModel(id=record.id, **self._entity_values(record))
        model.version = record.version
        try:
            self.session.add(model)
            await self.session.commit()
            await self.session.refresh(model)
        except IntegrityError as e:
            await self.session.rollback()
            self.logger.warning(f"Application number {record.application_number} already exists")
            raise DuplicateApplicationNumberError(record.application_number) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(f"Failed to create application: {str(e)}", exc_info=True)
            raise StorageError(f"Failed to store application: {str(e)}") from e
        return self._model_to_entity(model)

    async def get_by_id(self, application_id: UUID) -> Optional[ApplicationRecord]:
        """Retrieve an application by ID, bypassing any cached state."""
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.id == application_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to load application {application_id}: {str(e)}", exc_info=True)
            raise StorageError(f"Failed to load application: {str(e)}") from e

        if model is None:
            return None

        return self._model_to_entity(model)

    async def save(self, record: ApplicationRecord, expected_version: int) -> ApplicationRecord:
        """Write the record if the stored version still matches."""
        new_version = expected_version + 1
        stmt = (
            update(ApplicationModel)
            .where(
                ApplicationModel.id == record.id,
                ApplicationModel.version == expected_version,
            )
            .values(version=new_version, **self._entity_values(record))
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                await self.session.rollback()
                exists = await self.session.scalar(
                    select(ApplicationModel.id).where(ApplicationModel.id == record.id)
                )
                if exists is None:
                    raise ApplicationNotFoundError(record.id)
                raise ConcurrentModificationError(record.id, expected_version)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(f"Failed to save application {record.id}: {str(e)}", exc_info=True)
            raise StorageError(f"Failed to save application: {str(e)}") from e

        return record.copy_with(version=new_version)

    async def list_applications(
        self,
        status: Optional[ApplicationStatus] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[ApplicationRecord], int]:
        """List applications matching the filters, newest first, with the total count."""
        conditions = []
        if status is not None:
            conditions.append(ApplicationModel.status == status.value)
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    ApplicationModel.application_number.ilike(pattern),
                    ApplicationModel.groom_full_name.ilike(pattern),
                    ApplicationModel.bride_full_name.ilike(pattern),
                )
            )

        stmt = (
            select(ApplicationModel)
            .where(*conditions)
            .order_by(ApplicationModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        count_stmt = select(func.count()).select_from(ApplicationModel).where(*conditions)

        try:
            total = await self.session.scalar(count_stmt)
            result = await self.session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to list applications: {str(e)}", exc_info=True)
            raise StorageError(f"Failed to list applications: {str(e)}") from e

        return [self._model_to_entity(model) for model in models], total or 0

    def _entity_values(self, entity: ApplicationRecord) -> dict:
        """Column values for every mutable field of the entity."""
        return {
            "application_number": entity.application_number,
            "status": entity.status.value,
            "applicant_email": entity.applicant_email,
            "groom_full_name": entity.groom_full_name,
            "bride_full_name": entity.bride_full_name,
            "approved_at": entity.approved_at,
            "approved_by": entity.approved_by,
            "deposit_amount": entity.deposit_amount,
            "documents_required": entity.documents_required,
            "payment_choice": entity.payment_choice.value,
            "payment_receipt_present": entity.payment_receipt_present,
            "payment_receipt_ref": entity.payment_receipt_ref,
            "payment_verified_at": entity.payment_verified_at,
            "payment_verified_by": entity.payment_verified_by,
            "documents_verified_at": entity.documents_verified_at,
            "documents_verified_by": entity.documents_verified_by,
            "certificate_generated_at": entity.certificate_generated_at,
            "certificate_ref": entity.certificate_ref,
            "cancelled_at": entity.cancelled_at,
            "cancellation_reason": entity.cancellation_reason,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    def _model_to_entity(self, model: ApplicationModel) -> ApplicationRecord:
        """Convert ORM model to domain entity."""
        return ApplicationRecord(
            id=model.id,
            application_number=model.application_number,
            status=ApplicationStatus(model.status),
            applicant_email=model.applicant_email,
            groom_full_name=model.groom_full_name,
            bride_full_name=model.bride_full_name,
            approved_at=model.approved_at,
            approved_by=model.approved_by,
            deposit_amount=model.deposit_amount,
            documents_required=model.documents_required,
            payment_choice=PaymentChoice(model.payment_choice),
            payment_receipt_present=model.payment_receipt_present,
            payment_receipt_ref=model.payment_receipt_ref,
            payment_verified_at=model.payment_verified_at,
            payment_verified_by=model.payment_verified_by,
            documents_verified_at=model.documents_verified_at,
            documents_verified_by=model.documents_verified_by,
            certificate_generated_at=model.certificate_generated_at,
            certificate_ref=model.certificate_ref,
            cancelled_at=model.cancelled_at,
            cancellation_reason=model.cancellation_reason,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )
