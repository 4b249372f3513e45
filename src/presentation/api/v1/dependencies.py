"""FastAPI dependency injection setup."""

from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config import Settings, get_settings
from infrastructure.database import get_session, get_session_factory
from infrastructure.database.repositories import (
    SQLAlchemyApplicationRepository,
    SQLAlchemyNotificationRepository,
)
from infrastructure.reporting import EmailNotificationDispatcher, PDFCertificateRenderer
from application.interfaces import ICertificateRenderer
from application.services import BackgroundNotifier
from application.use_cases import (
    ListApplicationsUseCase,
    ListNotificationsUseCase,
    SubmitApplicationUseCase,
    WorkflowService,
)
from domain.enums import ActorRole
from domain.repositories import IApplicationRepository, INotificationRepository
from domain.value_objects import ActorContext


# Database session dependency
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_session():
        yield session


# Repository dependencies
async def get_application_repository(
    session: AsyncSession = Depends(get_db_session),
) -> IApplicationRepository:
    """Get application repository dependency."""
    return SQLAlchemyApplicationRepository(session)


async def get_notification_repository(
    session: AsyncSession = Depends(get_db_session),
) -> INotificationRepository:
    """Get notification repository dependency."""
    return SQLAlchemyNotificationRepository(session)


# Process-wide collaborators
@lru_cache()
def get_background_notifier() -> BackgroundNotifier:
    """Single notifier so shutdown can wait for every pending delivery."""
    dispatcher = EmailNotificationDispatcher(get_session_factory(), get_settings())
    return BackgroundNotifier(dispatcher)


@lru_cache()
def get_certificate_renderer() -> ICertificateRenderer:
    """Get certificate renderer dependency."""
    settings = get_settings()
    return PDFCertificateRenderer(
        output_dir=settings.certificate_output_dir,
        url_prefix=settings.certificate_url_prefix,
        issuer=settings.certificate_issuer,
    )


# Actor dependency
def get_actor_context(
    x_actor_id: Optional[str] = Header(None),
    x_actor_role: Optional[str] = Header(None),
) -> ActorContext:
    """
    Build the acting user from request headers.

    Requests without headers act as the applicant portal.
    """
    try:
        role = ActorRole(x_actor_role.lower()) if x_actor_role else ActorRole.APPLICANT
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown actor role: {x_actor_role}",
        )

    if role == ActorRole.APPLICANT and not x_actor_id:
        return ActorContext.applicant()
    if not x_actor_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="X-Actor-Id header is required for admin requests",
        )
    return ActorContext(actor_id=x_actor_id, role=role)


# Use case dependencies
def get_workflow_service(
    repository: IApplicationRepository = Depends(get_application_repository),
    renderer: ICertificateRenderer = Depends(get_certificate_renderer),
    notifier: BackgroundNotifier = Depends(get_background_notifier),
    settings: Settings = Depends(get_settings),
) -> WorkflowService:
    """Get workflow service dependency."""
    return WorkflowService(
        repository=repository,
        renderer=renderer,
        dispatcher=notifier.dispatcher,
        config=settings.workflow_config(),
        notifier=notifier,
    )


def get_submit_use_case(
    repository: IApplicationRepository = Depends(get_application_repository),
    notifier: BackgroundNotifier = Depends(get_background_notifier),
    settings: Settings = Depends(get_settings),
) -> SubmitApplicationUseCase:
    """Get application intake use case dependency."""
    return SubmitApplicationUseCase(repository, notifier, settings.workflow_config())


def get_list_notifications_use_case(
    repository: INotificationRepository = Depends(get_notification_repository),
) -> ListNotificationsUseCase:
    """Get notification listing use case dependency."""
    return ListNotificationsUseCase(repository)


def get_list_applications_use_case(
    repository: IApplicationRepository = Depends(get_application_repository),
) -> ListApplicationsUseCase:
    """Get application listing use case dependency."""
    return ListApplicationsUseCase(repository)
