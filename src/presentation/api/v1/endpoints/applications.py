"""Marriage-certificate application endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from presentation.schemas import (
    ApplicationListResponse,
    ApplicationResponse,
    ApproveRequest,
    CancelRequest,
    CertificateRequest,
    ErrorResponse,
    NotificationListResponse,
    NotificationResponse,
    PaymentChoiceRequest,
    ReceiptRequest,
    SubmitApplicationRequest,
)
from presentation.api.v1.dependencies import (
    get_actor_context,
    get_list_applications_use_case,
    get_list_notifications_use_case,
    get_submit_use_case,
    get_workflow_service,
)
from application.use_cases import (
    ListApplicationsUseCase,
    ListNotificationsUseCase,
    SubmitApplicationUseCase,
    WorkflowService,
)
from domain.entities import ApplicationRecord
from domain.enums import ApplicationStatus, NotificationAudience
from domain.value_objects import ActorContext
from infrastructure.config import get_logger

router = APIRouter(
    prefix="/applications",
    tags=["applications"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
logger = get_logger(__name__)


def _to_response(record: ApplicationRecord, service: WorkflowService) -> ApplicationResponse:
    return ApplicationResponse.from_record(record, service.engine.legal_actions(record))


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(
    request: SubmitApplicationRequest,
    use_case: SubmitApplicationUseCase = Depends(get_submit_use_case),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    """Register a new application in the submitted status."""
    record = await use_case.execute(
        applicant_email=request.applicant_email,
        groom_full_name=request.groom_full_name,
        bride_full_name=request.bride_full_name,
        application_number=request.application_number,
    )
    return _to_response(record, service)


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=255),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    use_case: ListApplicationsUseCase = Depends(get_list_applications_use_case),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationListResponse:
    """List applications for review, newest first."""
    result = await use_case.execute(status=status_filter, search=search, page=page, limit=limit)
    return ApplicationListResponse(
        applications=[_to_response(record, service) for record in result["applications"]],
        total=result["total"],
        page=result["page"],
        limit=result["limit"],
        pages=result["pages"],
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: UUID,
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    """Get an application with the actions it currently accepts."""
    record = await service.get_application(application_id)
    return _to_response(record, service)


@router.post("/{application_id}/approve", response_model=ApplicationResponse)
async def approve_application(
    application_id: UUID,
    request: ApproveRequest,
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    record = await service.approve(
        application_id,
        actor,
        documents_required=request.documents_required,
        deposit_amount=request.deposit_amount,
    )
    return _to_response(record, service)


@router.post("/{application_id}/payment-choice", response_model=ApplicationResponse)
async def choose_payment(
    application_id: UUID,
    request: PaymentChoiceRequest,
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    """Record whether the applicant will pay the deposit or skip payment."""
    record = await service.choose_payment(application_id, actor, request.choice)
    return _to_response(record, service)


@router.post("/{application_id}/receipt", response_model=ApplicationResponse)
async def submit_receipt(
    application_id: UUID,
    request: ReceiptRequest,
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    record = await service.submit_receipt(application_id, actor, request.receipt_ref)
    return _to_response(record, service)


@router.post("/{application_id}/verify-payment", response_model=ApplicationResponse)
async def verify_payment(
    application_id: UUID,
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    record = await service.verify_payment(application_id, actor)
    return _to_response(record, service)


@router.post("/{application_id}/verify-documents", response_model=ApplicationResponse)
async def verify_documents(
    application_id: UUID,
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    record = await service.verify_documents(application_id, actor)
    return _to_response(record, service)


@router.post(
    "/{application_id}/certificate",
    response_model=ApplicationResponse,
    responses={502: {"model": ErrorResponse}},
)
async def generate_certificate(
    application_id: UUID,
    request: CertificateRequest = CertificateRequest(),
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    """Issue (or re-issue) the marriage certificate."""
    record = await service.generate_certificate(application_id, actor, notify_applicant=request.notify_applicant)
    return _to_response(record, service)


@router.post("/{application_id}/cancel", response_model=ApplicationResponse)
async def cancel_application(
    application_id: UUID,
    request: CancelRequest = CancelRequest(),
    actor: ActorContext = Depends(get_actor_context),
    service: WorkflowService = Depends(get_workflow_service),
) -> ApplicationResponse:
    record = await service.cancel(application_id, actor, reason=request.reason)
    logger.info(f"Application {record.application_number} cancelled by {actor}")
    return _to_response(record, service)


@router.get("/{application_id}/notifications", response_model=NotificationListResponse)
async def list_notifications(
    application_id: UUID,
    audience: NotificationAudience = Query(NotificationAudience.APPLICANT),
    mark_read: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    use_case: ListNotificationsUseCase = Depends(get_list_notifications_use_case),
) -> NotificationListResponse:
    """List the in-app notifications of an application, newest first."""
    result = await use_case.execute(application_id, audience, mark_read=mark_read, limit=limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.from_entity(n) for n in result["notifications"]],
        unread_count=result["unread_count"],
    )
