"""Health check endpoint."""

from fastapi import APIRouter, Depends

from presentation.schemas import HealthResponse
from presentation.api.v1.dependencies import get_background_notifier
from application.services import BackgroundNotifier
from infrastructure.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    notifier: BackgroundNotifier = Depends(get_background_notifier),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status and version information. The status reads
    "busy" while notifications are still being delivered.
    """
    settings = get_settings()

    return HealthResponse(
        status="busy" if notifier.pending else "healthy",
        version=settings.app_version,
    )
