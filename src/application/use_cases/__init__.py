"""Application use cases."""

from .workflow_service import WorkflowService
from .submit_application import SubmitApplicationUseCase
from .list_applications import ListApplicationsUseCase
from .list_notifications import ListNotificationsUseCase

__all__ = [
    "WorkflowService",
    "SubmitApplicationUseCase",
    "ListApplicationsUseCase",
    "ListNotificationsUseCase",
]
