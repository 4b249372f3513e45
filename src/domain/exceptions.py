"""Workflow errors raised by the domain and surfaced to callers."""

from typing import Optional
from uuid import UUID

from domain.enums import ActionKind, ApplicationStatus, UnmetCondition


class WorkflowError(Exception):
    """Base class for every failure of a workflow operation."""

    code: str = "workflow_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidActionError(WorkflowError):
    """The action is not defined for the application's current status."""

    code = "invalid_action"

    def __init__(self, status: ApplicationStatus, action: ActionKind):
        super().__init__(f"Action '{action.value}' is not allowed while the application is '{status.value}'.")
        self.status = status
        self.action = action


class PreconditionFailedError(WorkflowError):
    """The action is defined but one of its guards is not met."""

    code = "precondition_failed"

    def __init__(self, condition: UnmetCondition):
        super().__init__(condition.message)
        self.condition = condition


class ConcurrentModificationError(WorkflowError):
    """The record changed between read and write, even after a retry."""

    code = "concurrent_modification"

    def __init__(self, application_id: UUID, expected_version: Optional[int] = None):
        super().__init__(
            f"Application {application_id} was modified by another request. Please reload and try again."
        )
        self.application_id = application_id
        self.expected_version = expected_version


class RenderFailureError(WorkflowError):
    """The certificate could not be rendered; nothing was persisted."""

    code = "render_failure"


class StorageError(WorkflowError):
    """The persistence store is unavailable; nothing was persisted."""

    code = "storage_error"


class ApplicationNotFoundError(WorkflowError):
    code = "not_found"

    def __init__(self, application_id: UUID):
        super().__init__(f"Application {application_id} not found")
        self.application_id = application_id


class DuplicateApplicationNumberError(StorageError):
    """Another application already uses this application number."""

    code = "duplicate_application_number"

    def __init__(self, application_number: str):
        super().__init__(f"Application number {application_number} is already in use")
        self.application_number = application_number
