"""Translate workflow errors into HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.exceptions import (
    ApplicationNotFoundError,
    ConcurrentModificationError,
    DuplicateApplicationNumberError,
    InvalidActionError,
    PreconditionFailedError,
    RenderFailureError,
    StorageError,
    WorkflowError,
)
from infrastructure.config import get_logger

logger = get_logger(__name__)

STATUS_CODES: dict[type[WorkflowError], int] = {
    InvalidActionError: status.HTTP_409_CONFLICT,
    PreconditionFailedError: status.HTTP_400_BAD_REQUEST,
    ConcurrentModificationError: status.HTTP_409_CONFLICT,
    DuplicateApplicationNumberError: status.HTTP_409_CONFLICT,
    RenderFailureError: status.HTTP_502_BAD_GATEWAY,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ApplicationNotFoundError: status.HTTP_404_NOT_FOUND,
}


def _error_body(code: str, message: str) -> dict:
    return {"success": False, "error": code, "message": message}


def status_code_for(error: WorkflowError) -> int:
    for error_type in type(error).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def workflow_error_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.message}")
    return JSONResponse(status_code=status_code, content=_error_body(exc.code, exc.message))


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("invalid_request", str(exc)),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("invalid_request", message),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the workflow error handlers on ``app``."""
    app.add_exception_handler(WorkflowError, workflow_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
