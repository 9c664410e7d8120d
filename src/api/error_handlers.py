"""Map domain errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from api.models import ErrorResponse, FieldErrorResponse
from domain.model.errors import (
    BindError,
    DuplicateError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    message: str,
    errors: list[FieldErrorResponse] | None = None,
) -> JSONResponse:
    body = ErrorResponse(code=status_code, message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _request_extra(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Validation failed", extra={**_request_extra(request), "fields": [e.field for e in exc.errors]})
    return create_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation failed",
        errors=[FieldErrorResponse(field=e.field, tag=e.tag, param=e.param) for e in exc.errors],
    )


async def handle_bind_error(request: Request, exc: BindError) -> JSONResponse:
    logger.warning("Malformed request body", extra={**_request_extra(request), "error": str(exc)})
    return create_error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_not_found_error(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Resource not found", extra={**_request_extra(request), "error": str(exc)})
    return create_error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def handle_duplicate_error(request: Request, exc: DuplicateError) -> JSONResponse:
    logger.warning("Duplicate resource", extra={**_request_extra(request), "error": str(exc)})
    return create_error_response(status.HTTP_409_CONFLICT, str(exc))


async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Persistence failure", extra={**_request_extra(request), "error": str(exc)}, exc_info=exc)
    return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal storage error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(BindError, handle_bind_error)
    app.add_exception_handler(NotFoundError, handle_not_found_error)
    app.add_exception_handler(DuplicateError, handle_duplicate_error)
    app.add_exception_handler(PersistenceError, handle_persistence_error)
