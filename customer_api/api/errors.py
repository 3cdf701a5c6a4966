# customer_api/api/errors.py
"""
Exception handlers turning domain errors into JSON responses.

    MalformedRequestError  -> 400 {"error": ...}
    ValidationError        -> 400 {"errors": {field: [messages]}}
    NotFoundError          -> 404 {"error": ...}, or 400 when the missing
                              entity was referenced by the payload
    ConflictError          -> 409 {"error": ...}
    PersistenceError       -> 500 {"error": ...} (details only in the log)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from customer_api.domain.exceptions import (
    ConflictError,
    MalformedRequestError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from customer_api.validation.common import ErrorMap, add_error, format_path

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def malformed_request_handler(request: Request, exc: MalformedRequestError):
    return _error(status.HTTP_400_BAD_REQUEST, exc.message)


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": exc.errors},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Path / query parameter problems; drop the leading "path" / "query" segment
    errors: ErrorMap = {}
    for error in exc.errors():
        add_error(errors, format_path(error["loc"][1:]), error["msg"])
    logger.warning("Invalid request parameters on %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": errors},
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    if exc.as_reference:
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)
    return _error(status.HTTP_404_NOT_FOUND, exc.message)


async def conflict_handler(request: Request, exc: ConflictError):
    logger.warning("Conflict on %s: %s", request.url.path, exc.message)
    return _error(status.HTTP_409_CONFLICT, exc.message)


async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("Persistence failure on %s: %s", request.url.path, exc.message, exc_info=exc)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "The request could not be completed because of a storage error.",
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MalformedRequestError, malformed_request_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
