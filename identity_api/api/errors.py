from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from identity_api.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    UnavailableError,
    UploadFailedError,
    ValidationError,
)


logger = logging.getLogger(__name__)


# Order matters: the first matching class wins.
ERROR_STATUS_CODES: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (ConflictError, 400),
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (UploadFailedError, 502),
    (UnavailableError, 503),
    (InternalError, 500),
)


def status_code_for(exc: DomainError) -> int:
    for error_cls, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_cls):
            return status_code
    return 500


def error_body(*, status_code: int, message: str) -> dict:
    return {"status_code": status_code, "message": message, "success": False}


def _domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_code_for(exc)
    message = str(exc) or "Request failed."
    if status_code >= 500:
        logger.error("api: %s path=%s error=%s", exc.__class__.__name__, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=error_body(status_code=status_code, message=message))


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    _ = request
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(status_code=exc.status_code, message=message),
        headers=getattr(exc, "headers", None),
    )


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    _ = request
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    message = "Invalid request."
    if fields:
        message = f"Invalid request fields: {', '.join(fields)}."
    return JSONResponse(status_code=400, content=error_body(status_code=400, message=message))


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("api: unhandled_error path=%s error=%s", request.url.path, exc.__class__.__name__)
    return JSONResponse(status_code=500, content=error_body(status_code=500, message="Internal server error."))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
