"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import TaskflowException
from app.shared.context import get_request_id

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "FORBIDDEN": 403,
    "TRANSITION_NOT_ALLOWED": 403,
    "ROLE_NOT_PERMITTED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "STATUS_CONFLICT": 409,
    "VALIDATION_ERROR": 400,
    "INVALID_REFERENCE": 400,
    "INVALID_TARGET_STATUS": 400,
    "REMARKS_REQUIRED": 400,
}


def status_for(exc: TaskflowException) -> int:
    """HTTP status for a domain exception; unknown codes map to 400."""
    return ERROR_CODE_STATUS.get(exc.error_code, 400)


def _taskflow_exception_handler(
    request: Request, exc: TaskflowException
) -> JSONResponse:
    """Return JSON from TaskflowException.to_dict() with the mapped status code."""
    status = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic error list without the non-serializable ctx/input payloads."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    request_id = get_request_id()
    logger.exception("Unhandled exception (request_id=%s): %s", request_id, exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "request_id": request_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: TaskflowException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(TaskflowException, _taskflow_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
