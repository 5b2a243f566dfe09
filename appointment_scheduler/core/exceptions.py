# appointment_scheduler/core/exceptions.py
"""
Typed scheduling errors.

Services raise these; the HTTP layer maps them to status codes in
``register_exception_handlers``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class SchedulingError(Exception):
    """Base class for all expected scheduling outcomes other than success"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class ValidationError(SchedulingError):
    """Malformed or missing input; rejected before touching the store"""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_payload"


class ConflictError(SchedulingError):
    """The requested slot cannot be booked given current store state"""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class SlotTakenError(ConflictError):
    code = "slot_taken"

    def __init__(self, message: str = "This time slot is no longer available."):
        super().__init__(message)


class SlotBlockedError(ConflictError):
    code = "slot_blocked"

    def __init__(self, message: str = "This time slot is blocked and no longer available."):
        super().__init__(message)


class SlotUnavailableError(ConflictError):
    code = "slot_unavailable"

    def __init__(self, message: str = "This time is not offered by any availability rule."):
        super().__init__(message)


class AuthorizationError(SchedulingError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.info(
        f"{request.method} {request.url.path} rejected: {exc.code} - {exc.message}",
        extra={"correlation_id": correlation_id},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": HTTP_ERROR_CODES.get(exc.status_code, "http_error"), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters share the 400 invalid_payload shape"""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "invalid"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationError.code, "message": "; ".join(problems) or "Invalid request payload."},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}",
        extra={"correlation_id": correlation_id},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "message": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchedulingError, scheduling_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
