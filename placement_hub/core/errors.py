"""
Error taxonomy and the JSON error envelope.

Services raise the exceptions below; the handlers registered by
register_exception_handlers() turn every failure into

    {"success": false, "error": "<human readable text>"}

so nothing escapes to the client as an unhandled fault.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for every reportable failure."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(PortalError):
    status_code = 401
    default_message = "Invalid or expired token"


class Forbidden(PortalError):
    status_code = 403
    default_message = "Access denied."


class NotFound(PortalError):
    status_code = 404
    default_message = "Not found"


class Conflict(PortalError):
    status_code = 400
    default_message = "Conflict"


class AlreadyApplied(Conflict):
    default_message = "Already applied to this job"


class JobNotOpen(Conflict):
    default_message = "Job is not accepting applications"


class IllegalTransition(PortalError):
    status_code = 400
    default_message = "Illegal status transition"


class ValidationError(PortalError):
    status_code = 400
    default_message = "Invalid request"


class InvalidRegistration(ValidationError):
    default_message = "domain-role mismatch"


class Unexpected(PortalError):
    status_code = 500
    default_message = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err.get("loc", ()) if item != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return "; ".join(parts) or ValidationError.default_message


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, _format_validation_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Internal detail (database outages, driver errors) stays in the log
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(Unexpected.status_code, Unexpected.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
