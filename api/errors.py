import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.exceptions import TimeTrackerError, PeopleServiceError, BadRequestError, ValidationFailedError

logger = logging.getLogger("time_tracker.errors")


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Any] = None


def _error(status_code: int, error: str, code: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ErrorResponse(error=error, code=code, details=details)),
    )


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(TimeTrackerError)
    async def time_tracker_exception_handler(request: Request, exc: TimeTrackerError):
        if isinstance(exc, PeopleServiceError):
            logger.error(f"[{getattr(request.state, 'trace_id', '-')}] {exc.message}")
        return _error(exc.status_code, exc.message, exc.code, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404 for unknown routes, 405, etc.)
        """
        return _error(exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Bad path parameters and unparseable JSON are request structure errors (400),
        everything else is reported per field (422).
        """
        errors = exc.errors()
        details = {_field_name(err["loc"]): err["msg"] for err in errors}
        if any(err["loc"][0] == "path" or err["type"] == "json_invalid" for err in errors):
            error = BadRequestError(details=details)
        else:
            error = ValidationFailedError("Input validation failed", details=details)
        return _error(error.status_code, error.message, error.code, error.details)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for exceptions raised outside RequestLoggingMiddleware.
        """
        return internal_error_response(request, exc)


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled exception with its trace id and hide the details from the client"""
    logger.error(
        f"[{getattr(request.state, 'trace_id', '-')}] Unhandled exception: {exc!r} "
        f"{request.method} {request.url.path}",
        exc_info=exc,
    )
    return _error(500, "An internal error occurred", "INTERNAL_ERROR")
