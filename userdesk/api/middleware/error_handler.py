"""Centralized translation of exceptions into JSON error responses.

Every failure of a request ends here: handler errors raised from an ``Err``,
FastAPI's own parameter validation errors, Starlette HTTP exceptions and
anything unexpected. Each one becomes an ``ErrorResponse`` whose
``kind`` is the error kind and whose HTTP status follows
``ERROR_STATUS_CODES``.
"""

import traceback
from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from userdesk.api.schemas.errors import ErrorResponse, ServiceInfo
from userdesk.api.utils.responses import ORJSONResponse
from userdesk.api.validation import build_validation_error
from userdesk.core.config import Settings, get_settings
from userdesk.core.context import RequestContext, generate_request_id
from userdesk.core.error_context import sanitize_error_context
from userdesk.core.exceptions import ErrorCode, UserdeskError

ERROR_STATUS_CODES: Final[dict[str, int]] = {
    ErrorCode.VALIDATION_ERROR.value: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_PASSWORD.value: status.HTTP_403_FORBIDDEN,
    ErrorCode.EMAIL_ALREADY_TAKEN.value: status.HTTP_409_CONFLICT,
    ErrorCode.UNPROCESSABLE_ENTITY.value: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_CREDENTIALS.value: status.HTTP_403_FORBIDDEN,
    ErrorCode.INTERNAL_ERROR.value: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_service_info(settings: Settings) -> ServiceInfo:
    """Create ServiceInfo from application settings."""
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def status_code_for(error_code: str) -> int:
    """HTTP status of an error kind; unknown kinds are server errors."""
    return ERROR_STATUS_CODES.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def userdesk_error_handler(request: Request, exc: Exception) -> Response:
    """Handle UserdeskError exceptions.

    Args:
        request: The request that caused the exception
        exc: The UserdeskError to render

    Returns:
        Response: ORJSONResponse with the error kind, message and details

    Raises:
        TypeError: If exc is not a UserdeskError instance
    """
    if not isinstance(exc, UserdeskError):
        raise TypeError(f"Expected UserdeskError, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()
    status_code = status_code_for(exc.error_code)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
        },
    )
    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {}: {}",
        type(exc).__name__,
        exc.message,
        correlation_id=correlation_id,
        status_code=status_code,
        fingerprint=exc.fingerprint,
        **error_context,
    )

    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    error_response = ErrorResponse(
        kind=exc.error_code,
        error_code=exc.error_code,
        message=exc.message,
        details=exc.context or None,
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity=exc.severity.value,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )

    return ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    FastAPI raises these for path parameters. They are rendered exactly like
    body validation failures from the gate.

    Args:
        request: The request that caused the exception
        exc: The RequestValidationError to render

    Returns:
        Response: ORJSONResponse with status 422 and kind VALIDATION_ERROR

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    # Drop the "path"/"query"/"body" prefix from error locations
    error = build_validation_error(exc.errors(), loc_offset=1)
    return await userdesk_error_handler(request, error)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException (unknown routes, wrong methods, ...).

    Args:
        request: The request that caused the exception
        exc: The HTTPException to render

    Returns:
        Response: ORJSONResponse keeping the exception's status code

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        error_code, severity = ErrorCode.INTERNAL_ERROR.value, "HIGH"
    else:
        error_code, severity = f"HTTP_{exc.status_code}", "LOW"

    logger.warning(
        "HTTP exception",
        correlation_id=correlation_id,
        **sanitize_error_context(
            exc,
            {
                "status": exc.status_code,
                "method": request.method,
                "path": str(request.url.path),
            },
        ),
    )

    error_response = ErrorResponse(
        kind=error_code,
        error_code=error_code,
        message=str(exc.detail),
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity=severity,
        service_info=get_service_info(settings),
    )

    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
        headers=exc.headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any exception no other handler claimed.

    Production responses hide the exception; other environments include it
    to ease debugging.

    Args:
        request: The request that caused the exception
        exc: The unhandled exception

    Returns:
        Response: ORJSONResponse with status 500
    """
    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    logger.exception(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        correlation_id=correlation_id,
        **sanitize_error_context(
            exc,
            {
                "request_method": request.method,
                "request_path": str(request.url.path),
            },
        ),
    )

    if settings.environment == "production":
        message = "An internal server error occurred"
        details = None
        debug_info = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        }

    error_response = ErrorResponse(
        kind=ErrorCode.INTERNAL_ERROR.value,
        error_code=ErrorCode.INTERNAL_ERROR.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity="CRITICAL",
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )

    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(UserdeskError, userdesk_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
