"""
Custom exceptions and error handlers for the QuizApp backend
Every failure is answered with the same ``{"error": ...}`` envelope
"""

import logging
from functools import wraps
from typing import Any, Dict, Optional

import sentry_sdk
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quizapp.core.config import settings

logger = logging.getLogger(__name__)


class QuizAppException(Exception):
    """
    Base exception for the QuizApp application

    Subclasses set ``status_code``, ``error_code`` and ``default_message``;
    any of them can be overridden per raise.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationException(QuizAppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTHENTICATION_ERROR"
    default_message = "Invalid credentials."


class ValidationException(QuizAppException):
    """Missing or malformed request fields"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class NotFoundException(QuizAppException):
    """Raised with the resource name, e.g. ``NotFoundException("Quiz")``"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", details: Optional[Dict[str, Any]] = None):
        super().__init__(f"{resource} not found", details=details)


class DuplicateException(QuizAppException):
    """Conflicting resource, answered as a bad request"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "DUPLICATE_ERROR"
    default_message = "Resource already exists"


class AIServiceException(QuizAppException):
    """Model unavailable (503) or returned something unusable (502)"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "AI_SERVICE_ERROR"
    default_message = "AI service error"


class InternalServerException(QuizAppException):
    """Unexpected failure inside a route, carrying the route's generic message"""


def handle_route_errors(message: str):
    """
    Decorator converting unexpected endpoint failures into a 500 with a route-specific message

    Domain exceptions and HTTP exceptions pass through untouched.

    Args:
        message: Generic message returned to the client
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (QuizAppException, StarletteHTTPException):
                raise
            except Exception as e:
                logger.error(f"{message}: {e}", exc_info=True)
                if settings.SENTRY_DSN:
                    sentry_sdk.capture_exception(e)
                raise InternalServerException(message) from e

        return wrapper

    return decorator


def create_error_response(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Create the standard ``{"error": message}`` response"""
    content: Dict[str, Any] = {"error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def quizapp_exception_handler(request: Request, exc: QuizAppException) -> JSONResponse:
    """Handle QuizApp custom exceptions"""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"QuizApp exception: {exc.message}",
        extra={
            "error_code": exc.error_code,
            "status_code": exc.status_code,
            "path": request.url.path,
            "request_id": getattr(request.state, "request_id", None),
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        details=exc.details,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions"""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    response = create_error_response(status_code=exc.status_code, message=str(exc.detail))
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as a bad request"""
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning("Validation error", extra={"errors": errors, "path": request.url.path})

    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Request validation failed",
        details={"errors": errors},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle exceptions raised outside the decorated endpoints"""
    logger.error(
        f"Unexpected error: {str(exc)}",
        extra={"exception_type": type(exc).__name__, "path": request.url.path},
        exc_info=True,
    )

    if settings.SENTRY_DSN:
        sentry_sdk.capture_exception(exc)

    # Don't expose internal errors in production
    if settings.is_production():
        message = "An unexpected error occurred"
    else:
        message = str(exc)

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=message,
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(QuizAppException, quizapp_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Catch-all handler for unexpected exceptions
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
