"""
Error handling for the FastAPI application.
Translates domain exceptions and request validation failures into a
consistent JSON envelope, and catches anything left unhandled.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.application.dto.base_dto import ErrorResponseDTO, field_errors_from_pydantic
from app.domain.models.base import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleViolation,
    DomainException,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidStateError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# Most specific classes first; InvalidRangeError is a ValidationError
STATUS_CODES = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (BusinessRuleViolation, status.HTTP_400_BAD_REQUEST),
]


def status_code_for(exc: DomainException) -> int:
    """HTTP status for a domain exception."""
    for exception_class, status_code in STATUS_CODES:
        if isinstance(exc, exception_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_details(exc: DomainException) -> Optional[Dict[str, Any]]:
    """Structured details carried by some domain exceptions."""
    details: Dict[str, Any] = {}

    field = getattr(exc, "field", None)
    if field:
        details["field"] = field

    if isinstance(exc, EntityNotFoundError):
        details["entity_type"] = exc.entity_type
        details["entity_id"] = str(exc.entity_id)

    return details or None


def error_response(status_code: int, error: str, message: str,
                   details: Optional[Dict[str, Any]] = None,
                   headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    body = ErrorResponseDTO(error=error, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_code_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None

    logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc.message}")
    return error_response(status_code, exc.code, exc.message, error_details(exc), headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = field_errors_from_pydantic(exc.errors())
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"fields": [field.model_dump() for field in fields]}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain and request validation handlers on ``app``."""
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        # Log the full exception with traceback
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        details = None
        if self.debug:
            details = {
                "exception_type": type(exc).__name__,
                "exception": str(exc),
                "traceback": traceback.format_exc().split("\n")
            }

        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            details
        )
