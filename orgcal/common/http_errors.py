"""
Shared HTTP error classes and utilities for OrgCal services.

Provides:
- Base exception class for API errors
- Common subclasses (Validation, Conflict, NotFound, Service)
- Shared error response model
- Utility to convert exceptions to error responses
- FastAPI exception handler registration

Common Usage Patterns:
=====================

Basic Exception Usage:
>>> from orgcal.common.http_errors import ValidationError, NotFoundError
>>>
>>> # Validation error with field context
>>> error = ValidationError("End time must be after start time", field="end_time")
>>>
>>> # Resource not found
>>> error = NotFoundError("Meeting", "42")

Scheduling conflicts:
>>> from orgcal.common.http_errors import ConflictError
>>>
>>> error = ConflictError(
...     "Meeting time conflicts with an existing event.",
...     details={"conflicting_meeting": {"id": 7, "title": "Standup"}},
... )

FastAPI Integration:
>>> from fastapi import FastAPI
>>> from orgcal.common.http_errors import register_orgcal_exception_handlers
>>>
>>> app = FastAPI()
>>> register_orgcal_exception_handlers(app)

Error Code Taxonomy:
===================
- VALIDATION_FAILED : Input validation errors (400)
- NOT_FOUND : Resource not found (404)
- SCHEDULING_CONFLICT : Time range overlaps a scheduled meeting (409)
- SERVICE_* / DATABASE_ERROR : Internal service errors (5xx)
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from orgcal.common.logging_config import get_logger, log_http_error, request_id_var

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """
    Standardized error codes for OrgCal services.

    Categories:
        - General: Common errors that apply across all services
        - Scheduling: Calendar consistency errors
        - Service: Internal service and infrastructure errors
    """

    # ==========================================
    # GENERAL ERRORS (4xx client errors)
    # ==========================================
    VALIDATION_FAILED = "VALIDATION_FAILED"  # HTTP 400 - Input validation failed
    NOT_FOUND = "NOT_FOUND"  # HTTP 404 - Resource not found

    # ==========================================
    # SCHEDULING ERRORS (409 Conflict)
    # ==========================================
    SCHEDULING_CONFLICT = "SCHEDULING_CONFLICT"  # Overlaps a scheduled meeting

    # ==========================================
    # SERVICE ERRORS (5xx server errors)
    # ==========================================
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"  # Service temporarily unavailable
    SERVICE_ERROR = "SERVICE_ERROR"  # Generic service error
    DATABASE_ERROR = "DATABASE_ERROR"  # Database connectivity/operation error


class ErrorResponse(BaseModel):
    """
    Standardized error response model for OrgCal services.

    Attributes:
        type: Error type categorization (e.g., "validation_error", "conflict_error")
        message: Human-readable error message for end users
        details: Optional dictionary containing additional error context
        timestamp: ISO 8601 timestamp of when the error occurred
        request_id: Unique identifier for tracing and debugging purposes
    """

    type: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str
    request_id: str


def _current_request_id() -> str:
    """Return the request ID bound to the current context, or a fresh one."""
    request_id = request_id_var.get()
    if request_id and request_id != "uninitialized":
        return request_id
    return str(uuid.uuid4())


class OrgcalAPIException(Exception):
    """
    Base exception class for all OrgCal API errors.

    Carries everything the HTTP boundary needs to render a standardized
    ErrorResponse: message, details, error type and code, status code, a
    timestamp and the request ID used for log correlation.

    Args:
        message: The error message to display to users
        details: Optional dictionary with additional error context
        error_type: Error category string (defaults to "internal_error")
        error_code: Specific error code from ErrorCode enum
        status_code: HTTP status code (defaults to 500)
        request_id: Optional request ID (taken from the logging context if not provided)
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_type: str = "internal_error",
        error_code: Optional[ErrorCode] = None,
        status_code: int = 500,
        request_id: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        self.error_type = error_type
        self.error_code = error_code
        self.status_code = status_code
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.request_id = request_id or _current_request_id()
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """
        Convert exception to ErrorResponse Pydantic model.

        Includes the error code in details if present.
        """
        details = {
            **self.details,
            **({"code": self.error_code.value} if self.error_code else {}),
        }
        return ErrorResponse(
            type=self.error_type,
            message=self.message,
            details=details if details else None,
            timestamp=self.timestamp,
            request_id=self.request_id,
        )


class ValidationError(OrgcalAPIException):
    """
    Exception for input validation errors (HTTP 400).

    Raised for malformed input such as an empty title, a missing identifier
    or a time range whose end is not after its start. Never retried.

    Examples:
        >>> error = ValidationError("Title is required", field="title")
        >>> error = ValidationError(
        ...     "End time must be after start time",
        ...     field="end_time",
        ...     value="2024-01-15T09:00:00+00:00",
        ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        validation_details = details or {}
        if field:
            validation_details["field"] = field
        if value is not None:
            validation_details["value"] = str(value)
        super().__init__(
            message=message,
            details=validation_details,
            error_type="validation_error",
            error_code=ErrorCode.VALIDATION_FAILED,
            status_code=400,
        )
        self.field = field
        self.value = value


class ConflictError(OrgcalAPIException):
    """
    Exception for scheduling conflicts (HTTP 409).

    An expected, recoverable condition: the candidate time range overlaps a
    scheduled meeting. The details carry the conflicting meeting so the
    caller can pick another time.

    Examples:
        >>> error = ConflictError(
        ...     "Meeting time conflicts with an existing event.",
        ...     details={"conflicting_meeting": {"id": 3, "title": "1:1"}},
        ... )
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.SCHEDULING_CONFLICT,
    ):
        super().__init__(
            message=message,
            details=details,
            error_type="conflict_error",
            error_code=code,
            status_code=409,
        )


class NotFoundError(OrgcalAPIException):
    """
    Exception for resource not found errors (HTTP 404).

    Args:
        resource: Type of resource (e.g., "Meeting", "Event", "Calendar")
        identifier: Optional ID/identifier that was searched for
        details: Optional additional context about the search

    Examples:
        >>> error = NotFoundError("Meeting", "42")
        >>> print(error.message)
        Meeting 42 not found

        >>> error = NotFoundError("Event")
        >>> print(error.message)
        Event not found
    """

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if identifier:
            message = f"{resource} {identifier} not found"
        else:
            message = f"{resource} not found"
        notfound_details = {
            **(details or {}),
            "resource": resource,
            "identifier": identifier,
        }
        super().__init__(
            message=message,
            details=notfound_details,
            error_type="not_found",
            error_code=ErrorCode.NOT_FOUND,
            status_code=404,
        )
        self.resource = resource
        self.identifier = identifier


class ServiceError(OrgcalAPIException):
    """
    Exception for internal service errors (HTTP 502 by default).

    Used when storage operations fail or a calendar lock cannot be acquired
    in time. The core never partially applies a write before raising it.

    Examples:
        >>> error = ServiceError(
        ...     "Database operation failed",
        ...     code=ErrorCode.DATABASE_ERROR,
        ...     details={"operation": "insert_interval"},
        ... )
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.SERVICE_ERROR,
        status_code: int = 502,
    ):
        super().__init__(
            message=message,
            details=details,
            error_type="service_error",
            error_code=code,
            status_code=status_code,
        )


def exception_to_response(exc: Exception) -> ErrorResponse:
    """
    Convert any exception to a standardized ErrorResponse Pydantic model.

    1. OrgcalAPIException: Uses the built-in to_error_response() method
    2. HTTPException: Extracts detail information and normalizes format
    3. Generic Exception: Creates a safe internal error response

    Generic exceptions never expose their message to clients; only the
    exception type name is kept in the details for debugging.
    """
    if isinstance(exc, OrgcalAPIException):
        return exc.to_error_response()
    elif isinstance(exc, HTTPException):
        detail = (
            exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
        )
        return ErrorResponse(
            type="http_error",
            message=detail.get("message", "HTTP error"),
            details=detail,
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=_current_request_id(),
        )
    else:
        return ErrorResponse(
            type="internal_error",
            message="Internal server error",
            details={"error_type": type(exc).__name__},
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=_current_request_id(),
        )


def register_orgcal_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers for FastAPI applications.

    Behavior:
        - OrgcalAPIException: Returns exception's status_code with error details
        - HTTPException: Returns exception's status_code with normalized details
        - Generic Exception: Returns 500 status with safe error message

    Call once during application initialization, right after creating the
    FastAPI app instance.
    """
    from fastapi import Request
    from fastapi.responses import JSONResponse

    @app.exception_handler(OrgcalAPIException)
    async def orgcal_api_exception_handler(
        request: Request, exc: OrgcalAPIException
    ) -> JSONResponse:
        error_response = exc.to_error_response()
        log_http_error(
            error_type=exc.error_type,
            message=exc.message,
            status_code=exc.status_code,
            request_id=error_response.request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code, content=error_response.model_dump()
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        error_response = exception_to_response(exc)
        return JSONResponse(
            status_code=exc.status_code, content=error_response.model_dump()
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            path=request.url.path,
            error_type=type(exc).__name__,
        )
        error_response = exception_to_response(exc)
        return JSONResponse(status_code=500, content=error_response.model_dump())
