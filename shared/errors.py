"""
Shared error handling for the Moment Auth Service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel
from opentelemetry import trace


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class AuthServiceException(Exception):
    """Base exception for auth service errors."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        # Get trace ID from current span
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        # Operational failures never leak their internals to the caller
        if self.is_server_error:
            return ErrorResponse(
                trace_id=trace_id,
                code=self.code,
                message="Internal server error",
            )

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(AuthServiceException):
    """Request shape errors."""

    def __init__(self, code: str = "VALIDATION_ERROR", message: str = "Validation failed",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(code, message, details)


class AuthenticationError(AuthServiceException):
    """Authentication-related errors."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHENTICATION_ERROR", message, details)


class ConflictError(AuthServiceException):
    """Resource already exists."""

    status_code = 409

    def __init__(self, message: str = "Resource already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFLICT", message, details)


class ServiceError(AuthServiceException):
    """Service-related errors."""

    status_code = 500

    def __init__(self, code: str = "SERVICE_ERROR", message: str = "Service error",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(code, message, details)


class ExternalServiceError(ServiceError):
    """External service errors."""

    def __init__(self, service: str, message: str = "External service error", details: Optional[Dict[str, Any]] = None):
        super().__init__("EXTERNAL_SERVICE_ERROR", f"{service}: {message}", details)
