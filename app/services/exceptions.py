"""Domain-specific exceptions for service layer operations.

Architecture:
- ServiceError: Base exception with correlation ID and context support
- Category Base Classes: ValidationError, InfrastructureError
- Request log exceptions: write failures (contained inside the service) and
  read failures (propagated to the caller)
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from http import HTTPStatus


class ErrorSeverity(Enum):
    """Error severity levels for logging and monitoring."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification and handling."""
    VALIDATION = "validation"
    INFRASTRUCTURE = "infrastructure"
    SYSTEM = "system"


class ServiceError(Exception):
    """Base exception for all service layer errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for client handling
        correlation_id: Request correlation ID for tracing
        details: Additional error context (sanitized for logging)
        user_message: User-friendly message for client display
        severity: Error severity level for logging/monitoring
        category: Error category for classification
        http_status: HTTP status code for API responses
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SERVICE_ERROR",
        correlation_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        http_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.correlation_id = correlation_id
        self.details = details or {}
        self.user_message = user_message or message
        self.severity = severity
        self.category = category
        self.http_status = http_status

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """Convert exception to dictionary for logging or client response.

        Args:
            include_sensitive: Whether to include sensitive details

        Returns:
            Dictionary representation of the error
        """
        result = {
            "error_code": self.error_code,
            "message": self.user_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "http_status": self.http_status.value
        }

        if self.correlation_id:
            result["correlation_id"] = self.correlation_id

        if include_sensitive and self.details:
            result["details"] = self.details
            result["internal_message"] = self.message

        return result

    def __str__(self) -> str:
        """String representation for logging."""
        return f"{self.error_code}: {self.message}"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================

class ValidationError(ServiceError):
    """Input validation failed."""

    def __init__(
        self,
        field: str,
        message: str,
        correlation_id: Optional[str] = None,
        validation_errors: Optional[List[Dict[str, Any]]] = None
    ):
        details = {"field": field, "validation_message": message}
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(
            message=f"Validation failed for {field}: {message}",
            error_code="VALIDATION_ERROR",
            correlation_id=correlation_id,
            details=details,
            user_message=f"Invalid {field}: {message}",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            http_status=HTTPStatus.BAD_REQUEST
        )


# =============================================================================
# INFRASTRUCTURE ERRORS
# =============================================================================

class InfrastructureError(ServiceError):
    """Base class for infrastructure-related errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        correlation_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        http_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            correlation_id=correlation_id,
            details=details,
            user_message=user_message or "A system error occurred. Please try again later.",
            severity=severity,
            category=ErrorCategory.INFRASTRUCTURE,
            http_status=http_status
        )


# =============================================================================
# REQUEST LOG ERRORS
# =============================================================================

class RequestLogError(InfrastructureError):
    """Request log storage errors."""
    pass


class RequestLogWriteError(RequestLogError):
    """A request log row could not be stored.

    Raised and handled inside RequestLogService.record; never reaches the
    caller whose outbound call is being logged.
    """

    def __init__(
        self,
        reason: str,
        correlation_id: Optional[str] = None
    ):
        super().__init__(
            message=f"Request log write failed: {reason}",
            error_code="REQUEST_LOG_WRITE_FAILED",
            correlation_id=correlation_id,
            details={"reason": reason}
        )


class RequestLogQueryError(RequestLogError):
    """Request logs could not be read."""

    def __init__(
        self,
        reason: str,
        correlation_id: Optional[str] = None
    ):
        super().__init__(
            message=f"Request log query failed: {reason}",
            error_code="REQUEST_LOG_QUERY_FAILED",
            correlation_id=correlation_id,
            details={"reason": reason},
            user_message="Request logs could not be retrieved. Please try again later."
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def create_error_response(
    error: ServiceError,
    include_details: bool = False
) -> Dict[str, Any]:
    """Create standardized error response dictionary.

    Args:
        error: ServiceError instance
        include_details: Whether to include sensitive details

    Returns:
        Standardized error response dictionary
    """
    return error.to_dict(include_sensitive=include_details)



def get_http_status_for_error(error: Exception) -> HTTPStatus:
    """Get appropriate HTTP status code for an exception.

    Args:
        error: Exception instance

    Returns:
        Appropriate HTTP status code
    """
    if isinstance(error, ServiceError):
        return error.http_status

    # Default mappings for non-ServiceError exceptions
    error_mappings = {
        ValueError: HTTPStatus.BAD_REQUEST,
        TypeError: HTTPStatus.BAD_REQUEST,
        NotImplementedError: HTTPStatus.NOT_IMPLEMENTED,
    }

    return error_mappings.get(type(error), HTTPStatus.INTERNAL_SERVER_ERROR)
