"""
Error taxonomy and envelope formatting for the storefront API.

Every failure raised by the logic or data access layers derives from
ServiceError. The router catches them at the boundary and renders the uniform
``{"status": "error", "message": ...}`` envelope, so no error ever surfaces as
a protocol-level failure.
"""

import uuid
from enum import Enum
from typing import Any, Dict, Optional

from storefront.handlers.utils.observability import count, logger, tracer
from storefront.models.output import ErrorResponse


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
        }


class InvalidActionError(ServiceError):
    """Raised when a read request names no action or an unknown one."""

    def __init__(
        self,
        message: str = "Invalid action. Use action=products|getAllOrders|getOrders&phone=...",
    ):
        super().__init__(
            message=message,
            error_code="INVALID_ACTION",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )


class InvalidRequestError(ServiceError):
    """Raised when a write request body cannot be parsed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="INVALID_REQUEST",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )


class MissingIdError(ServiceError):
    """Raised when an update or delete arrives without an orderId."""

    def __init__(self, message: str = "orderId required"):
        super().__init__(
            message=message,
            error_code="MISSING_ORDER_ID",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )


class NotFoundError(ServiceError):
    """Raised when the target table is absent or empty, or no row matches."""

    def __init__(self, message: str, resource_id: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
        )
        self.resource_id = resource_id


class StoreUnavailableError(ServiceError):
    """Raised when the backing table store cannot be reached or configured."""

    def __init__(self, message: str, store_name: str):
        super().__init__(
            message=message,
            error_code="STORE_UNAVAILABLE",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
        )
        self.store_name = store_name


@tracer.capture_method
def log_error_metrics(error: ServiceError) -> None:
    """Log a caught service error and count it."""
    count("ErrorCount")
    count(f"Error{error.category.value.title().replace('_', '')}Count")

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", error.to_dict())

    logger.error(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
        }
    )


def format_error_response(error: Exception) -> Dict[str, Any]:
    """Render any error as the uniform error envelope."""
    message = error.message if isinstance(error, ServiceError) else str(error)
    return ErrorResponse(message=message or type(error).__name__).to_body()
