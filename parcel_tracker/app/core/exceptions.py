"""
Custom exceptions for consistent error reporting.

Every failure raised by the parcel store is one of the kinds below, each with
a stable error code the caller can branch on.
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class StorageError(AppException):
    """Raised when the database engine fails (connectivity, constraint violation)."""

    def __init__(self, message: str = "Storage operation failed", details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_STORAGE_001",
            details=details
        )


class NotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            details={"resource": resource, "id": resource_id}
        )


class ParcelNotFoundError(NotFoundError):
    """Raised when no parcel has the requested number."""

    def __init__(self, number: int):
        super().__init__("Parcel", number)
        self.number = number
        self.details["number"] = number


class InvalidTransitionError(AppException):
    """
    Raised when a parcel's status forbids the requested mutation.

    This is a policy violation, not a transient fault: retrying will not help.
    """

    def __init__(self, number: int, operation: str, status: str = None):
        message = f"Operation '{operation}' not allowed for parcel {number}"
        if status is not None:
            message = f"Operation '{operation}' not allowed for parcel {number} in status '{status}'"
        super().__init__(
            message=message,
            error_code="ERR_TRANSITION_001",
            details={"number": number, "operation": operation, "status": status}
        )
        self.number = number
        self.operation = operation
        self.status = status
