"""Service layer exception classes for Parcel Tracker.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application. Every exception carries a
stable ``kind`` string that front-ends can switch on, and a readable message.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    ├── NotFoundError
    ├── AuthenticationError
    └── StoreError
"""

from typing import List, Optional

from src.utils.constants import ERROR_INVALID_CREDENTIALS


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    kind = "service_error"

    def to_dict(self) -> dict:
        """Client-facing error payload."""
        return {"error": self.kind, "message": str(self)}


class ValidationError(ServiceError):
    """Raised when input validation fails.

    Args:
        errors: One message per violated rule, e.g. ["destinatario: This field is required"]
        field: The offending field when there is exactly one

    Example:
        >>> raise ValidationError(["status: Invalid status"], field="status")
        ValidationError: Validation failed: status: Invalid status
    """

    kind = "validation_error"

    def __init__(self, errors: List[str], field: Optional[str] = None):
        self.errors = list(errors)
        if field is None and len(self.errors) == 1 and ":" in self.errors[0]:
            field = self.errors[0].split(":", 1)[0]
        self.field = field
        error_msg = "; ".join(self.errors)
        super().__init__(f"Validation failed: {error_msg}")

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["errors"] = self.errors
        if self.field:
            payload["field"] = self.field
        return payload


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist.

    Args:
        entity: Entity label (e.g. "Package")
        entity_id: The identifier that was looked up

    Example:
        >>> raise NotFoundError("Package", 42)
        NotFoundError: Package with ID 42 not found
    """

    kind = "not_found"

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class AuthenticationError(ServiceError):
    """Raised when submitted credentials do not match an account.

    The message never says which part of the credentials was wrong.
    """

    kind = "authentication_error"

    def __init__(self):
        super().__init__(ERROR_INVALID_CREDENTIALS)


class StoreError(ServiceError):
    """Raised when a database operation fails.

    The caller decides whether to retry; the service layer never does.
    """

    kind = "store_error"

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
