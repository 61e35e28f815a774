"""
Base exception classes for the inventory backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code, so picking the
right base is what decides the response a client sees.
"""

from typing import Optional, Any


class InventoryError(Exception):
    """
    Base exception for all inventory errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(InventoryError):
    """Resource not found (or not owned by the caller)."""

    pass


class ValidationError(InventoryError):
    """Input validation failed."""

    pass


class ConflictError(InventoryError):
    """
    A uniqueness rule was violated.

    Carries the conflicting record as ``data`` when it is known, so clients
    can show what already exists instead of only an error message.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        data: Any = None,
    ):
        super().__init__(message, code, details)
        self.data = data


class AuthenticationError(InventoryError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(InventoryError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(InventoryError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreError(ExternalServiceError):
    """The document store rejected or failed an operation."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, service="store", code="STORE_ERROR", details=details)


class DuplicateRecordError(StoreError):
    """
    A write hit a unique index.

    Raised by repositories only; services translate it into a
    module-specific ConflictError.
    """

    def __init__(self, collection: str, key: Optional[dict[str, Any]] = None):
        super().__init__(
            f"Duplicate record in {collection}",
            details={"collection": collection, "key": key or {}},
        )
        self.code = "DUPLICATE_RECORD"
        self.collection = collection
        self.key = key or {}
