"""Domain exceptions for object search.

Defines domain-level exceptions that represent invalid input or missing
configuration. These exceptions are independent of infrastructure concerns.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class ObjectSearchException(Exception):
    """Base exception for all object search errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, object name).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentException(ObjectSearchException):
    """Raised when a single requested object type is unknown or not eligible for search."""

    def __init__(self, object_name: str) -> None:
        """Initialize with the offending object name.

        Args:
            object_name: The object type name that could not be resolved.
        """
        super().__init__(
            f'The "{object_name}" object doesn\'t exist',
            "INVALID_ARGUMENT",
            {"object": object_name},
        )


class ValidationException(ObjectSearchException):
    """Raised when request input validation fails (e.g. malformed filter or page)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or parameter that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(ObjectSearchException):
    """Raised when authentication fails (e.g. missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class SqlNotConfiguredException(ObjectSearchException):
    """Raised when a search needs the database but DATABASE_URL is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
