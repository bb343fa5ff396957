"""Exception classes for the forms service.

Persistence and configuration problems are raised as `AppException`
subclasses. Submission handlers turn the persistence ones into form-level
messages; anything that escapes is rendered by `core.error_handlers`.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Profile', 'Form').
            identifier: Identifier that was not found.
        """
        message = f"{resource} '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class DatabaseError(AppException):
    """Raised when a database operation fails."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize database error.

        Args:
            message: Database error message.
            operation: Optional operation that failed (e.g., 'insert_profile').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=503, details=details)


class UniqueViolationError(DatabaseError):
    """Raised when an insert conflicts with a uniqueness constraint.

    `field` names the conflicting column when it can be identified
    (`profile_code` or `email` for profiles), otherwise None.
    """

    def __init__(self, message: str, operation: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message, operation=operation)
        self.status_code = 409
        self.field = field
        if field:
            self.details["field"] = field


class CodeGenerationError(AppException):
    """Raised when no unused profile code could be drawn within the attempt budget."""

    def __init__(self, attempts: int):
        super().__init__(
            "Unable to generate unique profile code",
            status_code=503,
            details={"attempts": attempts}
        )
        self.attempts = attempts


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Configuration error message.
            config_key: Optional configuration key that is invalid.
        """
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)
