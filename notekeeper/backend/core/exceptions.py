"""
Application Exceptions.

Every error the notes API reports on purpose is an ApplicationError with a
stable ``code``. exception_handlers.py maps each class to its HTTP status.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """
    No matching note.

    Owner-scoped writes raise this for a foreign note too, so callers
    cannot tell the two cases apart.
    """

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Malformed note id or invalid form fields; ``details`` holds field errors."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class AuthenticationError(ApplicationError):
    """Missing, expired or malformed bearer token."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class AuthorizationError(ApplicationError):
    """The note exists but belongs to another user (read path only)."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class DatabaseError(ApplicationError):
    """The store rejected or failed a statement."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
