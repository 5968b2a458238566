from typing import Any, Optional, Sequence, Union

Details = Union[Sequence[Any], dict, None]


class AppError(Exception):
    """Base class for errors that map onto an HTTP response.

    Attributes:
        message: human-readable message
        details: optional extra context (field errors, validation info)
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Application error"
    default_code = "APPLICATION_ERROR"

    def __init__(self, message: Optional[str] = None, details: Details = None, code: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    ``details`` carries every field-level violation as ``{"field", "message"}``
    dicts so a client can fix them all in one round trip.
    """

    http_status = 400
    default_message = "Request validation failed"
    default_code = "VALIDATION_ERROR"


class ConflictError(AppError):
    """Raised when a unique field collides with an existing record (e.g. email)."""

    http_status = 400
    default_message = "Conflict"
    default_code = "CONFLICT"


class AuthenticationError(AppError):
    """Raised when the bearer credential is missing or names no known user."""

    http_status = 401
    default_message = "Not authenticated"
    default_code = "UNAUTHORIZED"


class InvalidTokenError(AppError):
    """Raised when a bearer token fails signature, expiry or shape checks."""

    http_status = 403
    default_message = "Invalid token"
    default_code = "FORBIDDEN"


class NotFoundError(AppError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class AuthorizationError(NotFoundError):
    """Raised when a resource is missing or owned by another user.

    Shares status and code with NotFoundError so callers cannot tell the two
    cases apart.
    """


class InternalError(AppError):
    """Raised for unexpected persistence/runtime failures. Details stay server-side."""

    http_status = 500
    default_message = "An unexpected error occurred"
    default_code = "INTERNAL_SERVER_ERROR"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}
