"""Error hierarchy for the user management service.

Each error knows its HTTP status and renders the ``{"error": ...}`` envelope,
so the API layer maps every domain failure with a single handler.
"""

from users_common.models.envelope import ErrorBody, ErrorResponse, FieldError


class UserManagementError(Exception):
    """Base class for errors surfaced to API clients."""

    http_status: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: list[FieldError] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict:
        """Render the error envelope as a JSON-ready dict."""
        return ErrorResponse(error=ErrorBody(message=self.message, details=self.details)).model_dump()


class UserValidationError(UserManagementError):
    """The payload failed field validation."""

    http_status = 400
    default_message = "Validation failed"


class InvalidRequestBodyError(UserManagementError):
    """The request body is not a JSON object."""

    http_status = 400
    default_message = "Invalid request body"


class UserNotFoundError(UserManagementError):
    """No user exists for the identifier, or the identifier is malformed."""

    http_status = 404
    default_message = "User not found"


class RouteNotFoundError(UserManagementError):
    http_status = 404
    default_message = "Route not found"
