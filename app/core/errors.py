"""
Error taxonomy - exceptions raised by services and rendered by the API.

Every service-level failure is one of these classes. Each carries the HTTP
status it maps to, so routers never translate errors by hand: a single
exception handler in app.main renders them as

    {"success": false, "error": "<message>"}
"""

from fastapi import status


class GatewayError(Exception):
    """Base exception for all service-level errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(GatewayError):
    """Missing or malformed input. Always the client's fault."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(GatewayError):
    """Bad credentials. The message is intentionally non-specific."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class AuthorizationRequiredError(GatewayError):
    """The user has no stored Google grant."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User is not connected to Google Calendar"


class NotFoundError(GatewayError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(GatewayError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalError(GatewayError):
    """Unexpected downstream failure. Not retried."""


class CalendarOperationError(GatewayError):
    """Google Calendar rejected or failed the requested operation."""

    default_message = "Failed to create event"
