"""
Domain Exceptions

Errors raised by the service layer. The API layer maps each one to an HTTP
status code and the standard `{success: false, message}` envelope
(see the handlers registered in app.main).
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors scoped to a single request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Missing user, post, profile or tier."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ForbiddenError(AppError):
    """Ownership or role violation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized to perform this action"


class ConflictError(AppError):
    """Duplicate email, duplicate unlock."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UpstreamError(AppError):
    """Object storage failure. The message is the storage error's own."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream service failed"
