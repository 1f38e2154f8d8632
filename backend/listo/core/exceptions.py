"""
Domain errors raised by the store and the access-control layer.

Each error carries the HTTP status the API answers with, so the route layer
can map them without inspecting messages.
"""

from fastapi import status


class ListoError(Exception):
    """Base class for expected, client-facing errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ListoError):
    """A mutation targeted an entity id that does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ListoError):
    """Authenticated user lacks ownership or participant rights."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ListoError):
    """Request conflicts with existing data (duplicate share, self-share)."""

    status_code = status.HTTP_400_BAD_REQUEST


class UniqueConstraintViolation(ConflictError):
    """A unique key (username, email, list participant pair) already exists."""
