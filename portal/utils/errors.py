"""
Custom exception classes.

Each error carries the HTTP status it maps to at the router boundary.
"""
from fastapi import status


class PortalError(Exception):
    """Base exception for portal operations."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(PortalError):
    """Raised when a required field is missing or invalid."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(PortalError):
    """Raised when credentials do not match."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class NotFoundError(PortalError):
    """Raised when a file or ticket does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageError(PortalError):
    """Raised when an underlying storage operation fails."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage error"
