"""
Error kinds raised by the services.

Every error is recoverable and local: services raise one of the four
kinds below and the API layer turns it into an ``HTTPException`` with
the matching status code.  The kinds subclass ``ValueError`` so callers
that only care about "the operation was refused" can catch that.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


class RecordKeeperError(ValueError):
    """Base class for all service errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(RecordKeeperError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials. Please try again."


class NotFound(RecordKeeperError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationFailed(RecordKeeperError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class UnauthorizedAccess(RecordKeeperError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


def to_http_exception(exc: Exception) -> HTTPException:
    """Convert a service error into an ``HTTPException``.

    Unknown exceptions are logged and reported as ``ValidationFailed``
    with a generic message so internals never leak to clients.
    """
    if isinstance(exc, HTTPException):
        return exc
    if not isinstance(exc, RecordKeeperError):
        logger.error("Unexpected error: %s", exc, exc_info=exc)
        exc = ValidationFailed(GENERIC_ERROR_MESSAGE)
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Session"}
    return HTTPException(status_code=exc.status_code, detail=exc.message, headers=headers)
