from starlette import status

from app.core.constants import ErrorCode
from app.core.exceptions.base import HTTPException


class UnauthorizedException(HTTPException):
    """
    Missing or rejected credentials.

    Raise it with a ``WWW-Authenticate`` header so clients know the scheme.
    """

    http_status = status.HTTP_401_UNAUTHORIZED
    default_error_code = ErrorCode.UNAUTHORIZED


class NotFoundException(HTTPException):
    http_status = status.HTTP_404_NOT_FOUND
    default_error_code = ErrorCode.NOT_FOUND


class ConflictException(HTTPException):
    """The request clashes with stored state, e.g. an email already in use."""

    http_status = status.HTTP_409_CONFLICT
    default_error_code = ErrorCode.CONFLICT


class TooManyRequestsException(HTTPException):
    """Client exceeded its login attempt budget; send ``Retry-After``."""

    http_status = status.HTTP_429_TOO_MANY_REQUESTS
    default_error_code = ErrorCode.RATE_LIMIT_EXCEEDED
