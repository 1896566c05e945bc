from typing import Any, Optional

from fastapi import HTTPException as FastAPIHTTPException
from starlette import status

from app.core.constants import ErrorCode


class CustomException(Exception):
    """Root of the project's non HTTP exceptions; optionally wraps a cause."""

    def __init__(self, message, exception: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.exception = exception

    def __str__(self):
        if self.exception is None:
            return self.message

        return f"{self.message}\nException: {self.exception}"


class AppException(CustomException):
    """Raised by services; endpoints translate these into HTTP errors."""


class HTTPException(FastAPIHTTPException):
    """
    FastAPI HTTPException that also carries the ``error`` code of the JSON body.

    Subclasses pin ``http_status`` and ``default_error_code``; callers pass a
    more specific ``error_code`` when the endpoint has one.
    """

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_code: str = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        detail: Any = None,
        headers: Optional[dict[str, str]] = None,
        error_code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            status_code=status_code or self.http_status,
            detail=detail,
            headers=headers,
        )
        self.error_code = error_code or self.default_error_code
