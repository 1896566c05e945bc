from pydantic import BaseModel

from app.core.constants import ErrorCode


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    message: str


class BadRequestResponse(ErrorResponse):
    error: str = ErrorCode.VALIDATION_ERROR
    message: str = "Bad request"


class UnauthorizedResponse(ErrorResponse):
    error: str = ErrorCode.UNAUTHORIZED
    message: str = "Invalid or expired token"


class LoginFailedResponse(ErrorResponse):
    error: str = ErrorCode.LOGIN_FAILED
    message: str = "invalid email or password"


class NotFoundResponse(ErrorResponse):
    error: str = ErrorCode.USER_NOT_FOUND
    message: str = "user not found"


class ConflictResponse(ErrorResponse):
    error: str = ErrorCode.CONFLICT
    message: str = "user with this email already exists"


class TooManyRequestsResponse(ErrorResponse):
    error: str = ErrorCode.RATE_LIMIT_EXCEEDED
    message: str = "Too many login attempts. Please try again later."
