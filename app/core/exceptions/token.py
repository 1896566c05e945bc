from app.core.exceptions.base import CustomException


class TokenError(CustomException):
    """
    Base exception for bearer token validation
    """

    def __init__(self, message, exception: Exception | None = None):
        super().__init__(message, exception)


class TokenMalformedError(TokenError):
    """
    Token cannot be parsed or lacks required claims
    """

    def __init__(self, message="Token is malformed", exception: Exception | None = None):
        super().__init__(message, exception)


class TokenInvalidSignatureError(TokenError):
    """
    Token signature does not verify against the secret
    """

    def __init__(
        self,
        message="Token signature is invalid",
        exception: Exception | None = None,
    ):
        super().__init__(message, exception)


class TokenExpiredError(TokenError):
    """
    Token is past its expiry time
    """

    def __init__(self, message="Token has expired", exception: Exception | None = None):
        super().__init__(message, exception)
