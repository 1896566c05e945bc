from app.core.exceptions.base import CustomException


class RateLimiterError(CustomException):
    """
    Base exception for the login rate limiter
    """


class RateLimitConfigurationError(RateLimiterError, ValueError):
    """
    A limiter parameter (attempts, window, sweep interval) is not positive
    """

    def __init__(self, parameter: str, value: float):
        super().__init__(f"Rate limit {parameter} must be positive, got {value}")
        self.parameter = parameter
        self.value = value
