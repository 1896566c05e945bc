from unittest.mock import MagicMock, patch

import pytest
from fastapi import Request

from app.api.v1.deps.rate_limit import LOGIN_RATE_LIMIT_MESSAGE, rate_limit_login
from app.core.constants import ErrorCode
from app.core.exceptions.http_exceptions import TooManyRequestsException
from app.services.rate_limiter import LoginRateLimiter


def _request(ip: str = "203.0.113.10", headers: dict[str, str] | None = None) -> MagicMock:
    request = MagicMock(spec=Request)
    request.state = MagicMock()
    request.headers = headers or {}
    request.client = MagicMock(host=ip)
    return request


@pytest.fixture
def limiter():
    limiter = LoginRateLimiter(max_attempts=3, window_seconds=900)
    with patch("app.api.v1.deps.rate_limit.login_rate_limiter", limiter):
        yield limiter


@pytest.mark.anyio
class TestRateLimitLogin:
    async def test_allows_until_limit(self, limiter: LoginRateLimiter):
        for _ in range(3):
            await rate_limit_login(_request())

        assert limiter.get_entry("203.0.113.10").count == 3

    async def test_denies_with_headers(self, limiter: LoginRateLimiter):
        for _ in range(3):
            await rate_limit_login(_request())

        with pytest.raises(TooManyRequestsException) as exc_info:
            await rate_limit_login(_request())

        exc = exc_info.value
        assert exc.status_code == 429
        assert exc.error_code == ErrorCode.RATE_LIMIT_EXCEEDED
        assert exc.detail == LOGIN_RATE_LIMIT_MESSAGE
        assert exc.headers == {"Retry-After": "900", "X-RateLimit-Limit": "3"}

    async def test_denial_logged(self, limiter: LoginRateLimiter):
        for _ in range(3):
            await rate_limit_login(_request())

        with patch("app.api.v1.deps.rate_limit.logger") as mock_logger:
            with pytest.raises(TooManyRequestsException):
                await rate_limit_login(_request())

        mock_logger.warning.assert_called_once()
        assert "203.0.113.10" in mock_logger.warning.call_args[0][0]

    async def test_forwarded_for_is_the_key(self, limiter: LoginRateLimiter):
        await rate_limit_login(_request(headers={"X-Forwarded-For": "198.51.100.7, 10.0.0.1"}))

        assert limiter.get_entry("198.51.100.7").count == 1
        assert limiter.get_entry("203.0.113.10") is None

    async def test_clients_limited_independently(self, limiter: LoginRateLimiter):
        for _ in range(3):
            await rate_limit_login(_request(ip="203.0.113.10"))

        await rate_limit_login(_request(ip="203.0.113.11"))

        with pytest.raises(TooManyRequestsException):
            await rate_limit_login(_request(ip="203.0.113.10"))

    async def test_disabled_skips_counting(self, limiter: LoginRateLimiter):
        with patch("app.api.v1.deps.rate_limit.settings.rate_limit_enabled", False):
            for _ in range(10):
                await rate_limit_login(_request())

        assert len(limiter) == 0
