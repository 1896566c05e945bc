from typing import Callable, Coroutine

from fastapi import Request, Response
from fastapi.routing import APIRoute
from loguru import logger

from app.core.config import settings
from app.core.exceptions.http_exceptions import TooManyRequestsException
from app.core.utils import get_client_ip
from app.services.rate_limiter import login_rate_limiter

LOGIN_RATE_LIMIT_MESSAGE = "Too many login attempts. Please try again later."


async def rate_limit_login(request: Request) -> None:
    """
    Fixed-window rate limiting for the login endpoint (IP-based).

    Every call counts as an attempt, successful logins included.

    Limit: settings.login_rate_limit_attempts per settings.login_rate_limit_window seconds
    Key strategy: client IP address
    Disabled entirely when settings.rate_limit_enabled is false.

    Args:
        request: FastAPI request object

    Raises:
        TooManyRequestsException: When rate limit is exceeded (HTTP 429)
    """
    if not settings.rate_limit_enabled:
        return

    ip = get_client_ip(request)

    if login_rate_limiter.is_allowed(ip):
        return

    info = login_rate_limiter.get_limit_info(ip)
    request.state.rate_limit_info = info

    logger.warning(f"Login rate limit exceeded. IP: {ip}")
    raise TooManyRequestsException(
        detail=LOGIN_RATE_LIMIT_MESSAGE,
        headers={
            "Retry-After": str(info["retry_after"]),
            "X-RateLimit-Limit": str(info["limit"]),
        },
    )


class LoginRateLimitedRoute(APIRoute):
    """
    Route that runs ``rate_limit_login`` before the request body is read.

    A plain dependency would only run after body validation, so malformed
    login requests would never be counted.

    Example:
        ```python
        login_router = APIRouter(route_class=LoginRateLimitedRoute)

        @login_router.post("/login")
        async def login(...):
            pass
        ```
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[None, None, Response]]:
        route_handler = super().get_route_handler()

        async def rate_limited_route_handler(request: Request) -> Response:
            await rate_limit_login(request)
            return await route_handler(request)

        return rate_limited_route_handler
