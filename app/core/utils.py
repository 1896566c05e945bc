import ipaddress
import math

from fastapi import Request

from app.core.config import Environment, settings
from app.core.constants import MAX_DB_INTEGER


def is_trusted_proxy(host: str | None) -> bool:
    """Whether forwarding headers sent by this socket peer may be believed."""
    proxies = settings.trusted_proxies_list
    if "*" in proxies:
        return True
    if host is None:
        return False
    if host in proxies:
        return True

    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False

    # Entries that are not networks (hostnames) only match literally, above
    networks = []
    for proxy in proxies:
        try:
            networks.append(ipaddress.ip_network(proxy, strict=False))
        except ValueError:
            pass

    return any(address in network for network in networks)


def get_client_ip(request: Request) -> str:
    """
    Get client IP address from request headers or remote address

    Forwarding headers are only read when the socket peer is listed in
    ``settings.trusted_proxies``. Otherwise a client could pick a fresh
    rate limit key on every request by rotating ``X-Forwarded-For``.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address as a string
    """
    if settings.current_environment == Environment.LOCAL:
        return "localhost"

    peer = request.client.host if request.client else None
    if not is_trusted_proxy(peer):
        return peer or "unknown"

    if "X-Forwarded-For" in request.headers:
        return request.headers["X-Forwarded-For"].split(",")[0].strip()

    if "X-Real-IP" in request.headers:
        return request.headers["X-Real-IP"].strip()

    if "X-Client-IP" in request.headers:
        return request.headers["X-Client-IP"].strip()

    return request.client.host if request.client else "unknown"


def normalize_pagination(page: int, limit: int) -> tuple[int, int]:
    """
    Clamp page and limit to usable values.

    Args:
        page: Requested page, 1-based
        limit: Requested page size

    Returns:
        (page, limit) with page >= 1 and 1 <= limit <= the configured maximum.
        page is also capped so the resulting offset fits a database integer.
    """
    if page < 1:
        page = 1
    if limit < 1:
        limit = settings.pagination_default_limit
    if limit > settings.pagination_max_limit:
        limit = settings.pagination_max_limit

    max_page = MAX_DB_INTEGER // limit
    if page > max_page:
        page = max_page

    return page, limit


def count_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0
