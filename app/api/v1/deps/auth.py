from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader
from loguru import logger

from app.core.auth import parse_bearer_token
from app.core.config import settings
from app.core.exceptions import http_exceptions
from app.core.exceptions.token import TokenError
from app.schemas import AuthenticatedIdentity
from app.services.token_service import token_service

# Plain header scheme, the value is parsed leniently below
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="`Bearer <token>`; a bare token is accepted too",
)

WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


async def get_current_identity(
    authorization: Annotated[str | None, Depends(authorization_header)],
) -> AuthenticatedIdentity:
    """
    Authenticate the request from its Authorization header.

    Args:
        authorization: Raw Authorization header value

    Returns:
        Identity of the token subject

    Raises:
        UnauthorizedException: If the header is missing, the token is empty,
            or the token fails validation. The failure kind is logged only.
    """
    if not authorization or not authorization.strip():
        raise http_exceptions.UnauthorizedException(
            detail="Authorization header is required",
            headers=WWW_AUTHENTICATE,
        )

    token = parse_bearer_token(authorization)
    if not token:
        raise http_exceptions.UnauthorizedException(
            detail="Token is required",
            headers=WWW_AUTHENTICATE,
        )

    try:
        claims = token_service.validate(token, settings.jwt_secret)
    except TokenError as e:
        logger.warning(f"Rejected bearer token: {type(e).__name__}: {e.message}")
        raise http_exceptions.UnauthorizedException(
            detail="Invalid or expired token",
            headers=WWW_AUTHENTICATE,
        )

    return AuthenticatedIdentity.from_claims(claims)


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]
