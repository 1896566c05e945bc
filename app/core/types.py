from typing import TypedDict


class JWTPayloadDict(TypedDict):
    """JWT payload structure for encoding/decoding."""

    sub: str  # Subject (user ID)
    email: str  # Subject email
    iat: int  # Issued at timestamp
    exp: int  # Expiration timestamp


class RateLimitInfoDict(TypedDict):
    """Rate limit information for headers."""

    limit: int
    retry_after: int
    window: int
