from datetime import UTC, datetime, timedelta
from typing import Any, Callable

from jose import jwt
from jose.exceptions import JWTClaimsError, JWTError

from app.core.config import settings
from app.core.exceptions.token import (
    TokenExpiredError,
    TokenInvalidSignatureError,
    TokenMalformedError,
)
from app.core.types import JWTPayloadDict
from app.schemas.token import TokenClaims

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and validates signed, time-limited bearer tokens (JWT).

    Tokens carry the subject id and email and are valid until they expire;
    there is no server-side state and no revocation. The signing secret is
    passed on every call, the TTL and algorithm are fixed per instance.

    Example:
        ```python
        token = token_service.issue(user.id, user.email, settings.jwt_secret)
        claims = token_service.validate(token, settings.jwt_secret)
        ```
    """

    def __init__(
        self,
        ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Clock | None = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"Token TTL must be positive, got {ttl_seconds}")

        self.ttl = timedelta(seconds=ttl_seconds)
        self.algorithm = algorithm
        self._clock = clock or _utc_now

    def issue(self, subject_id: int, subject_email: str, secret: str) -> str:
        """
        Create a signed token for a subject.

        Args:
            subject_id: User ID stored in the ``sub`` claim
            subject_email: User email stored in the ``email`` claim
            secret: Symmetric signing key

        Returns:
            Encoded, URL-safe JWT
        """
        issued_at = int(self._clock().timestamp())
        payload = JWTPayloadDict(
            sub=str(subject_id),
            email=subject_email,
            iat=issued_at,
            exp=issued_at + int(self.ttl.total_seconds()),
        )

        return jwt.encode(dict(payload), secret, algorithm=self.algorithm)

    def validate(self, token: str, secret: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Args:
            token: Encoded JWT
            secret: Symmetric key the token must have been signed with

        Returns:
            The token claims

        Raises:
            TokenMalformedError: If the token cannot be parsed or lacks claims
            TokenInvalidSignatureError: If the signature does not verify
            TokenExpiredError: If the current time is at or past ``exp``
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenMalformedError(exception=e)

        try:
            # Expiry is checked below so that exp == now counts as expired
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTClaimsError as e:
            raise TokenMalformedError(exception=e)
        except JWTError as e:
            raise TokenInvalidSignatureError(exception=e)

        claims = self._parse_claims(payload)

        if self._clock() >= claims.expires_at:
            raise TokenExpiredError()

        return claims

    @staticmethod
    def _parse_claims(payload: dict[str, Any]) -> TokenClaims:
        subject = payload.get("sub")
        email = payload.get("email")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")

        if not isinstance(email, str) or not email:
            raise TokenMalformedError("Token has no subject email")

        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise TokenMalformedError("Token has no valid issue or expiry time")

        try:
            subject_id = int(subject)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise TokenMalformedError("Token has no valid subject", exception=e)

        return TokenClaims(
            subject_id=subject_id,
            subject_email=email,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )


token_service = TokenService(
    ttl_seconds=settings.access_token_expire_seconds,
    algorithm=settings.jwt_algorithm,
)
