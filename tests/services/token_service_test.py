from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.core.exceptions.token import (
    TokenError,
    TokenExpiredError,
    TokenInvalidSignatureError,
    TokenMalformedError,
)
from app.schemas import TokenClaims
from app.services.token_service import TokenService

SECRET = "token-service-test-secret"
OTHER_SECRET = "a-completely-different-secret"
TTL_SECONDS = 3600


class FrozenClock:
    """Settable clock for deterministic expiry checks"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def service(clock: FrozenClock) -> TokenService:
    return TokenService(ttl_seconds=TTL_SECONDS, clock=clock)


class TestTokenServiceConfiguration:
    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            TokenService(ttl_seconds=0)

        with pytest.raises(ValueError):
            TokenService(ttl_seconds=-10)


class TestIssue:
    def test_issued_token_carries_subject_and_times(self, service: TokenService, clock):
        token = service.issue(42, "jane@example.com", SECRET)

        payload = jwt.get_unverified_claims(token)
        issued_at = int(clock.now.timestamp())

        assert payload["sub"] == "42"
        assert payload["email"] == "jane@example.com"
        assert payload["iat"] == issued_at
        assert payload["exp"] == issued_at + TTL_SECONDS

    def test_issued_token_is_url_safe(self, service: TokenService):
        token = service.issue(1, "a@example.com", SECRET)

        assert token.count(".") == 2
        assert all(c.isalnum() or c in "-_." for c in token)


class TestValidate:
    def test_round_trip_returns_claims(self, service: TokenService, clock):
        token = service.issue(7, "john@example.com", SECRET)

        claims = service.validate(token, SECRET)

        assert isinstance(claims, TokenClaims)
        assert claims.subject_id == 7
        assert claims.subject_email == "john@example.com"
        assert claims.issued_at == clock.now.replace(microsecond=0)
        assert claims.expires_at == claims.issued_at + timedelta(seconds=TTL_SECONDS)

    def test_wrong_secret_is_invalid_signature(self, service: TokenService):
        token = service.issue(7, "john@example.com", SECRET)

        with pytest.raises(TokenInvalidSignatureError):
            service.validate(token, OTHER_SECRET)

    def test_tampered_payload_is_invalid_signature(self, service: TokenService):
        token = service.issue(7, "john@example.com", SECRET)
        forged = jwt.encode(
            {**jwt.get_unverified_claims(token), "sub": "1"}, OTHER_SECRET, algorithm="HS256"
        )
        header, _, signature = token.split(".")
        _, forged_payload, _ = forged.split(".")

        with pytest.raises(TokenInvalidSignatureError):
            service.validate(f"{header}.{forged_payload}.{signature}", SECRET)

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b", "a.b.c", "....."])
    def test_garbage_is_malformed(self, service: TokenService, token: str):
        with pytest.raises(TokenMalformedError):
            service.validate(token, SECRET)

    def test_missing_claims_are_malformed(self, service: TokenService, clock):
        now = int(clock.now.timestamp())
        token = jwt.encode({"sub": "1", "iat": now, "exp": now + 60}, SECRET, algorithm="HS256")

        with pytest.raises(TokenMalformedError):
            service.validate(token, SECRET)

    def test_non_numeric_subject_is_malformed(self, service: TokenService, clock):
        now = int(clock.now.timestamp())
        token = jwt.encode(
            {"sub": "abc", "email": "x@example.com", "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenMalformedError):
            service.validate(token, SECRET)

    def test_token_valid_until_just_before_expiry(self, service: TokenService, clock):
        token = service.issue(7, "john@example.com", SECRET)

        clock.advance(TTL_SECONDS - 1)

        assert service.validate(token, SECRET).subject_id == 7

    def test_token_expired_exactly_at_expiry(self, service: TokenService, clock):
        token = service.issue(7, "john@example.com", SECRET)

        clock.advance(TTL_SECONDS)

        with pytest.raises(TokenExpiredError):
            service.validate(token, SECRET)

    def test_token_expired_after_expiry(self, service: TokenService, clock):
        token = service.issue(7, "john@example.com", SECRET)

        clock.advance(TTL_SECONDS + 3600)

        with pytest.raises(TokenExpiredError):
            service.validate(token, SECRET)

    def test_all_failures_share_a_base_class(self, service: TokenService):
        for error in (TokenMalformedError, TokenInvalidSignatureError, TokenExpiredError):
            assert issubclass(error, TokenError)

        with pytest.raises(TokenError):
            service.validate("garbage", SECRET)
