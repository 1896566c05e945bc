from datetime import datetime

from pydantic import ConfigDict

from app.schemas.base import BaseSchema


class TokenClaims(BaseSchema):
    """Claims carried by a validated bearer token"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    subject_id: int
    subject_email: str
    issued_at: datetime
    expires_at: datetime


class AuthenticatedIdentity(BaseSchema):
    """Identity handed to protected handlers once the bearer token checks out"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_id: int
    email: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "AuthenticatedIdentity":
        return cls(user_id=claims.subject_id, email=claims.subject_email)
