from typing import Generic, TypeVar

from loguru import logger

from app.core.auth import get_password_hash, verify_password
from app.core.exceptions.domain import ValidationError
from app.services.credentials import CredentialRecord, CredentialStore
from app.services.token_service import TokenService

# Pre-computed dummy hash for timing attack prevention
# Reference: https://cheatsheetseries.owasp.org/cheatsheets/Authentication_Cheat_Sheet.html
_DUMMY_HASH = get_password_hash("dummy_password_for_timing_attack_prevention")

INVALID_CREDENTIALS_MESSAGE = "invalid email or password"

RecordT = TypeVar("RecordT", bound=CredentialRecord)


class AuthService(Generic[RecordT]):
    """
    Credential verification and token issuance.

    Receives a CredentialStore via constructor and never sees database sessions.
    Raises ValidationError on bad credentials, which the endpoint layer turns
    into a 401 response.
    """

    def __init__(self, credentials: CredentialStore, tokens: TokenService, secret: str):
        self.credentials = credentials
        self.tokens = tokens
        self.secret = secret

    async def login(self, email: str, password: str) -> tuple[str, RecordT]:
        """
        Authenticate a user by email and password.

        A password hash comparison always runs, against a dummy hash when the
        email is unknown, so response time does not reveal which emails exist.

        Args:
            email: User's email.
            password: User's password (plaintext).

        Returns:
            The issued bearer token and the authenticated user record.

        Raises:
            ValidationError: If the email is unknown or the password is wrong.
        """
        user = await self.credentials.get_by_email(email)

        hash_to_verify = user.hashed_password if user else _DUMMY_HASH
        password_valid = verify_password(password, hash_to_verify)

        if not user or not password_valid:
            logger.info(f"Failed login attempt for {email}")
            raise ValidationError(INVALID_CREDENTIALS_MESSAGE)

        token = self.tokens.issue(user.id, user.email, self.secret)
        logger.info(f"User {user.id} logged in")

        return token, user  # type: ignore[return-value]
