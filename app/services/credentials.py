from typing import Protocol


class CredentialRecord(Protocol):
    """What the login flow needs to know about a stored user"""

    id: int
    email: str
    hashed_password: str


class CredentialStore(Protocol):
    """
    Lookup boundary between the authentication core and user storage.

    ``UserRepo`` satisfies it against the database; tests can provide an
    in-memory implementation.
    """

    async def get_by_email(self, email: str) -> CredentialRecord | None: ...
