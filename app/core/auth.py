from pwdlib import PasswordHash

# Argon2 with pwdlib's recommended parameters
password_hash = PasswordHash.recommended()


def get_password_hash(password: str) -> str:
    return password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored argon2 hash."""
    return password_hash.verify(plain_password, hashed_password)


def parse_bearer_token(authorization: str) -> str:
    """
    Pull the token out of an ``Authorization`` header value.

    ``Bearer <token>`` and a bare ``<token>`` are both accepted. An empty
    string comes back when only the ``Bearer`` prefix was sent.
    """
    if authorization.startswith("Bearer "):
        return authorization.removeprefix("Bearer ").strip()

    return authorization.strip()
