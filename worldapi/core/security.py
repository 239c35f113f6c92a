"""Password hashing and signed session cookies."""

from datetime import datetime
from typing import Any

import bcrypt
import jwt

# Bcrypt cost (rounds) used when the caller does not pass one.
BCRYPT_ROUNDS = 12

# Session cookies are HS256 JWTs wrapping the server-side session id.
SESSION_TOKEN_ALGORITHM = "HS256"


class PasswordHashError(Exception):
    """Raised when a stored password hash cannot be checked (malformed or unsupported)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash in constant time.
    Returns False on mismatch; raises PasswordHashError if the hash is unusable.
    """
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise PasswordHashError(f"Stored password hash is invalid: {e}") from e


def encode_session_token(session_id: str, expires_at: datetime, secret: str) -> str:
    """Sign a session id into the cookie value."""
    payload: dict[str, Any] = {"sid": session_id, "exp": expires_at}
    return jwt.encode(payload, secret, algorithm=SESSION_TOKEN_ALGORITHM)


def decode_session_token(token: str, secret: str) -> str | None:
    """Return the session id from a cookie value, or None if the signature or expiry is invalid."""
    try:
        payload = jwt.decode(token, secret, algorithms=[SESSION_TOKEN_ALGORITHM])
    except jwt.PyJWTError:
        return None
    sid = payload.get("sid")
    if not isinstance(sid, str) or not sid:
        return None
    return sid
