"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from shop.core.config import settings
from shop.core.exceptions import InvalidToken

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

# Password policy shared by register and login requests.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 50
PASSWORD_PATTERN = r"(?:(?=.*\d)|(?=.*\W+))(?![.\n])(?=.*[A-Z])(?=.*[a-z]).*$"
PASSWORD_PATTERN_MESSAGE = "The password must have a Uppercase, lowercase letter and a number"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | uuid.UUID) -> str:
    """
    Create a JWT access token carrying only the subject (user id).

    jti makes every token unique even when two are issued in the same second.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "exp": expire,
        "iat": now,
        "jti": uuid.uuid4().hex,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> str:
    """
    Decode and validate a JWT; return its subject.
    Raises InvalidToken on bad signature, malformed token, expiry or missing sub.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidToken("Token not valid") from e
    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        raise InvalidToken("Token not valid")
    return sub
