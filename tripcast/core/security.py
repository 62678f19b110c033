"""Password hashing and signed session tokens."""

import base64
import hashlib
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from tripcast.core.config import Settings
    from tripcast.core.sessions import SessionRecord

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Inclusive password length bounds, checked before hashing.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 64


def _prehash(plain_password: str) -> bytes:
    # bcrypt reads at most 72 bytes; the SHA-256 digest (44 base64 bytes) covers the whole password.
    return base64.b64encode(hashlib.sha256(plain_password.encode("utf-8")).digest())


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = _prehash(plain_password)
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare inside bcrypt)."""
    pw_bytes = _prehash(plain_password)
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Verified against when the email is unknown, so both login failures cost one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password("tripcast-dummy-password")


def create_session_token(record: "SessionRecord", settings: "Settings") -> str:
    """Sign a token naming the server-side session (sid) and its user (sub)."""
    payload: dict[str, Any] = {
        "sid": record.session_id,
        "sub": str(record.user_id),
        "iat": record.created_at,
        "exp": record.expires_at,
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str, settings: "Settings") -> dict[str, Any]:
    """
    Decode and validate a session token; return payload (sid, sub, iat, exp).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[settings.SESSION_ALGORITHM],
        options={"require": ["sid", "sub", "exp"]},
    )
