"""
Password hashing and session token utilities.

- bcrypt with a fresh, embedded salt per hash (cost factor 10)
- opaque random session tokens, stored only as an HMAC-SHA256 digest
- cookie values carry the token signed as an HS256 JWS
"""

import hashlib
import hmac
import secrets

import bcrypt
from jose import jws
from jose.exceptions import JWSError

from message_board.config import settings
from message_board.errors import InvalidInput

BCRYPT_ROUNDS = 10
# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72
ALGORITHM = "HS256"
SESSION_TOKEN_BYTES = 32

_dummy_hash: str | None = None


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    if len(pwd_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        raise InvalidInput(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes."
        )
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password. Never raises."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except (ValueError, TypeError, AttributeError):
        # Malformed hash, oversized password or non-string input
        return False


def burn_password_check(plain_password: str) -> None:
    """Spend one bcrypt verification, for lookups that found no user."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = get_password_hash(secrets.token_urlsafe(16))
    verify_password(plain_password, _dummy_hash)


def generate_session_token() -> str:
    """Create an opaque, unguessable session token."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def session_token_digest(token: str) -> str:
    """Digest under which a session token is stored."""
    return hmac.new(
        settings.session_secret.encode("utf-8"),
        token.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_session_token(token: str) -> str:
    """Sign a session token for use as a cookie value."""
    return jws.sign(token.encode("utf-8"), settings.session_secret, algorithm=ALGORITHM)


def unsign_session_token(cookie_value: str | None) -> str | None:
    """Recover the session token from a cookie value, or None if it was tampered with."""
    if not cookie_value:
        return None
    try:
        payload = jws.verify(cookie_value, settings.session_secret, algorithms=[ALGORITHM])
    except JWSError:
        return None
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return None
