"""
Security Utilities

Password hashing (bcrypt) and JWT access token issuing/decoding (python-jose).
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from campus_revival.core.config import settings
from campus_revival.core.errors import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plaintext password with a freshly generated salt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """
    Create a signed access token bound to a user id.

    Every token gets a random ``jti`` so it can be revoked individually and so
    two tokens issued in the same second for the same user still differ.

    Args:
        subject: User id stored in the ``sub`` claim
        expires_delta: Lifetime override (defaults to ACCESS_TOKEN_EXPIRE_DAYS)
        additional_claims: Extra claims merged into the payload

    Returns:
        Encoded JWT string
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(days=settings.access_token_expire_days))
    payload: dict[str, Any] = {
        "sub": subject,
        "jti": secrets.token_hex(16),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "type": ACCESS_TOKEN_TYPE,
    }
    if additional_claims:
        payload.update(additional_claims)
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        ExpiredTokenError: If the token is past its ``exp``
        InvalidTokenError: If the token is malformed, badly signed, of the
            wrong type or missing required claims
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise ExpiredTokenError() from e
    except JWTError as e:
        logger.warning(f"Rejected token: {type(e).__name__}")
        raise InvalidTokenError() from e

    if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise InvalidTokenError("Not authorized, wrong token type")
    if not payload.get("sub") or not payload.get("jti"):
        raise InvalidTokenError("Not authorized, token is missing required claims")

    return payload


def token_expiry(payload: dict[str, Any]) -> datetime:
    """Return the ``exp`` claim of a decoded token as an aware datetime."""
    return datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
