"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
This module handles bearer token validation, the revoked token check and
role-based access control using the utilities defined in security.py.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.database import get_db
from campus_revival.core.errors import (
    AuthError,
    ForbiddenError,
    RevokedTokenError,
    to_http_exception,
)
from campus_revival.core.revocation import RevocationStore, get_revocation_store
from campus_revival.core.security import decode_token, token_expiry
from campus_revival.modules.users.models import User
from campus_revival.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation. auto_error is off so a missing
# header produces our own 401 body instead of FastAPI's 403.
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass
class TokenClaims:
    """
    Validated claims of the bearer token on the current request.

    Attributes:
        user_id: Subject of the token
        jti: Unique token id, the key of the revoked token set
        expires_at: When the token stops being valid on its own
    """

    user_id: str
    jti: str
    expires_at: datetime

    def __str__(self) -> str:
        return f"TokenClaims(user_id={self.user_id}, expires_at={self.expires_at.isoformat()})"


def _unauthorized(message: str, error_code: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": message, "code": error_code},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def validate_token(token: str, store: RevocationStore) -> TokenClaims:
    """
    Validate a bearer token and return its claims.

    Signature and expiry are checked first, then the revoked token set.

    Args:
        token: Raw JWT string
        store: Revoked token store

    Returns:
        TokenClaims for the token

    Raises:
        InvalidTokenError: If the token is malformed or badly signed
        ExpiredTokenError: If the token is past its expiry
        RevokedTokenError: If the token was invalidated by logout
    """
    payload = decode_token(token)
    jti = str(payload["jti"])

    if await store.is_revoked(jti):
        logger.warning(f"Rejected revoked token for user {payload['sub']}")
        raise RevokedTokenError()

    return TokenClaims(
        user_id=str(payload["sub"]),
        jti=jti,
        expires_at=token_expiry(payload),
    )


async def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[RevocationStore, Depends(get_revocation_store)],
) -> TokenClaims:
    """
    FastAPI dependency that validates the bearer token on the request.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired or revoked
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authorized, no token", "NO_TOKEN")

    try:
        return await validate_token(credentials.credentials, store)
    except AuthError as e:
        raise to_http_exception(e) from e


async def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    FastAPI dependency that resolves the authenticated user.

    Usage:
        @router.get("/me")
        async def me(user: CurrentUser):
            ...

    Raises:
        HTTPException 401: If the token is rejected or its user no longer exists
    """
    user = await UserRepository.get_by_id(db, claims.user_id)
    if user is None:
        logger.warning(f"Valid token for unknown user {claims.user_id}")
        raise _unauthorized("User not found", "USER_NOT_FOUND")

    logger.debug(f"Authenticated user: {user.id}")
    return user


async def require_admin(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    FastAPI dependency that only lets admins through.

    Raises:
        HTTPException 401: If the caller is not authenticated
        HTTPException 403: If the caller is not an admin
    """
    if not user.is_admin:
        logger.warning(
            f"Access denied: User {user.id} has role '{user.role.value}', but 'admin' is required"
        )
        raise to_http_exception(ForbiddenError())
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
CurrentToken = Annotated[TokenClaims, Depends(get_token_claims)]


__all__ = [
    "TokenClaims",
    "validate_token",
    "get_token_claims",
    "get_current_user",
    "require_admin",
    "CurrentUser",
    "AdminUser",
    "CurrentToken",
]
