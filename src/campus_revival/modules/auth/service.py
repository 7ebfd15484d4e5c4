"""
Authentication Service

Registration, login and logout. Routers translate the ServiceError family
raised here into HTTP responses.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.auth import TokenClaims
from campus_revival.core.errors import ConflictError, InvalidCredentialsError
from campus_revival.core.revocation import RevocationStore
from campus_revival.core.security import create_access_token, hash_password, verify_password
from campus_revival.modules.auth.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserProfile,
    UserSummary,
)
from campus_revival.modules.shared import as_utc
from campus_revival.modules.users.models import User, UserRole
from campus_revival.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self):
        super().__init__(
            message="User already exists with this email",
            error_code="EMAIL_EXISTS",
        )


def _summarize(user: User) -> UserSummary:
    return UserSummary(
        id=str(user.id),
        email=user.email,
        name=user.name,
        role=user.role.value,
    )


def to_profile(user: User) -> UserProfile:
    """Build the /me view of a user."""
    return UserProfile(
        id=str(user.id),
        email=user.email,
        name=user.name,
        role=user.role.value,
        created_at=as_utc(user.created_at),
    )


async def register(db: AsyncSession, data: RegisterRequest) -> AuthResponse:
    """
    Create an adopter account and issue its first token.

    Args:
        db: Database session
        data: Validated registration payload

    Returns:
        AuthResponse with token and user summary

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
    """
    if await UserRepository.email_exists(db, data.email):
        logger.warning("Registration rejected: email already registered")
        raise EmailAlreadyRegisteredError()

    try:
        user = await UserRepository.create(
            db,
            email=data.email,
            password_hash=hash_password(data.password),
            name=data.name,
            role=UserRole.ADOPTER,
        )
    except IntegrityError as e:
        # Concurrent registration for the same email won the unique index
        await db.rollback()
        logger.warning("Registration rejected: email registered concurrently")
        raise EmailAlreadyRegisteredError() from e

    logger.info(f"User registered: {user.id}")

    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(subject=str(user.id)),
        user=_summarize(user),
    )


async def login(db: AsyncSession, data: LoginRequest) -> AuthResponse:
    """
    Exchange email and password for a fresh token.

    Unknown email and wrong password are indistinguishable to the caller.

    Raises:
        InvalidCredentialsError: If the credentials do not match an account
    """
    user = await UserRepository.get_by_email(db, data.email)

    if user is None:
        logger.warning("Login attempt for non-existent email")
        raise InvalidCredentialsError()

    if not verify_password(data.password, user.password_hash):
        logger.warning(f"Invalid password for user: {user.id}")
        raise InvalidCredentialsError()

    logger.info(f"User logged in: {user.id} (role: {user.role.value})")

    return AuthResponse(
        message="Login successful",
        token=create_access_token(subject=str(user.id)),
        user=_summarize(user),
    )


async def logout(store: RevocationStore, claims: TokenClaims) -> None:
    """Revoke the presented token until it would have expired. Idempotent."""
    await store.revoke(claims.jti, claims.expires_at)
    logger.info(f"User logged out: {claims.user_id}")
