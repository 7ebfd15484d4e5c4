"""
Authentication Router

Endpoints:
- POST /register - Create an adopter account (rate limited)
- POST /login - Exchange credentials for a token (rate limited)
- GET /me - Current user profile
- POST /logout - Revoke the presented token
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.auth import CurrentToken, CurrentUser
from campus_revival.core.database import get_db
from campus_revival.core.errors import ServiceError, to_http_exception
from campus_revival.core.rate_limit import rate_limit
from campus_revival.core.revocation import RevocationStore, get_revocation_store
from campus_revival.modules.auth import service
from campus_revival.modules.auth.schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
)
from campus_revival.modules.shared import MessageResponse

router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
)
@rate_limit()
async def register(
    request: Request,
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Create a new adopter account and return a token for it.

    Raises:
        HTTPException 400: If the email is already registered
        HTTPException 429: If the client exceeded the rate limit
    """
    try:
        return await service.register(db, data)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.post("/login", response_model=AuthResponse, summary="Login")
@rate_limit()
async def login(
    request: Request,
    credentials: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate user and return a JWT access token.

    Raises:
        HTTPException 401: Invalid credentials
        HTTPException 429: If the client exceeded the rate limit
    """
    try:
        return await service.login(db, credentials)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get("/me", response_model=MeResponse, summary="Current User")
async def me(user: CurrentUser) -> MeResponse:
    """Return the authenticated user's profile."""
    return MeResponse(user=service.to_profile(user))


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(
    claims: CurrentToken,
    user: CurrentUser,
    store: Annotated[RevocationStore, Depends(get_revocation_store)],
) -> MessageResponse:
    """
    Revoke the bearer token used for this request.

    Later requests presenting the same token fail with 401.
    """
    await service.logout(store, claims)
    return MessageResponse(message="Logged out successfully")
