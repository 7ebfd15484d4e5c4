"""
Unit tests for the authentication service.

These tests cover:
- Registration (new account, duplicate email, concurrent duplicate)
- Login (success, unknown email, wrong password)
- Logout revoking the presented token
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from campus_revival.core.auth import TokenClaims
from campus_revival.core.errors import InvalidCredentialsError
from campus_revival.core.revocation import InMemoryRevocationStore
from campus_revival.core.security import decode_token
from campus_revival.modules.auth.schemas import LoginRequest, RegisterRequest
from campus_revival.modules.auth.service import (
    EmailAlreadyRegisteredError,
    login,
    logout,
    register,
)
from campus_revival.modules.users.models import UserRole


class TestRegister:
    """Tests for register function."""

    @pytest.mark.asyncio
    async def test_register_success(self, mock_db, sample_user):
        """New email creates an adopter and returns a token for it."""
        with patch("campus_revival.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(return_value=sample_user)

            result = await register(
                mock_db,
                RegisterRequest(email="Ann@X.com", password="secret1", name="  Ann "),
            )

            assert result.success is True
            assert result.message == "User registered successfully"
            assert result.user.email == "ann@x.com"
            assert result.user.role == "adopter"
            assert decode_token(result.token)["sub"] == sample_user.id

            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["email"] == "ann@x.com"
            assert kwargs["name"] == "Ann"
            assert kwargs["role"] == UserRole.ADOPTER
            assert kwargs["password_hash"] != "secret1"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, mock_db):
        with patch("campus_revival.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=True)
            mock_repo.create = AsyncMock()

            with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
                await register(
                    mock_db,
                    RegisterRequest(email="ann@x.com", password="secret1", name="Ann"),
                )

            assert exc_info.value.status_code == 400
            assert exc_info.value.message == "User already exists with this email"
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_concurrent_duplicate(self, mock_db):
        """Unique index violation is reported as a duplicate email."""
        with patch("campus_revival.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(side_effect=IntegrityError("insert", {}, Exception()))

            with pytest.raises(EmailAlreadyRegisteredError):
                await register(
                    mock_db,
                    RegisterRequest(email="ann@x.com", password="secret1", name="Ann"),
                )

            mock_db.rollback.assert_awaited_once()


class TestLogin:
    """Tests for login function."""

    @pytest.mark.asyncio
    async def test_login_success(self, mock_db, sample_user):
        with patch("campus_revival.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=sample_user)

            result = await login(mock_db, LoginRequest(email="ann@x.com", password="secret1"))

            assert result.message == "Login successful"
            assert result.user.id == sample_user.id
            assert decode_token(result.token)["sub"] == sample_user.id

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, mock_db):
        with patch("campus_revival.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=None)

            with pytest.raises(InvalidCredentialsError) as exc_info:
                await login(mock_db, LoginRequest(email="nobody@x.com", password="secret1"))

            assert exc_info.value.status_code == 401
            assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, mock_db, sample_user):
        with patch("campus_revival.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=sample_user)

            with pytest.raises(InvalidCredentialsError):
                await login(mock_db, LoginRequest(email="ann@x.com", password="wrong-pass"))


class TestLogout:
    """Tests for logout function."""

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self):
        store = InMemoryRevocationStore()
        claims = TokenClaims(
            user_id="user-1",
            jti="token-1",
            expires_at=datetime.now(UTC) + timedelta(days=1),
        )

        await logout(store, claims)
        await logout(store, claims)

        assert await store.is_revoked("token-1") is True
        assert len(store) == 1
