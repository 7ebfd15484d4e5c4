"""
Unit tests for the revoked token stores and the token validator.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from campus_revival.core.auth import get_token_claims, validate_token
from campus_revival.core.errors import RevokedTokenError
from campus_revival.core.revocation import (
    InMemoryRevocationStore,
    RedisRevocationStore,
    build_revocation_store,
)
from campus_revival.core.security import create_access_token, decode_token


class TestInMemoryRevocationStore:
    """Tests for the process-local store."""

    @pytest.mark.asyncio
    async def test_unknown_token_is_not_revoked(self):
        store = InMemoryRevocationStore()
        assert await store.is_revoked("abc") is False

    @pytest.mark.asyncio
    async def test_revoked_token(self):
        store = InMemoryRevocationStore()
        await store.revoke("abc", datetime.now(UTC) + timedelta(hours=1))
        assert await store.is_revoked("abc") is True

    @pytest.mark.asyncio
    async def test_revoke_is_idempotent(self):
        store = InMemoryRevocationStore()
        expires_at = datetime.now(UTC) + timedelta(hours=1)
        await store.revoke("abc", expires_at)
        await store.revoke("abc", expires_at)
        assert len(store) == 1
        assert await store.is_revoked("abc") is True

    @pytest.mark.asyncio
    async def test_entries_expire_with_token(self):
        store = InMemoryRevocationStore()
        await store.revoke("old", datetime.now(UTC) - timedelta(seconds=1))
        assert await store.is_revoked("old") is False
        assert len(store) == 0


class TestRedisRevocationStore:
    """Tests for the Redis-backed store."""

    @pytest.mark.asyncio
    async def test_revoke_sets_key_with_ttl(self):
        client = AsyncMock()
        store = RedisRevocationStore(client)

        await store.revoke("abc", datetime.now(UTC) + timedelta(seconds=120))

        client.set.assert_awaited_once()
        args, kwargs = client.set.call_args
        assert args[0] == "revoked_token:abc"
        assert 0 < kwargs["ex"] <= 120

    @pytest.mark.asyncio
    async def test_revoke_expired_token_is_noop(self):
        client = AsyncMock()
        store = RedisRevocationStore(client)

        await store.revoke("abc", datetime.now(UTC) - timedelta(seconds=5))

        client.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_is_revoked_checks_key(self):
        client = AsyncMock()
        client.exists = AsyncMock(return_value=1)
        store = RedisRevocationStore(client)

        assert await store.is_revoked("abc") is True
        client.exists.assert_awaited_once_with("revoked_token:abc")

    def test_build_prefers_redis(self):
        assert isinstance(build_revocation_store(AsyncMock()), RedisRevocationStore)

    def test_build_falls_back_to_memory(self):
        assert isinstance(build_revocation_store(None), InMemoryRevocationStore)


class TestValidateToken:
    """Tests for token validation against the revoked set."""

    @pytest.mark.asyncio
    async def test_valid_token(self):
        store = InMemoryRevocationStore()
        token = create_access_token(subject="user-1")

        claims = await validate_token(token, store)

        assert claims.user_id == "user-1"
        assert claims.jti == decode_token(token)["jti"]

    @pytest.mark.asyncio
    async def test_revoked_token_rejected(self):
        store = InMemoryRevocationStore()
        token = create_access_token(subject="user-1")
        claims = await validate_token(token, store)
        await store.revoke(claims.jti, claims.expires_at)

        with pytest.raises(RevokedTokenError):
            await validate_token(token, store)

    @pytest.mark.asyncio
    async def test_revoking_one_token_keeps_others_valid(self):
        store = InMemoryRevocationStore()
        first = create_access_token(subject="user-1")
        second = create_access_token(subject="user-1")
        claims = await validate_token(first, store)
        await store.revoke(claims.jti, claims.expires_at)

        assert (await validate_token(second, store)).user_id == "user-1"

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_token_claims(None, InMemoryRevocationStore())
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "Not authorized, no token"

    @pytest.mark.asyncio
    async def test_invalid_credentials_become_401(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="garbage")
        with pytest.raises(HTTPException) as exc_info:
            await get_token_claims(credentials, InMemoryRevocationStore())
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["code"] == "INVALID_TOKEN"
