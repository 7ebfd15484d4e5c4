"""
Revoked Token Store

Holds the ``jti`` of access tokens invalidated by logout until they would have
expired anyway. The store is created in the application lifespan and injected
through ``get_revocation_store``; two backends are available:

- ``InMemoryRevocationStore``: process-local, cleared on restart
- ``RedisRevocationStore``: shared across workers, keys expire with the token
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from fastapi import Request
from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RevocationStore(ABC):
    """Interface for revoked token storage."""

    @abstractmethod
    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark a token id as revoked until ``expires_at``. Idempotent."""

    @abstractmethod
    async def is_revoked(self, jti: str) -> bool:
        """Return True if the token id has been revoked."""


class InMemoryRevocationStore(RevocationStore):
    """Thread-safe in-memory revocation set with per-entry expiry."""

    def __init__(self) -> None:
        self._entries: dict[str, datetime] = {}
        self._lock = threading.Lock()

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._purge_expired()
            # Keep the latest expiry if the same token is revoked twice
            current = self._entries.get(jti)
            if current is None or expires_at > current:
                self._entries[jti] = expires_at

    async def is_revoked(self, jti: str) -> bool:
        with self._lock:
            expires_at = self._entries.get(jti)
            if expires_at is None:
                return False
            if expires_at <= datetime.now(UTC):
                del self._entries[jti]
                return False
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _purge_expired(self) -> None:
        now = datetime.now(UTC)
        for jti in [k for k, exp in self._entries.items() if exp <= now]:
            del self._entries[jti]


class RedisRevocationStore(RevocationStore):
    """Redis-backed revocation set; each entry is a key with a TTL."""

    KEY_PREFIX = "revoked_token:"

    def __init__(self, client: Redis) -> None:
        self._client = client

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        ttl = int((expires_at - datetime.now(UTC)).total_seconds())
        if ttl <= 0:
            # Already expired; validation rejects it regardless
            return
        await self._client.set(f"{self.KEY_PREFIX}{jti}", "1", ex=ttl)

    async def is_revoked(self, jti: str) -> bool:
        return bool(await self._client.exists(f"{self.KEY_PREFIX}{jti}"))


def build_revocation_store(redis_client: Redis | None) -> RevocationStore:
    """Pick the Redis store when a client is available, otherwise in-memory."""
    if redis_client is not None:
        logger.info("Token revocation store: redis")
        return RedisRevocationStore(redis_client)
    logger.info("Token revocation store: in-memory")
    return InMemoryRevocationStore()


def get_revocation_store(request: Request) -> RevocationStore:
    """FastAPI dependency returning the store attached to the application."""
    return request.app.state.revocation_store


__all__ = [
    "RevocationStore",
    "InMemoryRevocationStore",
    "RedisRevocationStore",
    "build_revocation_store",
    "get_revocation_store",
]
