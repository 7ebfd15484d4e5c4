"""
Rate Limiting Module

Sliding window rate limiting for API endpoints. Uses Redis sorted sets when
the shared Redis client is available and falls back to in-memory storage.

Applied to the public authentication endpoints to slow down credential
stuffing and mass account creation.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from fastapi import HTTPException, Request, status
from redis.asyncio import Redis
from redis.exceptions import RedisError

from campus_revival.core.config import settings
from campus_revival.core.redis import get_redis

logger = logging.getLogger(__name__)

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}

# Format: {key: time at which every hit under key has left its window}
_memory_expiry: dict[str, float] = {}

_SWEEP_INTERVAL_SECONDS = 60
_next_sweep: float = 0.0


class RateLimitExceeded(HTTPException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "Too many requests, please try again later",
                "code": "RATE_LIMIT_EXCEEDED",
                "message": f"Maximum {limit} requests per {window_seconds} seconds.",
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _check_rate_limit_redis(
    client: Redis,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using a Redis sorted set per key.

    Args:
        client: Redis client
        key: Rate limit key (e.g., "rate_limit:1.2.3.4:/api/login")
        limit: Maximum requests allowed
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _sweep_memory_store(now: float) -> None:
    """Drop keys that no longer hold any hit inside their window."""
    stale = [key for key, expires_at in _memory_expiry.items() if expires_at <= now]
    for key in stale:
        _memory_store.pop(key, None)
        del _memory_expiry[key]

    if stale:
        logger.debug(f"Swept {len(stale)} stale rate limit keys")


def _check_rate_limit_memory(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using in-memory storage.

    Only limits requests handled by this process. Idle keys are swept at
    most once per _SWEEP_INTERVAL_SECONDS.
    """
    global _next_sweep
    now = time.time()
    if now >= _next_sweep:
        _sweep_memory_store(now)
        _next_sweep = now + _SWEEP_INTERVAL_SECONDS

    window_start = now - window_seconds

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]
    if len(hits) >= limit:
        _memory_store[key] = hits
        _memory_expiry[key] = hits[-1] + window_seconds
        return False

    hits.append(now)
    _memory_store[key] = hits
    _memory_expiry[key] = now + window_seconds
    return True


async def check_rate_limit(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check if a request is within rate limits.

    Tries Redis first, falls back to in-memory storage.

    Args:
        key: Unique key for this rate limit
        limit: Maximum requests allowed in the window
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    client = await get_redis()

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except RedisError as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


def client_ip_key(request: Request) -> str:
    """Default rate limit key: client IP + endpoint path."""
    client_ip = request.client.host if request.client else "unknown"
    return f"rate_limit:{client_ip}:{request.url.path}"


def rate_limit(
    limit: int | None = None,
    window_seconds: int | None = None,
    key_func: Callable[[Request], str] = client_ip_key,
):
    """
    Rate limiting decorator for FastAPI endpoints.

    The decorated endpoint must accept a ``request: Request`` parameter.

    Usage:
        @router.post("/login")
        @rate_limit()
        async def login(request: Request, ...):
            ...

    Args:
        limit: Maximum requests allowed in the window
            (default: AUTH_RATE_LIMIT_REQUESTS)
        window_seconds: Time window in seconds
            (default: AUTH_RATE_LIMIT_WINDOW_SECONDS)
        key_func: Function generating the rate limit key from the request

    Raises:
        RateLimitExceeded: When rate limit is exceeded (HTTP 429)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request: Request | None = kwargs.get("request")
            if request is None:
                request = next((arg for arg in args if isinstance(arg, Request)), None)

            if request is None:
                logger.warning(
                    f"Rate limit decorator on {func.__name__} couldn't find Request object"
                )
                return await func(*args, **kwargs)

            max_requests = limit if limit is not None else settings.auth_rate_limit_requests
            window = (
                window_seconds
                if window_seconds is not None
                else settings.auth_rate_limit_window_seconds
            )
            key = key_func(request)

            if not await check_rate_limit(key, max_requests, window):
                logger.warning(f"Rate limit exceeded for {key}: {max_requests}/{window}s")
                raise RateLimitExceeded(max_requests, window)

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def reset_memory_store() -> None:
    """Forget all in-memory rate limit state."""
    global _next_sweep
    _memory_store.clear()
    _memory_expiry.clear()
    _next_sweep = 0.0


__all__ = [
    "rate_limit",
    "check_rate_limit",
    "client_ip_key",
    "reset_memory_store",
    "RateLimitExceeded",
]
