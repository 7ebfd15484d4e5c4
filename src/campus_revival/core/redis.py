"""
Redis Configuration

Optional async Redis client used for token revocation and rate limiting.
When REDIS_URL is empty the application runs with in-memory fallbacks.
"""

from redis.asyncio import Redis, from_url

from campus_revival.core.config import settings

# Redis client instance
redis_client: Redis | None = None


async def init_redis() -> Redis | None:
    """
    Initialize the Redis connection if REDIS_URL is configured.

    Call this on application startup.
    """
    global redis_client
    if not settings.redis_url:
        return None
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    # Test connection
    await client.ping()
    redis_client = client
    return redis_client


async def get_redis() -> Redis | None:
    """
    Get the Redis client instance.

    Returns None if Redis is not configured or unavailable.
    """
    return redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
