"""Redis connection utilities.

Provides helpers for creating Redis connections from settings and a
job lock so only one worker runs a given batch job at a time.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import LockError

from app.config.settings import settings


async def get_redis_client() -> redis.Redis:
    """
    Create and return a Redis client with settings from config.

    Returns:
        redis.Redis: Configured Redis client with decode_responses=True

    Example:
        >>> redis_client = await get_redis_client()
        >>> await redis_client.set("key", "value")
        >>> await redis_client.aclose()
    """
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password,
        db=settings.redis_db,
        decode_responses=True,
    )


def get_redis_url_masked() -> str:
    """
    Build Redis URL with masked password for safe logging.

    Returns:
        str: Redis connection URL with masked password

    Example:
        >>> url = get_redis_url_masked()
        >>> # Returns: "redis://:****@localhost:6379/0"
    """
    if settings.redis_password:
        return f"redis://:****@{settings.redis_host}:{settings.redis_port}/{settings.redis_db}"
    return f"redis://{settings.redis_host}:{settings.redis_port}/{settings.redis_db}"


@asynccontextmanager
async def job_lock(
    client: redis.Redis, name: str, timeout: int = 300
) -> AsyncIterator[bool]:
    """
    Hold a non-blocking Redis lock for the duration of a job.

    Yields True if this worker owns the lock, False if another worker
    is already running the job.

    Args:
        client: Redis client
        name: Lock name
        timeout: Lock expiry in seconds

    Example:
        >>> async with job_lock(client, "withdrawal_processing") as acquired:
        ...     if acquired:
        ...         await process()
    """
    lock = client.lock(f"lock:{name}", timeout=timeout, blocking=False)
    acquired = await lock.acquire()
    if not acquired:
        logger.info(f"Job lock {name} is held by another worker, skipping")

    try:
        yield acquired
    finally:
        if acquired:
            try:
                await lock.release()
            except LockError:
                # Expired before release; another worker may own it now
                logger.warning(f"Job lock {name} expired before release")
