"""
Dramatiq broker configuration.

Redis-based message broker for task queue. Importing this module also
configures worker logging, so it must come first on the worker command
line.
"""

import dramatiq
from dramatiq.brokers.redis import RedisBroker
from dramatiq.middleware import (
    CurrentMessage,
    Retries,
    ShutdownNotifications,
    default_middleware,
)
from loguru import logger

from app.config.logging import setup_logging
from app.config.settings import settings
from app.utils.exceptions import is_retryable
from app.utils.redis_utils import get_redis_url_masked


setup_logging("worker")


def _should_retry(retries_so_far: int, exception: BaseException) -> bool:
    """Retry transient database failures only."""
    return retries_so_far < 3 and is_retryable(exception)


# Defaults minus the middleware configured below, so none runs twice
_base_middleware = [
    middleware()
    for middleware in default_middleware
    if middleware not in (Retries, ShutdownNotifications)
]

redis_broker = RedisBroker(
    host=settings.redis_host,
    port=settings.redis_port,
    password=settings.redis_password if settings.redis_password else None,
    db=settings.redis_db,
    middleware=_base_middleware,
)

# ShutdownNotifications: Allows workers to gracefully shutdown
# CurrentMessage: Provides access to current message in actors
# Retries: Exponential backoff for transient failures
redis_broker.add_middleware(ShutdownNotifications())
redis_broker.add_middleware(CurrentMessage())
redis_broker.add_middleware(
    Retries(
        max_retries=3,
        min_backoff=1000,  # 1 second
        max_backoff=60000,  # 1 minute
        retry_when=_should_retry,
    )
)

dramatiq.set_broker(redis_broker)

broker = redis_broker

logger.info(f"Dramatiq broker initialized: {get_redis_url_masked()}")
