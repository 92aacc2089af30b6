from functools import lru_cache

import redis

from app.core.config import REGISTRATION_LOCK_ENABLED, get_redis_url


@lru_cache
def _redis_client() -> redis.Redis:
    return redis.from_url(get_redis_url(), decode_responses=True)


def get_redis() -> redis.Redis | None:
    """Redis client used for per-event registration locks, or None when locking is disabled."""
    if not REGISTRATION_LOCK_ENABLED:
        return None
    return _redis_client()
