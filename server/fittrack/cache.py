# fittrack/cache.py
import hashlib
import json
import logging
from functools import wraps

import redis

from fittrack.config import Config

logger = logging.getLogger(__name__)

_redis_client = None
_redis_checked = False


def get_redis_client():
    """Connect once on first use; None when REDIS_URL is unset or unreachable."""
    global _redis_client, _redis_checked
    if _redis_checked:
        return _redis_client
    _redis_checked = True
    if not Config.REDIS_URL:
        logger.info("REDIS_URL not set. Caching disabled.")
        return None
    try:
        client = redis.Redis.from_url(Config.REDIS_URL, decode_responses=True)
        client.ping()
        _redis_client = client
    except redis.RedisError as e:
        logger.warning(f"Redis unavailable at {Config.REDIS_URL}: {e}. Caching disabled.")
        _redis_client = None
    return _redis_client


def cache_key_generator(*args, **kwargs):
    """Generate a cache key from function arguments"""
    key_data = {
        "args": args,
        "kwargs": {k: v for k, v in kwargs.items() if k != "client"},
    }
    key_string = json.dumps(key_data, sort_keys=True, default=str)
    return hashlib.md5(key_string.encode()).hexdigest()


def cache_result(prefix: str, expiry_seconds: int = 300):
    """Decorator to cache JSON-serialisable results of an async function"""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache_key = f"{prefix}:{func.__name__}:{cache_key_generator(*args, **kwargs)}"
            client = get_redis_client()

            if client:
                try:
                    cached_result = client.get(cache_key)
                    if cached_result:
                        logger.debug(f"Cache hit for key: {cache_key[:40]}...")
                        return json.loads(cached_result)
                except redis.RedisError as e:
                    logger.warning(f"Error reading from cache: {e}")

            result = await func(*args, **kwargs)

            if client:
                try:
                    client.setex(cache_key, expiry_seconds, json.dumps(result))
                except (redis.RedisError, TypeError) as e:
                    logger.warning(f"Error storing in cache: {e}")

            return result
        return wrapper
    return decorator
