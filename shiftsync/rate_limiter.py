"""
Hybrid in-memory + Redis rate limiting utilities
Counters live in memory and are synced to Redis periodically so several
workers share roughly the same view. Without Redis the limits are per-process.
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request, status

from .config import ENVIRONMENT, RATE_LIMIT_ENABLED

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None
_redis_unavailable_until = 0.0

# In-memory cache for rate limiting
# Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
memory_cache: dict[str, dict] = {}
cache_lock = Lock()

# Configuration
MEMORY_CACHE_SYNC_INTERVAL = 10  # Sync to Redis every 10 seconds
MEMORY_CACHE_CLEANUP_INTERVAL = 60  # Clean up expired entries every 60 seconds
REDIS_RETRY_INTERVAL = 60  # Don't retry a failed Redis connection more often than this
last_cleanup_time = 0

LOOPBACK_ADDRESSES = {"127.0.0.1", "::1", "localhost", "testclient"}


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Uses REDIS_URL when set, otherwise the individual REDIS_* settings
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection for rate limiting...")
        redis_url = os.getenv("REDIS_URL")

        try:
            if redis_url:
                client = redis.from_url(
                    redis_url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    retry_on_timeout=True,
                    health_check_interval=30,
                )
            else:
                redis_host = os.getenv("REDIS_HOST", "localhost")
                redis_port = int(os.getenv("REDIS_PORT", "6379"))
                client = redis.Redis(
                    host=redis_host,
                    port=redis_port,
                    password=os.getenv("REDIS_PASSWORD", None),
                    db=int(os.getenv("REDIS_DB", "0")),
                    ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    retry_on_timeout=True,
                    health_check_interval=30,
                )
            client.ping()
            redis_client = client
            logger.info("Redis connected successfully")
        except Exception as e:
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            raise

    return redis_client


def get_optional_redis_client() -> Optional[redis.Redis]:
    """Redis client, or None (limits fall back to this process) when Redis is down"""
    global _redis_unavailable_until

    if redis_client is None and time.time() < _redis_unavailable_until:
        return None
    try:
        return get_redis_client()
    except Exception:
        _redis_unavailable_until = time.time() + REDIS_RETRY_INTERVAL
        logger.warning("⚠️ Redis unavailable - rate limits are tracked in memory only")
        return None


def cleanup_expired_cache():
    """Remove expired entries from memory cache"""
    global last_cleanup_time
    current_time = int(time.time())

    if current_time - last_cleanup_time < MEMORY_CACHE_CLEANUP_INTERVAL:
        return

    with cache_lock:
        expired_keys = [
            k for k, v in memory_cache.items() if current_time >= v.get("reset_time", 0)
        ]
        for k in expired_keys:
            del memory_cache[k]

        if expired_keys:
            logger.debug(f"🧹 Cleaned up {len(expired_keys)} expired rate limit entries")

    last_cleanup_time = current_time


def _new_entry(current_time: int, window_seconds: int, client: Optional[redis.Redis], key: str):
    if client is not None:
        try:
            redis_count = client.get(key)
            redis_ttl = client.ttl(key)
            if redis_count and redis_ttl > 0:
                return {
                    "count": int(redis_count),
                    "reset_time": current_time + redis_ttl,
                    "last_redis_sync": current_time,
                }
        except Exception as e:
            logger.warning(f"⚠️ Failed to load from Redis, using memory only: {e}")

    return {
        "count": 0,
        "reset_time": current_time + window_seconds,
        "last_redis_sync": current_time,
    }


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis]
) -> tuple[bool, int, int]:
    """Check if rate limit is exceeded using hybrid in-memory + Redis approach

    Args:
        key: Redis key for this rate limit
        limit: Maximum number of requests allowed
        window_seconds: Time window in seconds
        client: Redis client instance, or None for memory-only limiting

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    try:
        current_time = int(time.time())
        cleanup_expired_cache()

        with cache_lock:
            if key not in memory_cache:
                memory_cache[key] = _new_entry(current_time, window_seconds, client, key)

            cache_entry = memory_cache[key]

            # Window expired
            if current_time >= cache_entry["reset_time"]:
                cache_entry["count"] = 0
                cache_entry["reset_time"] = current_time + window_seconds
                cache_entry["last_redis_sync"] = 0

            is_allowed = cache_entry["count"] < limit
            if is_allowed:
                cache_entry["count"] += 1

            time_since_sync = current_time - cache_entry.get("last_redis_sync", 0)
            if client is not None and time_since_sync >= MEMORY_CACHE_SYNC_INTERVAL:
                try:
                    client.set(key, cache_entry["count"], ex=window_seconds)
                    cache_entry["last_redis_sync"] = current_time
                    logger.debug(f"📡 Synced {key} to Redis: {cache_entry['count']}/{limit}")
                except Exception as e:
                    logger.warning(f"⚠️ Failed to sync to Redis: {e}")

            ttl = cache_entry["reset_time"] - current_time
            return is_allowed, cache_entry["count"], max(0, ttl)

    except Exception as e:
        logger.error(f"❌ Rate limit check failed: {str(e)}")
        # Fail closed - deny request if rate limiting fails
        return False, limit, 0


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit_dependency(
    request: Request,
    limit: int,
    window_seconds: int,
    key_prefix: str = "rate_limit",
    message: str = "Too many requests, please try again later.",
    skip_loopback_in_development: bool = False,
):
    """
    FastAPI dependency for per-IP rate limiting

    Args:
        request: FastAPI request object
        limit: Maximum requests allowed
        window_seconds: Time window in seconds
        key_prefix: Prefix for Redis key
        message: Message returned with the 429 response
        skip_loopback_in_development: Don't limit local requests in development
    """
    if not RATE_LIMIT_ENABLED:
        return

    client_ip = get_client_ip(request)
    if (
        skip_loopback_in_development
        and ENVIRONMENT == "development"
        and client_ip in LOOPBACK_ADDRESSES
    ):
        return

    key = f"{key_prefix}:{client_ip}"
    is_allowed, current_count, ttl = check_rate_limit(
        key, limit, window_seconds, get_optional_redis_client()
    )

    if not is_allowed:
        logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=message,
            headers={"Retry-After": str(ttl)},
        )

    request.state.rate_limit_remaining = limit - current_count
    request.state.rate_limit_limit = limit
    request.state.rate_limit_reset = int(time.time()) + ttl


def create_rate_limiter(
    limit: int,
    window_seconds: int,
    key_prefix: str = "rate_limit",
    message: str = "Too many requests, please try again later.",
    skip_loopback_in_development: bool = False,
):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        @router.post("/workplaces", dependencies=[Depends(create_limiter)])
        async def create_workplace(...):
            ...
    """

    async def rate_limiter(request: Request):
        return await rate_limit_dependency(
            request, limit, window_seconds, key_prefix, message, skip_loopback_in_development
        )

    return rate_limiter


# 100 requests per 15 minutes for the API as a whole
api_limiter = create_rate_limiter(
    limit=100,
    window_seconds=15 * 60,
    key_prefix="api",
    message="Too many requests from this IP, please try again later.",
    skip_loopback_in_development=True,
)

# 5 login/register attempts per 15 minutes
auth_limiter = create_rate_limiter(
    limit=5,
    window_seconds=15 * 60,
    key_prefix="auth",
    message="Too many authentication attempts, please try again after 15 minutes.",
)

# 10 creates per minute
create_limiter = create_rate_limiter(
    limit=10,
    window_seconds=60,
    key_prefix="create",
    message="Too many items created, please slow down.",
)
