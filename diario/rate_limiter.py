"""
Hybrid in-memory + Redis rate limiting utilities
Counters live in process memory and are synced to Redis periodically
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import Depends, HTTPException, Request

from .auth import get_current_user
from .models import User

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None

# Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
memory_cache: dict[str, dict] = {}
cache_lock = Lock()

MEMORY_CACHE_SYNC_INTERVAL = 10  # seconds between Redis syncs
MEMORY_CACHE_CLEANUP_INTERVAL = 60
REDIS_RETRY_INTERVAL = 30  # seconds to wait after a failed connection
last_cleanup_time = 0
last_redis_failure = 0.0


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client.
    Uses REDIS_URL when set, otherwise the individual REDIS_* settings.
    After a failed connection, further attempts are skipped for REDIS_RETRY_INTERVAL.
    """
    global redis_client, last_redis_failure

    if redis_client is None:
        if time.time() - last_redis_failure < REDIS_RETRY_INTERVAL:
            raise redis.ConnectionError("Redis unavailable, waiting before reconnecting")

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
                    max_connections=20,
                )
            else:
                client = redis.Redis(
                    host=os.getenv("REDIS_HOST", "localhost"),
                    port=int(os.getenv("REDIS_PORT", "6379")),
                    password=os.getenv("REDIS_PASSWORD", None),
                    db=int(os.getenv("REDIS_DB", "0")),
                    ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    retry_on_timeout=True,
                    health_check_interval=30,
                    max_connections=20,
                )
            client.ping()
            redis_client = client
            logger.info("Redis connected successfully")
        except Exception as e:
            last_redis_failure = time.time()
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            logger.warning("⚠️ Rate limiting will use process memory only")
            raise

    return redis_client


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


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis]
) -> tuple[bool, int, int]:
    """Check if rate limit is exceeded using the in-memory window, synced to Redis

    Args:
        key: Redis key for this rate limit
        limit: Maximum number of requests allowed
        window_seconds: Time window in seconds
        client: Redis client instance, or None for memory-only counting

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    current_time = int(time.time())

    cleanup_expired_cache()

    with cache_lock:
        if key not in memory_cache:
            entry = {
                "count": 0,
                "reset_time": current_time + window_seconds,
                "last_redis_sync": current_time,
            }
            if client is not None:
                try:
                    redis_count = client.get(key)
                    redis_ttl = client.ttl(key)
                    if redis_count and redis_ttl > 0:
                        entry["count"] = int(redis_count)
                        entry["reset_time"] = current_time + redis_ttl
                except redis.RedisError as e:
                    logger.warning(f"⚠️ Failed to load from Redis, using memory only: {e}")
            memory_cache[key] = entry

        cache_entry = memory_cache[key]

        if current_time >= cache_entry["reset_time"]:
            cache_entry["count"] = 0
            cache_entry["reset_time"] = current_time + window_seconds
            cache_entry["last_redis_sync"] = 0

        current_count = cache_entry["count"]
        is_allowed = current_count < limit

        if is_allowed:
            cache_entry["count"] += 1

        time_since_sync = current_time - cache_entry.get("last_redis_sync", 0)
        if client is not None and time_since_sync >= MEMORY_CACHE_SYNC_INTERVAL:
            try:
                client.set(key, cache_entry["count"], ex=window_seconds)
                cache_entry["last_redis_sync"] = current_time
                logger.debug(f"📡 Synced {key} to Redis: {cache_entry['count']}/{limit}")
            except redis.RedisError as e:
                logger.warning(f"⚠️ Failed to sync to Redis: {e}")

        ttl = cache_entry["reset_time"] - current_time
        return is_allowed, cache_entry["count"], max(0, ttl)


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a per-user rate limiter dependency

    Example usage:
        assistant_rate_limit = create_rate_limiter(limit=30, window_seconds=3600, key_prefix="assistant")

        @router.post("/assistant/reports")
        async def generate_report(_: None = Depends(assistant_rate_limit)):
            ...
    """

    def rate_limiter(request: Request, user: User = Depends(get_current_user)) -> None:
        try:
            client = get_redis_client()
        except Exception:
            client = None

        key = f"{key_prefix}:{user.id}"
        is_allowed, current_count, ttl = check_rate_limit(key, limit, window_seconds, client)

        if not is_allowed:
            logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
            raise HTTPException(
                status_code=429,
                detail={
                    "message": f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
                    "retry_after": ttl,
                    "limit": limit,
                    "window_seconds": window_seconds,
                },
                headers={"Retry-After": str(ttl)},
            )

        request.state.rate_limit_remaining = limit - current_count
        request.state.rate_limit_limit = limit

    return rate_limiter
