"""
Sliding-window rate limiter for the login and OTP endpoints
Uses Redis when configured and falls back to process memory when Redis fails
"""
import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Optional

import redis

logger = logging.getLogger(__name__)


class InMemoryRateLimiter:
    """In-memory sliding window, used alone or as the Redis fallback"""

    def __init__(self, clock: Callable[[], float] = time.time):
        # key -> deque of timestamps
        self.data: Dict[str, Deque[float]] = defaultdict(deque)
        self.clock = clock

    def check_rate_limit(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int, int]:
        """
        Check if rate limit is exceeded using sliding window

        Returns:
            (is_allowed, current_count, remaining)
        """
        now = self.clock()
        cutoff_time = now - window_seconds
        timestamps = self.data[key]

        while timestamps and timestamps[0] <= cutoff_time:
            timestamps.popleft()

        current_count = len(timestamps)
        if current_count >= limit:
            return False, current_count, 0

        timestamps.append(now)
        return True, current_count + 1, limit - (current_count + 1)

    def retry_after(self, key: str, window_seconds: int) -> int:
        """Seconds until the oldest request in the window expires"""
        timestamps = self.data.get(key)
        if not timestamps:
            return 0
        return max(1, int(timestamps[0] + window_seconds - self.clock()) + 1)

    def reset(self, key: str) -> None:
        self.data.pop(key, None)

    def cleanup(self, max_age_seconds: int = 3600) -> None:
        """Drop keys with no timestamps inside `max_age_seconds`"""
        cutoff = self.clock() - max_age_seconds
        for key in list(self.data):
            timestamps = self.data[key]
            while timestamps and timestamps[0] < cutoff:
                timestamps.popleft()
            if not timestamps:
                del self.data[key]


class RateLimiter:
    """
    Rate limiter with Redis backend and in-memory fallback
    Implements sliding window algorithm over a Redis sorted set
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.redis_client = redis_client
        self.memory_limiter = InMemoryRateLimiter(clock)
        self.clock = clock
        self.use_redis = redis_client is not None

    @classmethod
    def from_url(cls, redis_url: Optional[str]) -> "RateLimiter":
        if not redis_url:
            return cls()
        try:
            client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            client.ping()
            logger.info("Rate limiter connected to Redis")
            return cls(client)
        except redis.RedisError as e:
            logger.warning(f"Rate limiter Redis connection failed, using in-memory fallback: {e}")
            return cls()

    def _check_redis_rate_limit(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int, int]:
        try:
            now = self.clock()
            window_start = now - window_seconds

            pipe = self.redis_client.pipeline()
            pipe.zremrangebyscore(key, 0, window_start)
            pipe.zcard(key)
            pipe.zadd(key, {f"{now}:{id(key)}": now})
            pipe.expire(key, window_seconds + 10)
            results = pipe.execute()
            current_count = results[1]  # count before adding

            if current_count >= limit:
                self.redis_client.zremrangebyscore(key, now, now)
                return False, current_count, 0

            return True, current_count + 1, limit - (current_count + 1)

        except redis.RedisError as e:
            logger.warning(f"Rate limiter Redis error, falling back to memory: {e}")
            self.use_redis = False
            return self.memory_limiter.check_rate_limit(key, limit, window_seconds)

    def check_rate_limit(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int, int]:
        """
        Check rate limit for a key (e.g. "login:ip:203.0.113.7")

        Returns:
            (is_allowed, current_count, remaining)
        """
        if self.use_redis and self.redis_client is not None:
            return self._check_redis_rate_limit(key, limit, window_seconds)
        return self.memory_limiter.check_rate_limit(key, limit, window_seconds)

    def reset(self, key: str) -> None:
        if self.use_redis and self.redis_client is not None:
            try:
                self.redis_client.delete(key)
            except redis.RedisError as e:
                logger.warning(f"Rate limiter reset failed for {key}: {e}")
        self.memory_limiter.reset(key)

    def retry_after(self, key: str, window_seconds: int) -> int:
        """Seconds until a blocked key may try again"""
        if self.use_redis and self.redis_client is not None:
            try:
                oldest = self.redis_client.zrange(key, 0, 0, withscores=True)
            except redis.RedisError as e:
                logger.warning(f"Rate limiter retry lookup failed for {key}: {e}")
                return window_seconds
            if not oldest:
                return 0
            return max(1, int(oldest[0][1] + window_seconds - self.clock()) + 1)
        return self.memory_limiter.retry_after(key, window_seconds)
