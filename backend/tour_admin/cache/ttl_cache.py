"""
Time-bounded read-through cache for backend reads (cities, price range)

Entries stay readable after they expire so that a rate-limited refresh
(HTTP 429) can fall back to the last good value.
"""
import json
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol

from redis import Redis, RedisError

from tour_admin.core.exceptions import error_status, is_error

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

KEY_SEPARATOR = "|"


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    timestamp: float

    def age(self, now: float) -> float:
        return now - self.timestamp

    def is_fresh(self, now: float, ttl: float) -> bool:
        return self.age(now) < ttl


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[CacheEntry]: ...

    def set(self, key: str, data: Any) -> None: ...


class InMemoryTTLCache:
    """
    Process-local cache bounded by entry count

    Least recently used keys are evicted past `max_entries`; entries
    older than `stale_seconds` are swept on every write.
    """

    def __init__(self, max_entries: int = 512, stale_seconds: float = 3600, clock: Clock = time.time):
        self.max_entries = max_entries
        self.stale_seconds = stale_seconds
        self.clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, timestamp=self.clock())
        self._entries.move_to_end(key)
        self.sweep()
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache full, evicted {evicted}")

    def sweep(self) -> int:
        cutoff = self.clock() - self.stale_seconds
        expired = [key for key, entry in self._entries.items() if entry.timestamp < cutoff]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()


class RedisTTLCache:
    """
    Redis-backed cache shared between server instances

    Redis expiry is the stale horizon; freshness is decided by the
    stored timestamp. Redis failures behave like cache misses.
    """

    def __init__(self, redis_client: Redis, stale_seconds: int = 3600, clock: Clock = time.time):
        self.redis_client = redis_client
        self.stale_seconds = stale_seconds
        self.clock = clock
        self.key_prefix = "ttl_cache:"

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[CacheEntry]:
        try:
            raw = self.redis_client.get(self._make_key(key))
            if not raw:
                return None
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            payload = json.loads(raw)
            return CacheEntry(data=payload["data"], timestamp=float(payload["timestamp"]))
        except (RedisError, ValueError, KeyError) as e:
            logger.warning(f"Cache retrieval failed for {key}: {e}")
            return None

    def set(self, key: str, data: Any) -> None:
        try:
            self.redis_client.setex(
                self._make_key(key),
                int(self.stale_seconds),
                json.dumps({"data": data, "timestamp": self.clock()}),
            )
        except (RedisError, TypeError) as e:
            logger.warning(f"Cache storage failed for {key}: {e}")


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace(KEY_SEPARATOR, "\\" + KEY_SEPARATOR)


def build_cache_key(prefix: str, params: Mapping[str, Any], fields: tuple[str, ...]) -> str:
    """
    Deterministic key: prefix and the normalized value of each field, in order

    Separators inside values are backslash-escaped so distinct queries never share a key.
    """
    values = [prefix]
    for field in fields:
        value = params.get(field)
        if value is None:
            values.append("")
        elif isinstance(value, bool):
            values.append(str(value).lower())
        else:
            values.append(_escape(str(value).strip()))
    return KEY_SEPARATOR.join(values)


class CachedReader:
    """
    Read-through wrapper around one backend read

    `fetch(params)` must follow the REST client contract (data or `{error}`).
    """

    def __init__(
        self,
        name: str,
        backend: CacheBackend,
        fetch: Callable[[Dict[str, Any]], Awaitable[Any]],
        key_fields: tuple[str, ...],
        ttl: float = 300,
        clock: Clock = time.time,
        empty: Optional[Callable[[], Dict[str, Any]]] = None,
    ):
        self.name = name
        self.backend = backend
        self.fetch = fetch
        self.key_fields = key_fields
        self.ttl = ttl
        self.clock = clock
        self.empty = empty or (lambda: {"success": False, "data": None})

    def key_for(self, params: Mapping[str, Any]) -> str:
        return build_cache_key(self.name, params, self.key_fields)

    async def get(self, params: Dict[str, Any]) -> Any:
        key = self.key_for(params)
        cached = self.backend.get(key)
        if cached is not None and cached.is_fresh(self.clock(), self.ttl):
            return cached.data

        result = await self.fetch(params)
        if not is_error(result):
            self.backend.set(key, result)
            return result

        if error_status(result) == 429 and cached is not None:
            logger.warning(
                f"Rate limited refreshing {self.name}, serving stale entry",
                extra={"cache_key": key, "age": cached.age(self.clock())},
            )
            return cached.data

        logger.warning(f"{self.name} fetch failed: {result['error']}", extra={"cache_key": key})
        return {**self.empty(), "error": result["error"]}
