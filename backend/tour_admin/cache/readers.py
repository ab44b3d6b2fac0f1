"""
Cached readers for the two hot reference reads: cities and price range
"""
import logging
import time
from typing import Any, Dict, Optional

import redis

from tour_admin.core.config import Settings
from tour_admin.services import cities as cities_service
from tour_admin.services import price_range as price_range_service
from tour_admin.services.common import empty_page
from tour_admin.services.rest import RestClientFactory

from .ttl_cache import CacheBackend, CachedReader, Clock, InMemoryTTLCache, RedisTTLCache

logger = logging.getLogger(__name__)

CITIES_KEY_FIELDS = ("page", "limit", "countryId", "isActive", "language")
PRICE_RANGE_KEY_FIELDS = ("country", "city", "category", "userId", "language", "currency")


def build_cache_backend(settings: Settings, clock: Clock = time.time) -> CacheBackend:
    """Redis when REDIS_URL is reachable, otherwise a bounded in-process cache."""
    if settings.REDIS_URL:
        try:
            client = redis.from_url(
                settings.REDIS_URL,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            client.ping()
            return RedisTTLCache(client, stale_seconds=settings.CACHE_STALE_SECONDS, clock=clock)
        except redis.RedisError as e:
            logger.warning(f"Redis unavailable for cache, using memory: {e}")
    return InMemoryTTLCache(
        max_entries=settings.CACHE_MAX_ENTRIES,
        stale_seconds=settings.CACHE_STALE_SECONDS,
        clock=clock,
    )


class ReferenceReaders:
    """Holds the cached readers bound to one REST factory."""

    def __init__(
        self,
        factory: RestClientFactory,
        backend: CacheBackend,
        ttl: float = 300,
        clock: Clock = time.time,
    ):
        self.factory = factory

        async def fetch_cities(params: Dict[str, Any]) -> Any:
            return await cities_service.get_cities(
                factory,
                page=params.get("page") or 1,
                limit=params.get("limit") or 10,
                country_id=params.get("countryId"),
                is_active=params.get("isActive"),
                language=params.get("language") or factory.default_language,
            )

        async def fetch_price_range(params: Dict[str, Any]) -> Any:
            return await price_range_service.get_price_range(
                factory,
                filters=params,
                language=params.get("language") or factory.default_language,
                currency=params.get("currency") or factory.default_currency,
            )

        self.cities = CachedReader(
            "cities", backend, fetch_cities, CITIES_KEY_FIELDS, ttl=ttl, clock=clock, empty=empty_page
        )
        self.price_range = CachedReader(
            "price-range",
            backend,
            fetch_price_range,
            PRICE_RANGE_KEY_FIELDS,
            ttl=ttl,
            clock=clock,
            empty=lambda: {"success": False, "data": None},
        )

    async def get_cities(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        country_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        language: str = "es",
    ) -> Any:
        return await self.cities.get(
            {"page": page, "limit": limit, "countryId": country_id, "isActive": is_active, "language": language}
        )

    async def get_price_range(
        self,
        filters: Optional[Dict[str, Optional[str]]] = None,
        language: str = "es",
        currency: str = "MXN",
    ) -> Any:
        params: Dict[str, Any] = dict(price_range_service.clean_filters(filters))
        params.update({"language": language, "currency": currency})
        return await self.price_range.get(params)
