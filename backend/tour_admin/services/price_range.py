"""
Tour price range for the listing filters
"""
from typing import Mapping, Optional

from .common import localized, not_configured, not_configured_error
from .rest import RestClientFactory, ServiceResult

PRICE_RANGE_FILTERS = ("country", "city", "category", "userId")


def clean_filters(filters: Optional[Mapping[str, Optional[str]]]) -> dict:
    """Keep only known, non-blank filters."""
    params = {}
    for key in PRICE_RANGE_FILTERS:
        value = (filters or {}).get(key)
        if value is not None and str(value).strip():
            params[key] = str(value).strip()
    return params


async def get_price_range(
    factory: RestClientFactory,
    filters: Optional[Mapping[str, Optional[str]]] = None,
    language: str = "es",
    currency: str = "MXN",
) -> ServiceResult:
    if not_configured(factory, "tours/price-range"):
        return not_configured_error()
    service = factory.service("tours/price-range")
    return await service.get(params=clean_filters(filters), headers=localized(language, currency))
