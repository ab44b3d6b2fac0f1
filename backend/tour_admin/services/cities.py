"""
Cities resource
"""
from typing import Any, Dict, Optional

from .common import empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_cities(
    factory: RestClientFactory,
    *,
    page: int = 1,
    limit: int = 10,
    country_id: Optional[str] = None,
    is_active: Optional[bool] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "cities"):
        return empty_page()
    service = factory.service("cities")
    params = page_params(page, limit, countryId=country_id, isActive=is_active)
    return await service.get(params=params, headers=localized(language))


async def get_city_by_id(factory: RestClientFactory, city_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "cities"):
        return not_configured_error()
    return await factory.service("cities").get_by_id(city_id, headers=localized(language))


async def create_city(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "cities"):
        return not_configured_error()
    return await factory.service("cities", token).create(data, headers=localized(language))


async def update_city(
    factory: RestClientFactory, city_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "cities"):
        return not_configured_error()
    return await factory.service(f"cities/{city_id}", token).update(data, headers=localized(language))


async def delete_city(factory: RestClientFactory, city_id: str, token: str) -> ServiceResult:
    if not_configured(factory, "cities"):
        return not_configured_error()
    return await factory.service(f"cities/{city_id}", token).delete()
