"""
Country reference data (served by the backend under `cities/countries`)
"""
from .common import localized, not_configured, not_configured_error
from .rest import RestClientFactory, ServiceResult


async def get_countries(factory: RestClientFactory, language: str = "es") -> ServiceResult:
    if not_configured(factory, "countries"):
        return {"success": False, "data": []}
    service = factory.service("cities/countries")
    return await service.get(headers=localized(language))


async def get_country_by_id(factory: RestClientFactory, country_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "countries"):
        return not_configured_error()
    service = factory.service("cities/countries")
    return await service.get_by_id(country_id, headers=localized(language))
