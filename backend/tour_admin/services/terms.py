"""
Terms and conditions resource (platform terms and per-tour terms)
"""
from typing import Any, Dict, Optional

from .common import empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_terms_by_type(factory: RestClientFactory, terms_type: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "terms-conditions"):
        return not_configured_error()
    return await factory.service(f"terms-conditions/type/{terms_type}").get(headers=localized(language))


async def get_all_terms(
    factory: RestClientFactory,
    *,
    token: str,
    page: int = 1,
    limit: int = 10,
    tour_id: Optional[str] = None,
    version: Optional[str] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "terms-conditions"):
        return empty_page()
    params = page_params(page, limit, tourId=tour_id, version=version)
    return await factory.service("terms-conditions", token).get(params=params, headers=localized(language))


async def get_terms_by_id(factory: RestClientFactory, terms_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "terms-conditions"):
        return not_configured_error()
    return await factory.service("terms-conditions", token).get_by_id(terms_id, headers=localized(language))


async def get_terms_by_tour(factory: RestClientFactory, tour_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "terms-conditions"):
        return not_configured_error()
    return await factory.service(f"terms-conditions/tour/{tour_id}").get(headers=localized(language))


async def create_terms(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "terms-conditions"):
        return not_configured_error()
    return await factory.service("terms-conditions", token).create(data, headers=localized(language))


async def update_terms(
    factory: RestClientFactory, terms_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "terms-conditions"):
        return not_configured_error()
    service = factory.service("terms-conditions", token)
    return await service.update(data, url=f"terms-conditions/{terms_id}", headers=localized(language))


async def get_terms_dropdown(
    factory: RestClientFactory, terms_type: Optional[str] = None, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "terms-conditions/dropdown"):
        return {"success": False, "data": []}
    params = {"type": terms_type} if terms_type else None
    return await factory.service("terms-conditions/dropdown").get(params=params, headers=localized(language))
