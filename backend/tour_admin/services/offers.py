"""
Offers resource including status toggling and image upload
"""
from typing import Any, Dict, Optional

from .common import UploadFile, empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_offers(
    factory: RestClientFactory,
    *,
    page: int = 1,
    limit: int = 10,
    is_active: Optional[bool] = None,
    country_id: Optional[str] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "offers"):
        return empty_page()
    params = page_params(page, limit, isActive=is_active, countryId=country_id)
    return await factory.service("offers").get(params=params, headers=localized(language))


async def get_offer_by_id(factory: RestClientFactory, offer_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    return await factory.service("offers").get_by_id(offer_id, headers=localized(language))


async def create_offer(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    return await factory.service("offers", token).create(data, headers=localized(language))


async def update_offer(
    factory: RestClientFactory, offer_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    return await factory.service("offers", token).update(data, url=f"offers/{offer_id}", headers=localized(language))


async def delete_offer(factory: RestClientFactory, offer_id: str, token: str) -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    return await factory.service(f"offers/{offer_id}", token).delete()


async def toggle_offer_status(
    factory: RestClientFactory, offer_id: str, is_active: bool, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    service = factory.service("offers", token)
    return await service.update(
        {"isActive": is_active}, url=f"offers/{offer_id}/toggle-status", headers=localized(language)
    )


async def upload_offer_image(
    factory: RestClientFactory, offer_id: str, image: UploadFile, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    service = factory.service(f"offers/{offer_id}/image", token)
    return await service.create(files=[image], headers=localized(language), timeout=factory.upload_timeout)


async def delete_offer_image(factory: RestClientFactory, offer_id: str, token: str) -> ServiceResult:
    if not_configured(factory, "offers"):
        return not_configured_error()
    return await factory.service(f"offers/{offer_id}/image", token).delete()
