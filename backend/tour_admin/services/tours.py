"""
Tours resource: cards listing, detail, dropdown, CRUD and image management
"""
from typing import Any, Dict, List, Optional

from .common import (
    UploadFile,
    empty_page,
    localized,
    not_configured,
    not_configured_error,
    page_params,
)
from .rest import RestClientFactory, ServiceResult


async def get_tours(
    factory: RestClientFactory,
    *,
    city_id: Optional[str] = None,
    country_id: Optional[str] = None,
    user_id: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    token: str = "",
    language: str = "es",
    currency: str = "MXN",
) -> ServiceResult:
    if not_configured(factory, "tours"):
        return empty_page()
    # the backend filters cards by `city`, not `cityId`
    params = page_params(
        page,
        limit,
        city=city_id,
        countryId=country_id,
        userId=user_id,
        category=category,
        difficulty=difficulty,
        minPrice=min_price,
        maxPrice=max_price,
    )
    service = factory.service("tours/cards", token)
    return await service.get(params=params, headers=localized(language, currency))


async def get_tour_by_id(
    factory: RestClientFactory, tour_id: str, token: str = "", language: str = "es", currency: str = "MXN"
) -> ServiceResult:
    if not_configured(factory, "tours"):
        return not_configured_error()
    return await factory.service("tours", token).get_by_id(tour_id, headers=localized(language, currency))


async def get_tours_dropdown(
    factory: RestClientFactory, country_id: Optional[str] = None, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "tours"):
        return {"success": False, "data": []}
    params = {"countryId": country_id} if country_id else None
    return await factory.service("tours/dropdown").get(params=params, headers=localized(language))


async def create_tour(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "tours"):
        return not_configured_error()
    return await factory.service("tours", token).create(data, headers=localized(language))


async def update_tour(
    factory: RestClientFactory, tour_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "tours"):
        return not_configured_error()
    return await factory.service(f"tours/{tour_id}", token).update(data, headers=localized(language))


async def upload_tour_images(
    factory: RestClientFactory,
    tour_id: str,
    images: List[UploadFile],
    token: str,
    set_cover: bool = False,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "tours"):
        return not_configured_error()
    service = factory.service(f"tours/{tour_id}/images", token)
    return await service.create(
        files=images,
        data={"setCover": str(set_cover).lower()},
        headers=localized(language),
        timeout=factory.upload_timeout,
    )


async def set_image_as_cover(
    factory: RestClientFactory, tour_id: str, image_id: str, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "tours"):
        return not_configured_error()
    service = factory.service(f"tours/{tour_id}/images/{image_id}/cover", token)
    return await service.patch(headers=localized(language))


async def delete_tour_image(factory: RestClientFactory, tour_id: str, image_id: str, token: str) -> ServiceResult:
    if not_configured(factory, "tours"):
        return not_configured_error()
    return await factory.service(f"tours/{tour_id}/images/{image_id}", token).delete()
