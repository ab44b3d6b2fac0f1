"""
News articles: CRUD, publishing and the image gallery
"""
from typing import Any, Dict, List, Optional

from .common import UploadFile, empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_news(
    factory: RestClientFactory,
    *,
    page: int = 1,
    limit: int = 10,
    is_active: Optional[bool] = None,
    is_published: Optional[bool] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "news"):
        return empty_page()
    params = page_params(page, limit, isActive=is_active, isPublished=is_published)
    return await factory.service("news").get(params=params, headers=localized(language))


async def get_news_by_id(factory: RestClientFactory, news_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "news"):
        return {"success": False, "data": None}
    return await factory.service("news").get_by_id(news_id, headers=localized(language))


async def create_news(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "news"):
        return not_configured_error()
    return await factory.service("news", token).create(data, headers=localized(language))


async def update_news(
    factory: RestClientFactory, news_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    """Partial update (PATCH); only the submitted fields change."""
    if not_configured(factory, "news"):
        return not_configured_error()
    return await factory.service(f"news/{news_id}", token).patch(data, headers=localized(language))


async def publish_news(factory: RestClientFactory, news_id: str, token: str, language: str = "es") -> ServiceResult:
    """The backend flips `isPublished`; the same call unpublishes."""
    if not_configured(factory, "news"):
        return not_configured_error()
    return await factory.service(f"news/{news_id}/publish", token).patch({}, headers=localized(language))


async def toggle_news_status(factory: RestClientFactory, news_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "news"):
        return not_configured_error()
    return await factory.service(f"news/{news_id}/toggle-status", token).patch({}, headers=localized(language))


async def upload_news_images(
    factory: RestClientFactory,
    news_id: str,
    images: List[UploadFile],
    token: str,
    set_cover: bool = False,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "news"):
        return not_configured_error()
    service = factory.service(f"news/{news_id}/images", token)
    return await service.create(
        files=images,
        data={"setCover": str(set_cover).lower()},
        headers=localized(language),
        timeout=factory.upload_timeout,
    )


async def set_news_cover_image(
    factory: RestClientFactory, news_id: str, image_id: str, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "news"):
        return not_configured_error()
    service = factory.service(f"news/{news_id}/images/{image_id}/set-cover", token)
    return await service.patch({}, headers=localized(language))


async def reorder_news_images(
    factory: RestClientFactory, news_id: str, image_ids: List[str], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "news"):
        return not_configured_error()
    service = factory.service(f"news/{news_id}/images/reorder", token)
    return await service.patch({"imageIds": image_ids}, headers=localized(language))


async def delete_news_image(
    factory: RestClientFactory, news_id: str, image_id: str, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "news"):
        return not_configured_error()
    return await factory.service(f"news/{news_id}/images/{image_id}", token).delete(headers=localized(language))
