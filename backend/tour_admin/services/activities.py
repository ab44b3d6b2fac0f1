"""
Activities offered on tours, grouped by activity category
"""
from typing import Any, Dict, Optional

from .common import empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_activities(
    factory: RestClientFactory,
    *,
    page: int = 1,
    limit: int = 10,
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "activities"):
        return empty_page()
    params = page_params(page, limit, category=category, isActive=is_active)
    return await factory.service("activities").get(params=params, headers=localized(language))


async def get_activity_by_id(factory: RestClientFactory, activity_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "activities"):
        return {"success": False, "data": None}
    return await factory.service("activities").get_by_id(activity_id, headers=localized(language))


async def get_activities_dropdown(factory: RestClientFactory, language: str = "es") -> ServiceResult:
    if not_configured(factory, "activities/dropdown"):
        return {"success": False, "data": []}
    return await factory.service("activities/dropdown").get(headers=localized(language))


async def create_activity(
    factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "activities"):
        return not_configured_error()
    return await factory.service("activities", token).create(data, headers=localized(language))


async def update_activity(
    factory: RestClientFactory, activity_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "activities"):
        return not_configured_error()
    return await factory.service(f"activities/{activity_id}", token).update(data, headers=localized(language))


async def delete_activity(factory: RestClientFactory, activity_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "activities"):
        return not_configured_error()
    return await factory.service(f"activities/{activity_id}", token).delete(headers=localized(language))


async def toggle_activity_status(
    factory: RestClientFactory, activity_id: str, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "activities"):
        return not_configured_error()
    service = factory.service(f"activities/{activity_id}/toggle-status", token)
    return await service.patch({}, headers=localized(language))
