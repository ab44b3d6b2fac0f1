"""
Users resource including status toggling and avatar upload
"""
from typing import Any, Dict, Optional

from .common import UploadFile, empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_all_users(
    factory: RestClientFactory,
    *,
    token: str = "",
    page: int = 1,
    limit: int = 10,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "users"):
        return empty_page()
    params = page_params(page, limit, role=role, isActive=is_active, search=search)
    return await factory.service("users/all", token).get(params=params, headers=localized(language))


async def get_users_dropdown(factory: RestClientFactory, token: str = "", language: str = "es") -> ServiceResult:
    if not_configured(factory, "users/dropdown"):
        return {"success": False, "data": []}
    return await factory.service("users/dropdown", token).get(headers=localized(language))


async def get_user_by_id(factory: RestClientFactory, user_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "users"):
        return not_configured_error()
    return await factory.service("users", token).get_by_id(user_id, headers=localized(language))


async def create_user(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "users"):
        return not_configured_error()
    return await factory.service("users", token).create(data, headers=localized(language))


async def update_user(
    factory: RestClientFactory, user_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "users"):
        return not_configured_error()
    return await factory.service("users", token).update(data, url=f"users/{user_id}", headers=localized(language))


async def toggle_user_status(
    factory: RestClientFactory, user_id: str, is_active: bool, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "users"):
        return not_configured_error()
    service = factory.service("users", token)
    return await service.update({"isActive": is_active}, url=f"users/{user_id}", headers=localized(language))


async def upload_user_avatar(
    factory: RestClientFactory, user_id: str, avatar: UploadFile, token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "users"):
        return not_configured_error()
    service = factory.service(f"users/{user_id}/avatar", token)
    return await service.create(files=[avatar], headers=localized(language), timeout=factory.upload_timeout)


async def delete_user_avatar(factory: RestClientFactory, user_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "users"):
        return not_configured_error()
    return await factory.service(f"users/{user_id}/avatar", token).delete(headers=localized(language))
