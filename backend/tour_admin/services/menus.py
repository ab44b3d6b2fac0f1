"""
Navigation menus resource and its role associations
"""
from typing import Any, Dict, List, Optional

from .common import empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_menus(
    factory: RestClientFactory,
    *,
    token: str = "",
    page: int = 1,
    limit: int = 10,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "menus"):
        return empty_page()
    params = page_params(page, limit, role=role, isActive=is_active)
    return await factory.service("menus", token).get(params=params, headers=localized(language))


async def get_menu_by_id(factory: RestClientFactory, menu_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "menus"):
        return not_configured_error()
    return await factory.service("menus", token).get_by_id(menu_id, headers=localized(language))


async def create_menu(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "menus"):
        return not_configured_error()
    return await factory.service("menus", token).create(data, headers=localized(language))


async def update_menu(
    factory: RestClientFactory, menu_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "menus"):
        return not_configured_error()
    return await factory.service("menus", token).update(data, url=f"menus/{menu_id}", headers=localized(language))


async def delete_menu(factory: RestClientFactory, menu_id: str, token: str) -> ServiceResult:
    if not_configured(factory, "menus"):
        return not_configured_error()
    return await factory.service(f"menus/{menu_id}", token).delete()


async def associate_roles_to_menu(
    factory: RestClientFactory, menu_id: str, role_ids: List[str], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "menus"):
        return not_configured_error()
    service = factory.service("menus", token)
    return await service.create({"roleIds": role_ids}, url=f"menus/{menu_id}/roles", headers=localized(language))


async def get_user_menu(factory: RestClientFactory, token: str, app: str = "admin", language: str = "es") -> ServiceResult:
    """Navigation tree for the signed-in user."""
    if not_configured(factory, "menus/my-menu"):
        return {"success": False, "data": []}
    service = factory.service("menus/my-menu", token)
    return await service.get(params={"app": app}, headers=localized(language))


async def get_parent_menus(
    factory: RestClientFactory, token: str, app: str = "admin", is_active: Optional[bool] = True, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "menus/parents"):
        return {"success": False, "data": []}
    params: Dict[str, Any] = {"app": app}
    if is_active is not None:
        params["isActive"] = str(is_active).lower()
    return await factory.service("menus/parents", token).get(params=params, headers=localized(language))
