"""
Roles resource and role to menu associations
"""
from typing import Any, Dict, List, Optional

from .common import empty_page, localized, not_configured, not_configured_error, page_params
from .rest import RestClientFactory, ServiceResult


async def get_roles(
    factory: RestClientFactory,
    *,
    token: str = "",
    page: int = 1,
    limit: int = 10,
    is_active: Optional[bool] = None,
    language: str = "es",
) -> ServiceResult:
    if not_configured(factory, "roles"):
        return empty_page()
    params = page_params(page, limit, isActive=is_active)
    return await factory.service("roles", token).get(params=params, headers=localized(language))


async def get_role_by_id(factory: RestClientFactory, role_id: str, token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "roles"):
        return not_configured_error()
    return await factory.service("roles", token).get_by_id(role_id, headers=localized(language))


async def create_role(factory: RestClientFactory, data: Dict[str, Any], token: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "roles"):
        return not_configured_error()
    return await factory.service("roles", token).create(data, headers=localized(language))


async def update_role(
    factory: RestClientFactory, role_id: str, data: Dict[str, Any], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "roles"):
        return not_configured_error()
    return await factory.service("roles", token).update(data, url=f"roles/{role_id}", headers=localized(language))


async def delete_role(factory: RestClientFactory, role_id: str, token: str) -> ServiceResult:
    if not_configured(factory, "roles"):
        return not_configured_error()
    return await factory.service(f"roles/{role_id}", token).delete()


async def associate_menus_to_role(
    factory: RestClientFactory, role_id: str, menu_ids: List[str], token: str, language: str = "es"
) -> ServiceResult:
    if not_configured(factory, "roles"):
        return not_configured_error()
    service = factory.service("roles", token)
    return await service.create({"menuIds": menu_ids}, url=f"roles/{role_id}/menus", headers=localized(language))
