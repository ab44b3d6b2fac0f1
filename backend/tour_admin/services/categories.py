"""
Tour categories resource
"""
from typing import Optional

from .common import localized, not_configured, not_configured_error
from .rest import RestClientFactory, ServiceResult


async def get_categories(
    factory: RestClientFactory, language: str = "es", is_active: Optional[bool] = None
) -> ServiceResult:
    if not_configured(factory, "categories"):
        return {"success": False, "data": []}
    params = {"isActive": str(is_active).lower()} if is_active is not None else None
    return await factory.service("categories").get(params=params, headers=localized(language))


async def get_category_by_id(factory: RestClientFactory, category_id: str, language: str = "es") -> ServiceResult:
    if not_configured(factory, "categories"):
        return not_configured_error()
    return await factory.service("categories").get_by_id(category_id, headers=localized(language))
