"""
Category reads for filters and tour forms
"""
from enum import Enum

from tour_admin.services import categories as categories_service

from .base import BusinessLogic, FormPayload, Result, handles, to_result


class CategoriesAction(str, Enum):
    LIST = "list"
    GET = "get"


class CategoriesBusinessLogic(BusinessLogic):
    Action = CategoriesAction

    @handles(CategoriesAction.LIST)
    async def list_categories(self, payload: FormPayload, token: str) -> Result:
        result = await categories_service.get_categories(
            self.factory, self.language(payload), payload.boolean("isActive")
        )
        return to_result(result)

    @handles(CategoriesAction.GET)
    async def get_category(self, payload: FormPayload, token: str) -> Result:
        category_id = payload.require("id", "Category ID")
        return to_result(await categories_service.get_category_by_id(self.factory, category_id, self.language(payload)))
