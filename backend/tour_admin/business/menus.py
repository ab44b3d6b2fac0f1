"""
Menu management: CRUD, role association and the signed-in user's navigation tree
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tour_admin.services import menus as menus_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class MenuPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(min_length=1)
    path: Optional[str] = None
    icon: Optional[str] = None
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    order: Optional[int] = Field(default=None, ge=0)
    app: str = "admin"
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class MenusAction(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ASSOCIATE_ROLES = "associate_roles"
    MY_MENU = "my_menu"
    PARENTS = "parents"


class MenusBusinessLogic(BusinessLogic):
    Action = MenusAction

    @handles(MenusAction.LIST, requires_token=True)
    async def list_menus(self, payload: FormPayload, token: str) -> Result:
        result = await menus_service.get_menus(
            self.factory,
            token=token,
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            role=payload.text("role"),
            is_active=payload.boolean("isActive"),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(MenusAction.GET, requires_token=True)
    async def get_menu(self, payload: FormPayload, token: str) -> Result:
        menu_id = payload.require("menuId", "Menu ID")
        return to_result(await menus_service.get_menu_by_id(self.factory, menu_id, token, self.language(payload)))

    @handles(MenusAction.CREATE, requires_token=True)
    async def create_menu(self, payload: FormPayload, token: str) -> Result:
        data = MenuPayload.model_validate(payload.object("data"))
        return to_result(await menus_service.create_menu(self.factory, model_data(data), token, self.language(payload)))

    @handles(MenusAction.UPDATE, requires_token=True)
    async def update_menu(self, payload: FormPayload, token: str) -> Result:
        menu_id = payload.require("menuId", "Menu ID")
        data = payload.object("data")
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await menus_service.update_menu(self.factory, menu_id, data, token, self.language(payload)))

    @handles(MenusAction.DELETE, requires_token=True)
    async def delete_menu(self, payload: FormPayload, token: str) -> Result:
        menu_id = payload.require("menuId", "Menu ID")
        return to_result(await menus_service.delete_menu(self.factory, menu_id, token))

    @handles(MenusAction.ASSOCIATE_ROLES, requires_token=True)
    async def associate_roles(self, payload: FormPayload, token: str) -> Result:
        menu_id = payload.require("menuId", "Menu ID")
        role_ids = payload.id_list("roleIds")
        result = await menus_service.associate_roles_to_menu(
            self.factory, menu_id, role_ids, token, self.language(payload)
        )
        return to_result(result)

    @handles(MenusAction.MY_MENU, requires_token=True)
    async def my_menu(self, payload: FormPayload, token: str) -> Result:
        result = await menus_service.get_user_menu(
            self.factory, token, payload.text("app", "admin"), self.language(payload)
        )
        return to_result(result)

    @handles(MenusAction.PARENTS, requires_token=True)
    async def parents(self, payload: FormPayload, token: str) -> Result:
        result = await menus_service.get_parent_menus(
            self.factory,
            token,
            app=payload.text("app", "admin"),
            is_active=payload.boolean("isActive", True),
            language=self.language(payload),
        )
        return to_result(result)
