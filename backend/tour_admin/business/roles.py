"""
Role management and menu permissions
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tour_admin.services import roles as roles_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class RolePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class RolesAction(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ASSOCIATE_MENUS = "associate_menus"


class RolesBusinessLogic(BusinessLogic):
    Action = RolesAction

    @handles(RolesAction.LIST, requires_token=True)
    async def list_roles(self, payload: FormPayload, token: str) -> Result:
        result = await roles_service.get_roles(
            self.factory,
            token=token,
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            is_active=payload.boolean("isActive"),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(RolesAction.GET, requires_token=True)
    async def get_role(self, payload: FormPayload, token: str) -> Result:
        role_id = payload.require("roleId", "Role ID")
        return to_result(await roles_service.get_role_by_id(self.factory, role_id, token, self.language(payload)))

    @handles(RolesAction.CREATE, requires_token=True)
    async def create_role(self, payload: FormPayload, token: str) -> Result:
        data = RolePayload.model_validate(payload.object("data"))
        return to_result(await roles_service.create_role(self.factory, model_data(data), token, self.language(payload)))

    @handles(RolesAction.UPDATE, requires_token=True)
    async def update_role(self, payload: FormPayload, token: str) -> Result:
        role_id = payload.require("roleId", "Role ID")
        data = payload.object("data")
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await roles_service.update_role(self.factory, role_id, data, token, self.language(payload)))

    @handles(RolesAction.DELETE, requires_token=True)
    async def delete_role(self, payload: FormPayload, token: str) -> Result:
        role_id = payload.require("roleId", "Role ID")
        return to_result(await roles_service.delete_role(self.factory, role_id, token))

    @handles(RolesAction.ASSOCIATE_MENUS, requires_token=True)
    async def associate_menus(self, payload: FormPayload, token: str) -> Result:
        role_id = payload.require("roleId", "Role ID")
        menu_ids = payload.id_list("menuIds")
        result = await roles_service.associate_menus_to_role(
            self.factory, role_id, menu_ids, token, self.language(payload)
        )
        return to_result(result)
