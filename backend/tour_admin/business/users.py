"""
User management: listing, CRUD, activation and avatars
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from tour_admin.services import users as users_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class CreateUserPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)
    role: str = Field(min_length=1)
    phone: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class UpdateUserPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    role: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class UsersAction(str, Enum):
    LIST = "list"
    GET = "get"
    DROPDOWN = "dropdown"
    CREATE = "create"
    UPDATE = "update"
    TOGGLE_STATUS = "toggle_status"
    UPLOAD_AVATAR = "upload_avatar"
    DELETE_AVATAR = "delete_avatar"


class UsersBusinessLogic(BusinessLogic):
    Action = UsersAction

    @handles(UsersAction.LIST, requires_token=True)
    async def list_users(self, payload: FormPayload, token: str) -> Result:
        result = await users_service.get_all_users(
            self.factory,
            token=token,
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            role=payload.text("role"),
            is_active=payload.boolean("isActive"),
            search=payload.text("search"),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(UsersAction.GET, requires_token=True)
    async def get_user(self, payload: FormPayload, token: str) -> Result:
        user_id = payload.require("userId", "User ID")
        return to_result(await users_service.get_user_by_id(self.factory, user_id, token, self.language(payload)))

    @handles(UsersAction.DROPDOWN, requires_token=True)
    async def dropdown(self, payload: FormPayload, token: str) -> Result:
        return to_result(await users_service.get_users_dropdown(self.factory, token, self.language(payload)))

    @handles(UsersAction.CREATE, requires_token=True)
    async def create_user(self, payload: FormPayload, token: str) -> Result:
        data = CreateUserPayload.model_validate(payload.object("data"))
        return to_result(await users_service.create_user(self.factory, model_data(data), token, self.language(payload)))

    @handles(UsersAction.UPDATE, requires_token=True)
    async def update_user(self, payload: FormPayload, token: str) -> Result:
        user_id = payload.require("userId", "User ID")
        data = model_data(UpdateUserPayload.model_validate(payload.object("data")))
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await users_service.update_user(self.factory, user_id, data, token, self.language(payload)))

    @handles(UsersAction.TOGGLE_STATUS, requires_token=True)
    async def toggle_status(self, payload: FormPayload, token: str) -> Result:
        user_id = payload.require("userId", "User ID")
        is_active = payload.boolean("isActive")
        if is_active is None:
            raise PayloadError("isActive is required", field="isActive")
        result = await users_service.toggle_user_status(
            self.factory, user_id, is_active, token, self.language(payload)
        )
        return to_result(result)

    @handles(UsersAction.UPLOAD_AVATAR, requires_token=True)
    async def upload_avatar(self, payload: FormPayload, token: str) -> Result:
        user_id = payload.require("userId", "User ID")
        avatars = await payload.files("avatar")
        if not avatars:
            raise PayloadError("Avatar file is required", field="avatar")
        result = await users_service.upload_user_avatar(
            self.factory, user_id, avatars[0], token, self.language(payload)
        )
        return to_result(result)

    @handles(UsersAction.DELETE_AVATAR, requires_token=True)
    async def delete_avatar(self, payload: FormPayload, token: str) -> Result:
        user_id = payload.require("userId", "User ID")
        return to_result(await users_service.delete_user_avatar(self.factory, user_id, token, self.language(payload)))
