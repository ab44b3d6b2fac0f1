"""
Activities catalogue used when building tours
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tour_admin.services import activities as activities_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class ActivityFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    category: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class ActivityPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity_es: str = Field(alias="activityEs", min_length=1)
    activity_en: str = Field(alias="activityEn", min_length=1)
    category_id: str = Field(alias="categoryId", min_length=1)
    is_active: bool = Field(default=True, alias="isActive")


class UpdateActivityPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity_es: Optional[str] = Field(default=None, alias="activityEs", min_length=1)
    activity_en: Optional[str] = Field(default=None, alias="activityEn", min_length=1)
    category_id: Optional[str] = Field(default=None, alias="categoryId", min_length=1)
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class ActivitiesAction(str, Enum):
    LIST = "list"
    GET = "get"
    DROPDOWN = "dropdown"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    TOGGLE_STATUS = "toggle_status"


class ActivitiesBusinessLogic(BusinessLogic):
    Action = ActivitiesAction

    @handles(ActivitiesAction.LIST)
    async def list_activities(self, payload: FormPayload, token: str) -> Result:
        filters = ActivityFilters.model_validate(payload.object("filters"))
        result = await activities_service.get_activities(
            self.factory,
            page=filters.page,
            limit=filters.limit,
            category=filters.category or None,
            is_active=filters.is_active,
            language=self.language(payload),
        )
        return to_result(result)

    @handles(ActivitiesAction.GET)
    async def get_activity(self, payload: FormPayload, token: str) -> Result:
        activity_id = payload.require("activityId", "Activity ID")
        return to_result(
            await activities_service.get_activity_by_id(self.factory, activity_id, self.language(payload))
        )

    @handles(ActivitiesAction.DROPDOWN)
    async def dropdown(self, payload: FormPayload, token: str) -> Result:
        return to_result(await activities_service.get_activities_dropdown(self.factory, self.language(payload)))

    @handles(ActivitiesAction.CREATE, requires_token=True)
    async def create_activity(self, payload: FormPayload, token: str) -> Result:
        data = ActivityPayload.model_validate(payload.object("data"))
        result = await activities_service.create_activity(self.factory, model_data(data), token, self.language(payload))
        return to_result(result)

    @handles(ActivitiesAction.UPDATE, requires_token=True)
    async def update_activity(self, payload: FormPayload, token: str) -> Result:
        activity_id = payload.require("activityId", "Activity ID")
        data = model_data(UpdateActivityPayload.model_validate(payload.object("data")))
        if not data:
            raise PayloadError("Nothing to update", field="data")
        result = await activities_service.update_activity(
            self.factory, activity_id, data, token, self.language(payload)
        )
        return to_result(result)

    @handles(ActivitiesAction.DELETE, requires_token=True)
    async def delete_activity(self, payload: FormPayload, token: str) -> Result:
        activity_id = payload.require("activityId", "Activity ID")
        return to_result(
            await activities_service.delete_activity(self.factory, activity_id, token, self.language(payload))
        )

    @handles(ActivitiesAction.TOGGLE_STATUS, requires_token=True)
    async def toggle_status(self, payload: FormPayload, token: str) -> Result:
        activity_id = payload.require("activityId", "Activity ID")
        return to_result(
            await activities_service.toggle_activity_status(self.factory, activity_id, token, self.language(payload))
        )
