"""
Offers: CRUD, activation and promotional image
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tour_admin.services import offers as offers_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, to_result


class OfferPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str = Field(min_length=1)
    tour_id: Optional[str] = Field(default=None, alias="tourId")
    country_id: Optional[str] = Field(default=None, alias="countryId")
    discount_percentage: Optional[float] = Field(default=None, alias="discountPercentage", gt=0, le=100)
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")
    is_active: Optional[bool] = Field(default=None, alias="isActive")

    @model_validator(mode="after")
    def check_dates(self) -> "OfferPayload":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class OffersAction(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    TOGGLE_STATUS = "toggle_status"
    UPLOAD_IMAGE = "upload_image"
    DELETE_IMAGE = "delete_image"


class OffersBusinessLogic(BusinessLogic):
    Action = OffersAction

    @handles(OffersAction.LIST)
    async def list_offers(self, payload: FormPayload, token: str) -> Result:
        result = await offers_service.get_offers(
            self.factory,
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            is_active=payload.boolean("isActive"),
            country_id=payload.text("countryId"),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(OffersAction.GET)
    async def get_offer(self, payload: FormPayload, token: str) -> Result:
        offer_id = payload.require("offerId", "Offer ID")
        return to_result(await offers_service.get_offer_by_id(self.factory, offer_id, self.language(payload)))

    @handles(OffersAction.CREATE, requires_token=True)
    async def create_offer(self, payload: FormPayload, token: str) -> Result:
        data = OfferPayload.model_validate(payload.object("data"))
        body = data.model_dump(by_alias=True, exclude_none=True, mode="json")
        return to_result(await offers_service.create_offer(self.factory, body, token, self.language(payload)))

    @handles(OffersAction.UPDATE, requires_token=True)
    async def update_offer(self, payload: FormPayload, token: str) -> Result:
        offer_id = payload.require("offerId", "Offer ID")
        data = payload.object("data")
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await offers_service.update_offer(self.factory, offer_id, data, token, self.language(payload)))

    @handles(OffersAction.DELETE, requires_token=True)
    async def delete_offer(self, payload: FormPayload, token: str) -> Result:
        offer_id = payload.require("offerId", "Offer ID")
        return to_result(await offers_service.delete_offer(self.factory, offer_id, token))

    @handles(OffersAction.TOGGLE_STATUS, requires_token=True)
    async def toggle_status(self, payload: FormPayload, token: str) -> Result:
        offer_id = payload.require("offerId", "Offer ID")
        is_active = payload.boolean("isActive")
        if is_active is None:
            raise PayloadError("isActive is required", field="isActive")
        result = await offers_service.toggle_offer_status(
            self.factory, offer_id, is_active, token, self.language(payload)
        )
        return to_result(result)

    @handles(OffersAction.UPLOAD_IMAGE, requires_token=True)
    async def upload_image(self, payload: FormPayload, token: str) -> Result:
        offer_id = payload.require("offerId", "Offer ID")
        images = await payload.files("image")
        if not images:
            raise PayloadError("Image file is required", field="image")
        result = await offers_service.upload_offer_image(
            self.factory, offer_id, images[0], token, self.language(payload)
        )
        return to_result(result)

    @handles(OffersAction.DELETE_IMAGE, requires_token=True)
    async def delete_image(self, payload: FormPayload, token: str) -> Result:
        offer_id = payload.require("offerId", "Offer ID")
        return to_result(await offers_service.delete_offer_image(self.factory, offer_id, token))
