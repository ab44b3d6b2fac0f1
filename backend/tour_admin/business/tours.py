"""
Tour actions: card listing, detail, CRUD, image management and price range
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from tour_admin.cache.readers import ReferenceReaders
from tour_admin.services import price_range as price_range_service
from tour_admin.services import tours as tours_service
from tour_admin.services.common import empty_page
from tour_admin.services.rest import RestClientFactory

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class TourFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city_id: Optional[str] = Field(default=None, alias="cityId")
    country_id: Optional[str] = Field(default=None, alias="countryId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    category: Optional[str] = None
    difficulty: Optional[str] = None
    min_price: Optional[float] = Field(default=None, alias="minPrice", ge=0)
    max_price: Optional[float] = Field(default=None, alias="maxPrice", ge=0)


class TourPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str = Field(min_length=1)
    city_id: str = Field(alias="cityId", min_length=1)
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    difficulty: Optional[str] = None
    description: Optional[str] = None


class ToursAction(str, Enum):
    LIST = "list"
    GET = "get"
    DROPDOWN = "dropdown"
    CREATE = "create"
    UPDATE = "update"
    UPLOAD_IMAGES = "upload_images"
    SET_COVER_IMAGE = "set_cover_image"
    DELETE_IMAGE = "delete_image"
    PRICE_RANGE = "price_range"


class ToursBusinessLogic(BusinessLogic):
    Action = ToursAction

    def __init__(self, factory: RestClientFactory, readers: Optional[ReferenceReaders] = None):
        super().__init__(factory)
        self.readers = readers

    @handles(ToursAction.LIST)
    async def list_tours(self, payload: FormPayload, token: str) -> Result:
        filters = TourFilters.model_validate(payload.object("filters"))
        if not filters.city_id and not filters.country_id:
            result = to_result(empty_page())
            result["error"] = {"status": 400, "message": "City ID or country ID is required"}
            return result
        result = await tours_service.get_tours(
            self.factory,
            city_id=filters.city_id,
            country_id=filters.country_id,
            user_id=filters.user_id,
            page=filters.page,
            limit=filters.limit,
            category=filters.category,
            difficulty=filters.difficulty,
            min_price=filters.min_price,
            max_price=filters.max_price,
            token=token,
            language=self.language(payload),
            currency=self.currency(payload),
        )
        return to_result(result)

    @handles(ToursAction.GET)
    async def get_tour(self, payload: FormPayload, token: str) -> Result:
        tour_id = payload.require("id", "Tour ID")
        result = await tours_service.get_tour_by_id(
            self.factory, tour_id, token, self.language(payload), self.currency(payload)
        )
        return to_result(result)

    @handles(ToursAction.DROPDOWN)
    async def dropdown(self, payload: FormPayload, token: str) -> Result:
        result = await tours_service.get_tours_dropdown(
            self.factory, payload.text("countryId"), self.language(payload)
        )
        return to_result(result)

    @handles(ToursAction.CREATE, requires_token=True)
    async def create_tour(self, payload: FormPayload, token: str) -> Result:
        data = TourPayload.model_validate(payload.object("data"))
        return to_result(await tours_service.create_tour(self.factory, model_data(data), token, self.language(payload)))

    @handles(ToursAction.UPDATE, requires_token=True)
    async def update_tour(self, payload: FormPayload, token: str) -> Result:
        tour_id = payload.require("id", "Tour ID")
        data = payload.object("data")
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await tours_service.update_tour(self.factory, tour_id, data, token, self.language(payload)))

    @handles(ToursAction.UPLOAD_IMAGES, requires_token=True)
    async def upload_images(self, payload: FormPayload, token: str) -> Result:
        tour_id = payload.require("id", "Tour ID")
        images = await payload.files("images", field_name="images")
        if not images:
            raise PayloadError("At least one image is required", field="images")
        result = await tours_service.upload_tour_images(
            self.factory,
            tour_id,
            images,
            token,
            set_cover=payload.boolean("setCover", False),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(ToursAction.SET_COVER_IMAGE, requires_token=True)
    async def set_cover_image(self, payload: FormPayload, token: str) -> Result:
        tour_id = payload.require("id", "Tour ID")
        image_id = payload.require("imageId", "Image ID")
        return to_result(
            await tours_service.set_image_as_cover(self.factory, tour_id, image_id, token, self.language(payload))
        )

    @handles(ToursAction.DELETE_IMAGE, requires_token=True)
    async def delete_image(self, payload: FormPayload, token: str) -> Result:
        tour_id = payload.require("id", "Tour ID")
        image_id = payload.require("imageId", "Image ID")
        return to_result(await tours_service.delete_tour_image(self.factory, tour_id, image_id, token))

    @handles(ToursAction.PRICE_RANGE)
    async def price_range(self, payload: FormPayload, token: str) -> Result:
        filters: Dict[str, Any] = payload.object("filters")
        language, currency = self.language(payload), self.currency(payload)
        if self.readers is not None:
            result = await self.readers.get_price_range(filters, language, currency)
        else:
            result = await price_range_service.get_price_range(self.factory, filters, language, currency)
        return to_result(result)
