"""
News: bilingual articles with publishing and an ordered image gallery
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tour_admin.services import news as news_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class NewsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title_es: str = Field(min_length=1)
    title_en: str = Field(min_length=1)
    content_es: str = Field(min_length=1)
    content_en: str = Field(min_length=1)
    excerpt_es: Optional[str] = None
    excerpt_en: Optional[str] = None
    author: str = Field(min_length=1)
    is_active: bool = Field(default=True, alias="isActive")
    is_published: bool = Field(default=False, alias="isPublished")


class UpdateNewsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title_es: Optional[str] = Field(default=None, min_length=1)
    title_en: Optional[str] = Field(default=None, min_length=1)
    content_es: Optional[str] = Field(default=None, min_length=1)
    content_en: Optional[str] = Field(default=None, min_length=1)
    excerpt_es: Optional[str] = None
    excerpt_en: Optional[str] = None
    author: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    is_published: Optional[bool] = Field(default=None, alias="isPublished")


class NewsAction(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    PUBLISH = "publish"
    TOGGLE_STATUS = "toggle_status"
    UPLOAD_IMAGES = "upload_images"
    SET_COVER_IMAGE = "set_cover_image"
    REORDER_IMAGES = "reorder_images"
    DELETE_IMAGE = "delete_image"


class NewsBusinessLogic(BusinessLogic):
    Action = NewsAction

    @handles(NewsAction.LIST)
    async def list_news(self, payload: FormPayload, token: str) -> Result:
        result = await news_service.get_news(
            self.factory,
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            is_active=payload.boolean("isActive"),
            is_published=payload.boolean("isPublished"),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(NewsAction.GET)
    async def get_news(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        return to_result(await news_service.get_news_by_id(self.factory, news_id, self.language(payload)))

    @handles(NewsAction.CREATE, requires_token=True)
    async def create_news(self, payload: FormPayload, token: str) -> Result:
        data = NewsPayload.model_validate(payload.object("data"))
        return to_result(await news_service.create_news(self.factory, model_data(data), token, self.language(payload)))

    @handles(NewsAction.UPDATE, requires_token=True)
    async def update_news(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        data = model_data(UpdateNewsPayload.model_validate(payload.object("data")))
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await news_service.update_news(self.factory, news_id, data, token, self.language(payload)))

    @handles(NewsAction.PUBLISH, requires_token=True)
    async def publish(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        return to_result(await news_service.publish_news(self.factory, news_id, token, self.language(payload)))

    @handles(NewsAction.TOGGLE_STATUS, requires_token=True)
    async def toggle_status(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        return to_result(await news_service.toggle_news_status(self.factory, news_id, token, self.language(payload)))

    @handles(NewsAction.UPLOAD_IMAGES, requires_token=True)
    async def upload_images(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        images = await payload.files("images", field_name="images")
        if not images:
            raise PayloadError("At least one image is required", field="images")
        result = await news_service.upload_news_images(
            self.factory,
            news_id,
            images,
            token,
            set_cover=payload.boolean("setCover", False),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(NewsAction.SET_COVER_IMAGE, requires_token=True)
    async def set_cover_image(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        image_id = payload.require("imageId", "Image ID")
        return to_result(
            await news_service.set_news_cover_image(self.factory, news_id, image_id, token, self.language(payload))
        )

    @handles(NewsAction.REORDER_IMAGES, requires_token=True)
    async def reorder_images(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        image_ids = payload.id_list("imageIds")
        if not image_ids:
            raise PayloadError("imageIds must not be empty", field="imageIds")
        return to_result(
            await news_service.reorder_news_images(self.factory, news_id, image_ids, token, self.language(payload))
        )

    @handles(NewsAction.DELETE_IMAGE, requires_token=True)
    async def delete_image(self, payload: FormPayload, token: str) -> Result:
        news_id = payload.require("newsId", "News ID")
        image_id = payload.require("imageId", "Image ID")
        return to_result(
            await news_service.delete_news_image(self.factory, news_id, image_id, token, self.language(payload))
        )
