"""
Terms and conditions, general and per tour
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tour_admin.services import terms as terms_service

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class TermsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="tour", min_length=1)
    tour_id: Optional[str] = Field(default=None, alias="tourId")
    version: Optional[str] = None
    terms_conditions_es: Optional[str] = None
    terms_conditions_en: Optional[str] = None

    @model_validator(mode="after")
    def check_content(self) -> "TermsPayload":
        if not (self.terms_conditions_es or self.terms_conditions_en):
            raise ValueError("terms_conditions_es or terms_conditions_en is required")
        return self


class TermsAction(str, Enum):
    BY_TYPE = "by_type"
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DROPDOWN = "dropdown"
    BY_TOUR = "by_tour"


class TermsBusinessLogic(BusinessLogic):
    Action = TermsAction

    @staticmethod
    def _form_terms(payload: FormPayload) -> dict:
        data = payload.object("data")
        for key in ("tourId", "type", "terms_conditions_es", "terms_conditions_en"):
            value = payload.text(key)
            if value is not None:
                data.setdefault(key, value)
        return data

    @handles(TermsAction.BY_TYPE)
    async def by_type(self, payload: FormPayload, token: str) -> Result:
        terms_type = payload.require("type", "Terms type")
        return to_result(await terms_service.get_terms_by_type(self.factory, terms_type, self.language(payload)))

    @handles(TermsAction.LIST, requires_token=True)
    async def list_terms(self, payload: FormPayload, token: str) -> Result:
        result = await terms_service.get_all_terms(
            self.factory,
            token=token,
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            tour_id=payload.text("tourId"),
            version=payload.text("version"),
            language=self.language(payload),
        )
        return to_result(result)

    @handles(TermsAction.GET, requires_token=True)
    async def get_terms(self, payload: FormPayload, token: str) -> Result:
        terms_id = payload.require("id", "Terms ID")
        return to_result(await terms_service.get_terms_by_id(self.factory, terms_id, token, self.language(payload)))

    @handles(TermsAction.CREATE, requires_token=True)
    async def create_terms(self, payload: FormPayload, token: str) -> Result:
        data = TermsPayload.model_validate(self._form_terms(payload))
        return to_result(await terms_service.create_terms(self.factory, model_data(data), token, self.language(payload)))

    @handles(TermsAction.UPDATE, requires_token=True)
    async def update_terms(self, payload: FormPayload, token: str) -> Result:
        terms_id = payload.require("id", "Terms ID")
        data = {key: value for key, value in self._form_terms(payload).items() if value not in (None, "")}
        if not data:
            raise PayloadError("Nothing to update", field="data")
        result = await terms_service.update_terms(self.factory, terms_id, data, token, self.language(payload))
        return to_result(result)

    @handles(TermsAction.DROPDOWN)
    async def dropdown(self, payload: FormPayload, token: str) -> Result:
        return to_result(await terms_service.get_terms_dropdown(self.factory, payload.text("type"), self.language(payload)))

    @handles(TermsAction.BY_TOUR)
    async def by_tour(self, payload: FormPayload, token: str) -> Result:
        tour_id = payload.require("tourId", "Tour ID")
        return to_result(await terms_service.get_terms_by_tour(self.factory, tour_id, self.language(payload)))
