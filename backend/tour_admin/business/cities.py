"""
Countries and cities actions

Listing reads go through the cached reader when one is supplied.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tour_admin.cache.readers import ReferenceReaders
from tour_admin.services import cities as cities_service
from tour_admin.services import countries as countries_service
from tour_admin.services.rest import RestClientFactory

from .base import BusinessLogic, FormPayload, PayloadError, Result, handles, model_data, to_result


class CityPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    country_id: str = Field(alias="countryId", min_length=1)
    state: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class CitiesAction(str, Enum):
    LIST_COUNTRIES = "list_countries"
    LIST = "list"
    LIST_BY_COUNTRY = "list_by_country"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class CitiesBusinessLogic(BusinessLogic):
    Action = CitiesAction

    def __init__(self, factory: RestClientFactory, readers: Optional[ReferenceReaders] = None):
        super().__init__(factory)
        self.readers = readers

    async def _cities(self, payload: FormPayload, country_id: Optional[str]) -> Result:
        params = dict(
            page=payload.integer("page", 1),
            limit=payload.integer("limit", 10),
            country_id=country_id,
            is_active=payload.boolean("isActive"),
            language=self.language(payload),
        )
        if self.readers is not None:
            return to_result(await self.readers.get_cities(**params))
        return to_result(await cities_service.get_cities(self.factory, **params))

    @handles(CitiesAction.LIST_COUNTRIES)
    async def list_countries(self, payload: FormPayload, token: str) -> Result:
        return to_result(await countries_service.get_countries(self.factory, self.language(payload)))

    @handles(CitiesAction.LIST)
    async def list_cities(self, payload: FormPayload, token: str) -> Result:
        filters = payload.object("filters")
        return await self._cities(payload, filters.get("countryId") or payload.text("countryId"))

    @handles(CitiesAction.LIST_BY_COUNTRY)
    async def list_by_country(self, payload: FormPayload, token: str) -> Result:
        filters = payload.object("filters")
        country_id = filters.get("countryId") or payload.text("countryId")
        if not country_id:
            raise PayloadError("Country ID is required", field="countryId")
        return await self._cities(payload, str(country_id))

    @handles(CitiesAction.GET)
    async def get_city(self, payload: FormPayload, token: str) -> Result:
        city_id = payload.require("id", "City ID")
        return to_result(await cities_service.get_city_by_id(self.factory, city_id, self.language(payload)))

    @handles(CitiesAction.CREATE, requires_token=True)
    async def create_city(self, payload: FormPayload, token: str) -> Result:
        data = CityPayload.model_validate(payload.object("data"))
        return to_result(
            await cities_service.create_city(self.factory, model_data(data), token, self.language(payload))
        )

    @handles(CitiesAction.UPDATE, requires_token=True)
    async def update_city(self, payload: FormPayload, token: str) -> Result:
        city_id = payload.require("id", "City ID")
        data = payload.object("data")
        if not data:
            raise PayloadError("Nothing to update", field="data")
        return to_result(await cities_service.update_city(self.factory, city_id, data, token, self.language(payload)))

    @handles(CitiesAction.DELETE, requires_token=True)
    async def delete_city(self, payload: FormPayload, token: str) -> Result:
        city_id = payload.require("id", "City ID")
        return to_result(await cities_service.delete_city(self.factory, city_id, token))
