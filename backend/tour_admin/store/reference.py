"""
Reference data slice: countries, cities, categories and the selected country
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

Record = Dict[str, Any]


class ReferenceState(BaseModel):
    model_config = ConfigDict(frozen=True)

    countries: List[Record] = []
    cities: List[Record] = []
    categories: List[Record] = []
    selected_country: Optional[Record] = None
    is_loading: bool = False
    error: Optional[str] = None

    def view(self) -> Dict[str, Any]:
        return {
            "countries": self.countries,
            "cities": self.cities,
            "categories": self.categories,
            "selectedCountry": self.selected_country,
            "isLoading": self.is_loading,
            "error": self.error,
        }


class ReferenceLoading(BaseModel):
    model_config = ConfigDict(frozen=True)


class ReferenceFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str


class CountriesLoaded(BaseModel):
    model_config = ConfigDict(frozen=True)

    countries: List[Record]


class CitiesLoaded(BaseModel):
    model_config = ConfigDict(frozen=True)

    cities: List[Record]


class CategoriesLoaded(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: List[Record]


class CountrySelected(BaseModel):
    """Select by ISO code; an unknown code leaves the selection unchanged."""

    model_config = ConfigDict(frozen=True)

    code: str


def find_country(countries: List[Record], code: Optional[str]) -> Optional[Record]:
    if not code:
        return None
    wanted = code.upper()
    for country in countries:
        if str(country.get("code", "")).upper() == wanted:
            return country
    return None


def reference_reducer(state: ReferenceState, action: Any) -> ReferenceState:
    if isinstance(action, ReferenceLoading):
        return state.model_copy(update={"is_loading": True, "error": None})

    if isinstance(action, ReferenceFailed):
        return state.model_copy(update={"is_loading": False, "error": action.error})

    if isinstance(action, CountriesLoaded):
        selected = state.selected_country
        if selected is not None:
            selected = find_country(action.countries, selected.get("code"))
        return state.model_copy(
            update={"countries": list(action.countries), "selected_country": selected, "is_loading": False}
        )

    if isinstance(action, CitiesLoaded):
        return state.model_copy(update={"cities": list(action.cities), "is_loading": False})

    if isinstance(action, CategoriesLoaded):
        return state.model_copy(update={"categories": list(action.categories), "is_loading": False})

    if isinstance(action, CountrySelected):
        country = find_country(state.countries, action.code)
        if country is None:
            return state
        return state.model_copy(update={"selected_country": country})

    return state
