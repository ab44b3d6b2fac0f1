"""
Root loader: the data every page gets before its own loader runs
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from tour_admin.cache.readers import ReferenceReaders
from tour_admin.core.config import Settings
from tour_admin.core.exceptions import is_error
from tour_admin.services import categories as categories_service
from tour_admin.services import countries as countries_service
from tour_admin.store.auth import PasswordVerified, ServerSynced
from tour_admin.store.reference import CategoriesLoaded, CitiesLoaded, CountriesLoaded, CountrySelected
from tour_admin.store.store import Store
from tour_admin.store.ui import LanguageChanged

from .country import resolve_country
from .session import SessionData, get_pending, get_token, has_valid_token, resolve_language

logger = logging.getLogger(__name__)

# cities shown in the header selector for one country
CITIES_PER_COUNTRY = 100


def extract_items(result: Any, *keys: str) -> List[Dict[str, Any]]:
    """
    Pull the record list out of a backend envelope

    Accepts a bare list, `{data: [...]}` or `{data: {<key>: [...]}}`.
    Errors and unknown shapes give an empty list.
    """
    if is_error(result):
        return []
    data = result.get("data") if isinstance(result, dict) else result
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if isinstance(data, dict):
        for key in (*keys, "items", "results"):
            value = data.get(key)
            if isinstance(value, list):
                return [item for item in value if isinstance(item, dict)]
    return []


def hydrate_store(
    store: Store,
    session: SessionData,
    language: str,
    countries: List[Dict[str, Any]],
    selected: Optional[Dict[str, Any]],
    cities: List[Dict[str, Any]],
    categories: List[Dict[str, Any]],
) -> Store:
    authenticated = has_valid_token(session)
    store.dispatch(ServerSynced(is_authenticated=authenticated, token=get_token(session) or None))
    if not authenticated:
        pending_token, pending_user = get_pending(session)
        if pending_token:
            store.dispatch(PasswordVerified(token=pending_token, user=pending_user))
    store.dispatch(CountriesLoaded(countries=countries))
    if selected is not None and selected.get("code"):
        store.dispatch(CountrySelected(code=str(selected["code"])))
    store.dispatch(CitiesLoaded(cities=cities))
    store.dispatch(CategoriesLoaded(categories=categories))
    store.dispatch(LanguageChanged(language=language))
    return store


async def load_root(session: SessionData, readers: ReferenceReaders, settings: Settings) -> Dict[str, Any]:
    factory = readers.factory
    language = resolve_language(session, settings)

    # independent reads; the city list depends on the resolved country
    countries_result, categories_result = await asyncio.gather(
        countries_service.get_countries(factory, language),
        categories_service.get_categories(factory, language, is_active=True),
    )
    countries = extract_items(countries_result, "countries")
    categories = extract_items(categories_result, "categories")

    selected = resolve_country(
        countries,
        session,
        language,
        default_code=settings.DEFAULT_COUNTRY_CODE,
        default_names=settings.DEFAULT_COUNTRY_NAMES,
    )

    cities: List[Dict[str, Any]] = []
    if selected is not None and selected.get("id") is not None:
        cities_result = await readers.get_cities(
            page=1,
            limit=CITIES_PER_COUNTRY,
            country_id=str(selected["id"]),
            is_active=True,
            language=language,
        )
        cities = extract_items(cities_result, "cities")
    else:
        logger.warning("No country available, skipping cities load")

    store = hydrate_store(Store(), session, language, countries, selected, cities, categories)
    state = store.state
    return {
        "auth": state.auth.view(),
        "countries": state.reference.countries,
        "selectedCountry": state.reference.selected_country,
        "cities": state.reference.cities,
        "categories": state.reference.categories,
        "language": language,
        "ui": state.ui.view(),
    }
