"""
Selected-country resolution against a freshly fetched country list
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from .session import SELECTED_COUNTRY_CODE, SELECTED_COUNTRY_ID, SessionData

logger = logging.getLogger(__name__)

Country = Dict[str, Any]


def _same(a: Any, b: Any) -> bool:
    return a is not None and b is not None and str(a).strip().lower() == str(b).strip().lower()


def _by_id(countries: List[Country], country_id: Any) -> Optional[Country]:
    return next((c for c in countries if _same(c.get("id"), country_id)), None)


def _by_code(countries: List[Country], code: Any) -> Optional[Country]:
    return next((c for c in countries if _same(c.get("code"), code)), None)


def _by_name(countries: List[Country], names: Iterable[str], language: str) -> Optional[Country]:
    wanted = {n.strip().lower() for n in names}
    fields = (f"name_{language}", "name_es", "name_en", "name")
    for country in countries:
        for field in fields:
            value = country.get(field)
            if isinstance(value, str) and value.strip().lower() in wanted:
                return country
    return None


def resolve_country(
    countries: List[Country],
    session: SessionData,
    language: str = "es",
    default_code: str = "MX",
    default_names: Iterable[str] = ("méxico", "mexico"),
) -> Optional[Country]:
    """
    Pick the selected country and write it back to the session

    Order: session id, session code, default code, default localized
    name, first country. None when the list is empty.
    """
    if not countries:
        return None

    stored_id = session.get(SELECTED_COUNTRY_ID)
    country = _by_id(countries, stored_id) if stored_id else None
    if country is None:
        if stored_id:
            logger.info("Stored country is no longer available, falling back", extra={"country_id": stored_id})
        country = (
            _by_code(countries, session.get(SELECTED_COUNTRY_CODE))
            or _by_code(countries, default_code)
            or _by_name(countries, default_names, language)
            or countries[0]
        )

    if country.get("id") is not None:
        session[SELECTED_COUNTRY_ID] = str(country["id"])
    if country.get("code"):
        session[SELECTED_COUNTRY_CODE] = str(country["code"]).upper()
    return country
