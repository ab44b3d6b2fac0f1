"""
Header selectors: country and language
"""
import logging
from typing import Any
from urllib.parse import urlsplit

from fastapi import APIRouter
from fastapi.responses import JSONResponse, RedirectResponse

from tour_admin.api.deps import FormDep, SessionDep, SettingsDep
from tour_admin.api.responses import respond
from tour_admin.core.exceptions import error_result
from tour_admin.sessions.session import LANGUAGE, SELECTED_COUNTRY_CODE, SELECTED_COUNTRY_ID

logger = logging.getLogger(__name__)

router = APIRouter(tags=["preferences"])


def safe_return_to(value: Any, default: str = "/") -> str:
    """Only same-site absolute paths; anything else falls back to `default`."""
    if not isinstance(value, str) or not value.startswith("/") or value.startswith("//"):
        return default
    parts = urlsplit(value)
    if parts.scheme or parts.netloc or "\\" in value:
        return default
    return value


@router.post("/changeCountry")
async def change_country(form: FormDep, session: SessionDep) -> RedirectResponse:
    """
    Store the chosen country code and drop the id

    The next root load re-resolves the id from the fresh country list.
    """
    return_to = safe_return_to(form.get("returnTo"))
    country_code = form.get("countryCode")
    if isinstance(country_code, str) and country_code.strip():
        session[SELECTED_COUNTRY_CODE] = country_code.strip().upper()
        session.pop(SELECTED_COUNTRY_ID, None)
    return RedirectResponse(return_to, status_code=303)


@router.post("/changeLanguage")
async def change_language(form: FormDep, session: SessionDep, settings: SettingsDep) -> JSONResponse:
    language = form.get("language")
    if not isinstance(language, str) or language not in settings.SUPPORTED_LANGUAGES:
        return respond({"success": False, **error_result(400, "Invalid language")})
    session[LANGUAGE] = language
    return JSONResponse({"success": True, "language": language})
