"""
Resource routes used by client-side fetches
"""
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from tour_admin.api.deps import ModulesDep, SessionDep, SettingsDep, TokenDep
from tour_admin.api.responses import respond
from tour_admin.core.exceptions import error_result
from tour_admin.sessions.session import get_token, resolve_language

router = APIRouter(tags=["resources"])


@router.get("/menus/my-menu")
async def my_menu(
    token: TokenDep,
    session: SessionDep,
    settings: SettingsDep,
    modules: ModulesDep,
    app: str = "admin",
) -> JSONResponse:
    form = {"action": "my_menu", "app": app, "language": resolve_language(session, settings)}
    return respond(await modules["menus"].dispatch(form, token))


@router.get("/tours/getById")
async def tour_by_id(
    session: SessionDep,
    settings: SettingsDep,
    modules: ModulesDep,
    id: Optional[str] = None,
    language: Optional[str] = None,
    currency: Optional[str] = None,
) -> JSONResponse:
    if not id:
        return respond({"success": False, "data": None, **error_result(400, "No tour ID provided")})
    form = {
        "action": "get",
        "id": id,
        "language": language or resolve_language(session, settings),
        "currency": currency or settings.DEFAULT_CURRENCY,
    }
    return respond(await modules["tours"].dispatch(form, get_token(session)))


@router.get("/languages/dropdown")
async def languages_dropdown(session: SessionDep, settings: SettingsDep, modules: ModulesDep) -> JSONResponse:
    form = {"action": "dropdown", "language": resolve_language(session, settings)}
    return respond(await modules["languages"].dispatch(form))
