"""
Page loaders and page actions

GET returns the root data plus the page's own data; POST dispatches the
submitted form (`action` field) to the page's business module with the
session token. The auth guard has already run for every path here.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from tour_admin.api.deps import FormDep, ModulesDep, ReadersDep, SessionDep, SettingsDep
from tour_admin.api.responses import respond
from tour_admin.business.base import FormPayload, with_action
from tour_admin.sessions.loader import load_root
from tour_admin.sessions.session import SELECTED_COUNTRY_CODE, get_token, resolve_language

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

# page path -> business module handling its form actions
PAGE_MODULES = {
    "/tours": "tours",
    "/cities": "cities",
    "/categories": "categories",
    "/menus": "menus",
    "/roles": "roles",
    "/users": "users",
    "/offers": "offers",
    "/terms-conditions": "terms",
    "/news": "news",
    "/activities": "activities",
}

STATIC_PAGES = (
    "/",
    "/register",
    "/forgot-password",
    "/dashboard",
    "/cities",
    "/menus",
    "/roles",
    "/users",
    "/offers",
    "/terms-conditions",
    "/news",
    "/activities",
)


async def _page(session, readers, settings, page: Any) -> dict:
    return {"root": await load_root(session, readers, settings), "page": page}


def _static_loader(path: str):
    async def loader(session: SessionDep, readers: ReadersDep, settings: SettingsDep) -> Any:
        return await _page(session, readers, settings, None)

    loader.__name__ = f"load_{path.strip('/').replace('-', '_') or 'index'}"
    return loader


for _path in STATIC_PAGES:
    router.add_api_route(_path, _static_loader(_path), methods=["GET"])


@router.get("/newPassword")
async def load_new_password(
    session: SessionDep, readers: ReadersDep, settings: SettingsDep, token: Optional[str] = None
) -> Any:
    """Reset link target; the reset token travels in the query string."""
    return await _page(session, readers, settings, {"token": token})


@router.get("/categories")
async def load_categories(
    session: SessionDep, readers: ReadersDep, settings: SettingsDep, modules: ModulesDep
) -> Any:
    form = {"action": "list", "language": resolve_language(session, settings), "isActive": "true"}
    result = await modules["categories"].dispatch(form, get_token(session))
    return await _page(session, readers, settings, result)


@router.get("/tours")
async def load_tours(session: SessionDep, readers: ReadersDep, settings: SettingsDep) -> Any:
    root = await load_root(session, readers, settings)
    price_range = await readers.get_price_range(
        {"country": session.get(SELECTED_COUNTRY_CODE)},
        language=root["language"],
        currency=settings.DEFAULT_CURRENCY,
    )
    return {"root": root, "page": {"priceRange": price_range}}


@router.get("/tours/{tour_id}/edit")
async def load_tour_edit(
    tour_id: str,
    session: SessionDep,
    readers: ReadersDep,
    settings: SettingsDep,
    modules: ModulesDep,
    language: Optional[str] = None,
    currency: Optional[str] = None,
) -> Any:
    form = {
        "action": "get",
        "id": tour_id,
        "language": language or resolve_language(session, settings),
        "currency": currency or settings.DEFAULT_CURRENCY,
    }
    result = await modules["tours"].dispatch(form, get_token(session))
    return await _page(session, readers, settings, result)


def _page_action(module_name: str):
    async def action(form: FormDep, session: SessionDep, modules: ModulesDep) -> JSONResponse:
        result = await modules[module_name].dispatch(FormPayload(form), get_token(session))
        return respond(result)

    action.__name__ = f"{module_name}_action"
    return action


for _path, _module in PAGE_MODULES.items():
    router.add_api_route(_path, _page_action(_module), methods=["POST"])


@router.post("/tours/{tour_id}/edit")
async def tour_edit_action(tour_id: str, form: FormDep, session: SessionDep, modules: ModulesDep) -> JSONResponse:
    """Tour actions scoped to the tour in the path; a form `id` is overridden."""
    data = with_action(form, form.get("action") or "")
    data["id"] = tour_id
    return respond(await modules["tours"].dispatch(data, get_token(session)))
