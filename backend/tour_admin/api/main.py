from fastapi import APIRouter

from tour_admin.api.routes import auth, pages, preferences, resources, utils

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(preferences.router)
api_router.include_router(resources.router)

page_router = APIRouter()
page_router.include_router(utils.router)
page_router.include_router(pages.router)
