import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from tour_admin.api.main import api_router, page_router
from tour_admin.business.registry import build_business_modules
from tour_admin.cache.readers import ReferenceReaders, build_cache_backend
from tour_admin.cache.ttl_cache import CacheBackend
from tour_admin.core.config import Settings, settings as default_settings
from tour_admin.core.rate_limiter import RateLimiter
from tour_admin.middleware.auth_guard import AuthGuardMiddleware
from tour_admin.middleware.error_handler import setup_exception_handlers
from tour_admin.middleware.security import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from tour_admin.services.rest import RestClientFactory
from tour_admin.sessions.session import session_middleware_options

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    cache: Optional[CacheBackend] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the dashboard app

    `transport` replaces the network for backend calls and `cache` the
    reference-data cache backend; both exist for tests.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=None if settings.ENVIRONMENT == "production" else "/openapi.json",
    )

    factory = RestClientFactory.from_settings(settings, transport=transport)
    readers = ReferenceReaders(
        factory,
        cache if cache is not None else build_cache_backend(settings),
        ttl=settings.CACHE_TTL_SECONDS,
    )
    app.state.settings = settings
    app.state.factory = factory
    app.state.readers = readers
    app.state.business = build_business_modules(factory, readers)
    app.state.rate_limiter = rate_limiter or RateLimiter.from_url(settings.REDIS_URL)

    if not factory.configured:
        logger.warning("BACKEND_URL is not set; backend reads will return empty data")

    setup_exception_handlers(app)

    # last added runs first: size limit -> headers -> session -> guard
    app.add_middleware(AuthGuardMiddleware)
    app.add_middleware(SessionMiddleware, **session_middleware_options(settings))
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.secure_cookies)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_UPLOAD_SIZE)

    app.include_router(api_router)
    app.include_router(page_router)

    logger.info(f"{settings.PROJECT_NAME} started in {settings.ENVIRONMENT} mode")
    return app


app = create_app()
