"""
Route guard for page routes

Runs after the session middleware, so `request.session` is populated.
API routes are left to the `require_token` dependency.
"""
import logging
from typing import Iterable

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from tour_admin.sessions.session import has_valid_token

logger = logging.getLogger(__name__)

PUBLIC_ONLY_ROUTES = frozenset({"/", "/register"})
EXEMPT_ROUTES = frozenset({"/forgot-password", "/newPassword"})
PUBLIC_ROUTES = PUBLIC_ONLY_ROUTES | EXEMPT_ROUTES

LOGIN_ROUTE = "/"
HOME_ROUTE = "/dashboard"

UNGUARDED_PREFIXES = ("/api/", "/health", "/docs", "/redoc", "/openapi.json", "/static/")


def normalize_path(path: str) -> str:
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def guard_redirect(path: str, authenticated: bool) -> str | None:
    """Where to send the visitor instead, or None to let the request through."""
    path = normalize_path(path)
    if path in EXEMPT_ROUTES:
        return None
    if path in PUBLIC_ONLY_ROUTES:
        return HOME_ROUTE if authenticated else None
    return None if authenticated else LOGIN_ROUTE


class AuthGuardMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, unguarded_prefixes: Iterable[str] = UNGUARDED_PREFIXES):
        super().__init__(app)
        self.unguarded_prefixes = tuple(unguarded_prefixes)

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.startswith(self.unguarded_prefixes) or path in ("/api", "/health"):
            return await call_next(request)

        target = guard_redirect(path, has_valid_token(request.session))
        if target is not None:
            logger.info(f"Redirecting {path} to {target}", extra={"path": path, "target": target})
            return RedirectResponse(target, status_code=303)

        return await call_next(request)
