"""
Security middleware for response headers and request size limits
"""
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from tour_admin.core.exceptions import AppException, ErrorCode


# page and resource routes only ever return JSON or redirects
API_CSP = "default-src 'none'; frame-ancestors 'none'"
# Swagger UI loads its bundle from the jsDelivr CDN and uses inline styles
DOCS_CSP = (
    "default-src 'self'; script-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'; "
    "style-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'; img-src 'self' data: https:; "
    "frame-ancestors 'none'"
)
DOCS_PATHS = ("/docs", "/redoc")

STATIC_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "same-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=()",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Security headers on every response

    HSTS is only sent when the session cookie is marked secure
    (non-local environments).
    """

    def __init__(self, app: ASGIApp, hsts: bool = False, hsts_max_age: int = 31536000):
        super().__init__(app)
        self.hsts_value = f"max-age={hsts_max_age}; includeSubDomains" if hsts else None

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)

        for name, value in STATIC_HEADERS.items():
            response.headers.setdefault(name, value)
        docs = request.url.path.startswith(DOCS_PATHS)
        response.headers["Content-Security-Policy"] = DOCS_CSP if docs else API_CSP
        if self.hsts_value:
            response.headers["Strict-Transport-Security"] = self.hsts_value

        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies larger than `max_size` bytes (image uploads included)"""

    def __init__(self, app: ASGIApp, max_size: int = 10 * 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                too_large = int(content_length) > self.max_size
            except ValueError:
                too_large = True
            if too_large:
                exc = AppException(
                    "Request body too large",
                    ErrorCode.INVALID_INPUT,
                    status_code=413,
                    details={"max_size": self.max_size},
                )
                return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        return await call_next(request)
