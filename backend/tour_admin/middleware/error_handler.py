"""
Exception handlers for the HTTP layer

Everything that escapes a route becomes the `{"success": False, "error": ...}`
envelope. Tracebacks stay in the log.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tour_admin.core.exceptions import AppException, ValidationError, http_exception_to_app_exception

logger = logging.getLogger(__name__)


def _render(exc: AppException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


def _context(request: Request, exc: AppException) -> dict:
    return {
        "error_code": exc.error_code.value,
        "status_code": exc.status_code,
        "path": request.url.path,
        "method": request.method,
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Client errors log at warning, server-side ones at error."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code.value}: {exc.internal_message}",
        extra={**_context(request, exc), "details": exc.details},
    )
    return _render(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    app_exc = http_exception_to_app_exception(exc)
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}", extra=_context(request, app_exc))
    return _render(app_exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Query/path/body parameters that do not parse; each offending field is listed."""
    fields = [
        {"field": ".".join(str(loc) for loc in error["loc"] if loc != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    app_exc = ValidationError(details={"fields": fields})
    logger.warning(f"Invalid request on {request.url.path}", extra={**_context(request, app_exc), "errors": fields})
    return _render(app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    app_exc = AppException(internal_message=f"{type(exc).__name__}: {exc}")
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {app_exc.internal_message}",
        exc_info=exc,
        extra=_context(request, app_exc),
    )
    return _render(app_exc)


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
