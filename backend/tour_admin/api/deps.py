from typing import Annotated, Dict, Sequence

from fastapi import Depends, Request
from starlette.datastructures import FormData

from tour_admin.business.base import BusinessLogic
from tour_admin.cache.readers import ReferenceReaders
from tour_admin.core.config import Settings
from tour_admin.core.exceptions import AuthenticationError, ErrorCode, RateLimitError
from tour_admin.core.rate_limiter import RateLimiter
from tour_admin.services.rest import RestClientFactory
from tour_admin.sessions.session import SessionData, get_token, has_valid_token


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_factory(request: Request) -> RestClientFactory:
    return request.app.state.factory


def get_readers(request: Request) -> ReferenceReaders:
    return request.app.state.readers


def get_modules(request: Request) -> Dict[str, BusinessLogic]:
    return request.app.state.business


def get_session(request: Request) -> SessionData:
    return request.session


SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[RestClientFactory, Depends(get_factory)]
ReadersDep = Annotated[ReferenceReaders, Depends(get_readers)]
ModulesDep = Annotated[Dict[str, BusinessLogic], Depends(get_modules)]
SessionDep = Annotated[SessionData, Depends(get_session)]


def require_token(session: SessionDep) -> str:
    token = get_token(session)
    if not token:
        raise AuthenticationError(
            "Access token is required",
            error_code=ErrorCode.INVALID_TOKEN,
            internal_message="No session token on API request",
        )
    if not has_valid_token(session):
        raise AuthenticationError(
            "Session expired, please sign in again",
            error_code=ErrorCode.TOKEN_EXPIRED,
            internal_message="Expired session token on API request",
        )
    return token


TokenDep = Annotated[str, Depends(require_token)]


def client_ip(request: Request, trusted_proxies: Sequence[str] = ()) -> str:
    """
    Socket peer address, or the nearest untrusted hop of `X-Forwarded-For`
    when the peer is a trusted proxy
    """
    peer = request.client.host if request.client else "unknown"
    if peer not in trusted_proxies:
        return peer
    forwarded = request.headers.get("x-forwarded-for", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    for hop in reversed(hops):
        if hop not in trusted_proxies:
            return hop
    return peer


def login_throttle(request: Request, settings: SettingsDep) -> None:
    """Per-IP sliding window shared by the password and OTP steps."""
    limiter: RateLimiter = request.app.state.rate_limiter
    key = f"login:ip:{client_ip(request, settings.TRUSTED_PROXIES)}"
    window = settings.LOGIN_RATE_LIMIT_WINDOW_SECONDS
    allowed, current, _ = limiter.check_rate_limit(key, settings.LOGIN_RATE_LIMIT_COUNT, window)
    if not allowed:
        raise RateLimitError(
            internal_message=f"Login rate limit hit for {key} ({current} attempts)",
            retry_after=limiter.retry_after(key, window) or window,
        )


async def form_data(request: Request) -> FormData:
    """Submitted form as a multi-dict (uploads included)."""
    return await request.form()


FormDep = Annotated[FormData, Depends(form_data)]
