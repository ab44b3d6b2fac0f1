"""
Signed cookie session: keys, cookie options and auth helpers

The session is a Starlette `SessionMiddleware` dict signed with
itsdangerous; handlers read and mutate `request.session` directly.
"""
import logging
from datetime import datetime
from typing import Any, Dict, MutableMapping, Optional

from tour_admin.core.config import Settings
from tour_admin.core.security import strip_bearer, token_expired

logger = logging.getLogger(__name__)

AUTH_TOKEN = "authToken"
PENDING_TOKEN = "pendingToken"
PENDING_USER = "pendingUser"
SELECTED_COUNTRY_ID = "selectedCountryId"
SELECTED_COUNTRY_CODE = "selectedCountryCode"
LANGUAGE = "language"

SessionData = MutableMapping[str, Any]


def session_middleware_options(settings: Settings) -> Dict[str, Any]:
    return {
        "secret_key": settings.SESSION_SECRET,
        "session_cookie": settings.SESSION_COOKIE_NAME,
        "max_age": settings.SESSION_MAX_AGE,
        "same_site": "lax",
        "https_only": settings.secure_cookies,
    }


def get_token(session: SessionData) -> str:
    token = session.get(AUTH_TOKEN)
    return strip_bearer(token) if isinstance(token, str) else ""


def has_valid_token(session: SessionData, now: Optional[datetime] = None) -> bool:
    token = get_token(session)
    if not token:
        return False
    if token_expired(token, now):
        logger.info("Session token expired")
        return False
    return True


def get_pending(session: SessionData) -> tuple[str, Optional[Dict[str, Any]]]:
    token = session.get(PENDING_TOKEN)
    user = session.get(PENDING_USER)
    return (token if isinstance(token, str) else ""), (user if isinstance(user, dict) else None)


def set_pending(session: SessionData, token: str, user: Optional[Dict[str, Any]]) -> None:
    """Password step succeeded; the session is still unauthenticated."""
    session.pop(AUTH_TOKEN, None)
    session[PENDING_TOKEN] = token
    session[PENDING_USER] = user


def promote_pending(
    session: SessionData, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """
    OTP step succeeded: move pending credentials into the session

    Returns the authenticated user, or None when there was nothing pending.
    """
    pending_token, pending_user = get_pending(session)
    if not pending_token:
        return None
    session[AUTH_TOKEN] = token or pending_token
    session.pop(PENDING_TOKEN, None)
    session.pop(PENDING_USER, None)
    return user or pending_user or {}


def clear_auth(session: SessionData) -> None:
    for key in (AUTH_TOKEN, PENDING_TOKEN, PENDING_USER):
        session.pop(key, None)


def resolve_language(session: SessionData, settings: Settings) -> str:
    language = session.get(LANGUAGE)
    if isinstance(language, str) and language in settings.SUPPORTED_LANGUAGES:
        return language
    return settings.DEFAULT_LANGUAGE
