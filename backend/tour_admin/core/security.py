from datetime import datetime, timezone
from typing import Any

import jwt
from jwt.exceptions import InvalidTokenError

BEARER_PREFIX = "bearer "


def strip_bearer(token: str | None) -> str:
    token = (token or "").strip()
    if token.lower().startswith(BEARER_PREFIX):
        return token[len(BEARER_PREFIX):].strip()
    return token


def decode_unverified(token: str) -> dict[str, Any] | None:
    """
    Read JWT claims without checking the signature

    The backend owns the signing key; this side only needs `exp`.
    Returns None when the token is not a JWT.
    """
    try:
        return jwt.decode(strip_bearer(token), options={"verify_signature": False})
    except InvalidTokenError:
        return None


def token_expired(token: str, now: datetime | None = None) -> bool:
    """True only for a JWT whose `exp` claim is in the past. Opaque tokens never expire here."""
    claims = decode_unverified(token)
    if not claims or "exp" not in claims:
        return False
    try:
        expires_at = datetime.fromtimestamp(float(claims["exp"]), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return True
    return expires_at <= (now or datetime.now(timezone.utc))
