from datetime import datetime, timedelta, timezone

from tour_admin.core.security import decode_unverified, strip_bearer, token_expired
from tour_admin.tests.utils.auth import make_jwt


def test_strip_bearer():
    assert strip_bearer("Bearer abc") == "abc"
    assert strip_bearer("bearer  abc ") == "abc"
    assert strip_bearer("abc") == "abc"
    assert strip_bearer(None) == ""


def test_decode_without_key():
    claims = decode_unverified(make_jwt(role="admin"))
    assert claims is not None
    assert claims["role"] == "admin"


def test_opaque_token_is_not_a_jwt():
    assert decode_unverified("opaque-session-token") is None
    assert token_expired("opaque-session-token") is False


def test_expiry_is_checked():
    assert token_expired(make_jwt(expires_in=timedelta(minutes=-1))) is True
    assert token_expired(make_jwt(expires_in=timedelta(minutes=5))) is False


def test_expiry_relative_to_given_time():
    token = make_jwt(expires_in=timedelta(minutes=5))
    later = datetime.now(timezone.utc) + timedelta(minutes=10)
    assert token_expired(token, now=later) is True
