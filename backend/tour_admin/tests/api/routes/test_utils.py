from fastapi.testclient import TestClient

from tour_admin.cache.ttl_cache import InMemoryTTLCache
from tour_admin.core.config import Settings
from tour_admin.core.rate_limiter import RateLimiter
from tour_admin.main import create_app
from tour_admin.tests.utils.backend import BACKEND_URL, FakeBackend


def test_health_check(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "backend_configured": True}


def test_security_headers(client: TestClient) -> None:
    r = client.get("/health")
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert "Strict-Transport-Security" not in r.headers


def test_content_security_policy(client: TestClient) -> None:
    assert client.get("/health").headers["Content-Security-Policy"].startswith("default-src 'none'")
    docs = client.get("/docs")
    assert docs.status_code == 200
    assert "cdn.jsdelivr.net" in docs.headers["Content-Security-Policy"]


def test_hsts_outside_local(backend: FakeBackend) -> None:
    settings = Settings(SESSION_SECRET="s", BACKEND_URL=BACKEND_URL, ENVIRONMENT="staging")
    app = create_app(settings, transport=backend.transport, cache=InMemoryTTLCache(), rate_limiter=RateLimiter())
    with TestClient(app, base_url="https://testserver") as c:
        assert "Strict-Transport-Security" in c.get("/health").headers


def test_request_size_limit(backend: FakeBackend) -> None:
    settings = Settings(SESSION_SECRET="s", BACKEND_URL=BACKEND_URL, MAX_UPLOAD_SIZE=64)
    app = create_app(settings, transport=backend.transport, cache=InMemoryTTLCache(), rate_limiter=RateLimiter())
    with TestClient(app) as c:
        r = c.post("/api/auth/register", data={"email": "x" * 200})
    assert r.status_code == 413
    assert r.json()["error"]["message"] == "Request body too large"
    assert backend.calls_to("auth/register") == []


def test_session_cookie_is_http_only(client: TestClient) -> None:
    r = client.post("/api/changeLanguage", data={"language": "en"})
    cookie = r.headers["set-cookie"]
    assert cookie.startswith("RJ_session=")
    assert "httponly" in cookie.lower()
    assert "samesite=lax" in cookie.lower()
