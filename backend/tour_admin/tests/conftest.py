import os
from collections.abc import Generator

# Settings() runs at import time, so the environment must be ready first
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tour_admin.cache.ttl_cache import InMemoryTTLCache  # noqa: E402
from tour_admin.core.config import Settings  # noqa: E402
from tour_admin.core.rate_limiter import RateLimiter  # noqa: E402
from tour_admin.main import create_app  # noqa: E402
from tour_admin.services.rest import RestClientFactory  # noqa: E402
from tour_admin.tests.utils.auth import log_in  # noqa: E402
from tour_admin.tests.utils.backend import BACKEND_URL, FakeBackend  # noqa: E402


@pytest.fixture(scope="function")
def backend() -> FakeBackend:
    fake = FakeBackend()
    fake.add_defaults()
    return fake


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    return Settings(SESSION_SECRET="test-session-secret", BACKEND_URL=BACKEND_URL, ENVIRONMENT="local")


@pytest.fixture(scope="function")
def factory(backend: FakeBackend) -> RestClientFactory:
    return RestClientFactory(BACKEND_URL, transport=backend.transport)


@pytest.fixture(scope="function")
def app(backend: FakeBackend, test_settings: Settings) -> FastAPI:
    return create_app(
        settings=test_settings,
        transport=backend.transport,
        cache=InMemoryTTLCache(),
        rate_limiter=RateLimiter(),
    )


@pytest.fixture(scope="function")
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def auth_client(client: TestClient, backend: FakeBackend) -> TestClient:
    """Client whose session completed both login steps"""
    log_in(client, backend)
    return client
