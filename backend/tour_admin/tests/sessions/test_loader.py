import asyncio

import pytest

from tour_admin.cache.readers import ReferenceReaders
from tour_admin.cache.ttl_cache import InMemoryTTLCache
from tour_admin.core.config import Settings
from tour_admin.services.rest import RestClientFactory
from tour_admin.sessions.loader import extract_items, load_root
from tour_admin.sessions.session import AUTH_TOKEN, PENDING_TOKEN, PENDING_USER, SELECTED_COUNTRY_ID
from tour_admin.tests.utils.auth import TEST_USER
from tour_admin.tests.utils.backend import CATEGORIES, CITIES_MX, FakeBackend


@pytest.fixture
def readers(factory: RestClientFactory) -> ReferenceReaders:
    return ReferenceReaders(factory, InMemoryTTLCache())


def load(session, readers, settings):
    return asyncio.run(load_root(session, readers, settings))


class TestExtractItems:
    def test_shapes(self):
        assert extract_items([{"a": 1}, "x"]) == [{"a": 1}]
        assert extract_items({"data": [{"a": 1}]}) == [{"a": 1}]
        assert extract_items({"data": {"cities": [{"a": 1}]}}, "cities") == [{"a": 1}]
        assert extract_items({"data": {"items": [{"a": 1}]}}) == [{"a": 1}]
        assert extract_items({"error": {"status": 500, "message": "x"}}) == []
        assert extract_items({"data": None}) == []


class TestLoadRoot:
    def test_anonymous_root(self, readers, test_settings: Settings, backend: FakeBackend):
        session = {}
        root = load(session, readers, test_settings)

        assert root["auth"]["isAuthenticated"] is False
        assert root["selectedCountry"]["code"] == "MX"
        assert root["cities"] == CITIES_MX
        assert root["categories"] == CATEGORIES
        assert root["language"] == "es"
        assert session[SELECTED_COUNTRY_ID] == "c-mx"

        params = backend.last_call("cities").url.params
        assert params["countryId"] == "c-mx"
        assert params["limit"] == "100"
        assert params["isActive"] == "true"
        assert backend.last_call("categories").url.params["isActive"] == "true"

    def test_authenticated_root(self, readers, test_settings: Settings):
        root = load({AUTH_TOKEN: "opaque-token", "language": "en"}, readers, test_settings)
        assert root["auth"]["isAuthenticated"] is True
        assert root["auth"]["token"] == "opaque-token"
        assert root["ui"]["language"] == "en"

    def test_pending_login_surfaces_otp_step(self, readers, test_settings: Settings):
        root = load({PENDING_TOKEN: "pending", PENDING_USER: TEST_USER}, readers, test_settings)
        assert root["auth"]["isAuthenticated"] is False
        assert root["auth"]["requiresOtp"] is True
        assert root["auth"]["pendingUser"] == TEST_USER

    def test_backend_down_still_renders(self, test_settings: Settings):
        factory = RestClientFactory("")
        root = load({}, ReferenceReaders(factory, InMemoryTTLCache()), test_settings)
        assert root["countries"] == []
        assert root["selectedCountry"] is None
        assert root["cities"] == []
