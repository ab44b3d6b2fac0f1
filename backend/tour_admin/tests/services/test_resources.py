"""
Tests for the per-resource backend calls: paths, localization headers, payload shapes
"""
import asyncio

from tour_admin.services import (
    activities,
    auth,
    categories,
    cities,
    countries,
    menus,
    news,
    offers,
    price_range,
    roles,
    terms,
    tours,
    users,
)
from tour_admin.services.rest import RestClientFactory
from tour_admin.tests.utils.backend import FakeBackend, request_json


def run(coro):
    return asyncio.run(coro)


def test_language_header_on_every_call(backend: FakeBackend, factory: RestClientFactory):
    run(countries.get_countries(factory, "en"))
    assert backend.last_call("cities/countries").headers["X-Language"] == "en"


def test_country_by_id(backend: FakeBackend, factory: RestClientFactory):
    backend.add("GET", "cities/countries/c-mx", {"success": True, "data": {"id": "c-mx"}})
    result = run(countries.get_country_by_id(factory, "c-mx", "en"))
    assert result["data"]["id"] == "c-mx"
    assert backend.last_call("cities/countries/c-mx").headers["X-Language"] == "en"


def test_cities_filters(backend: FakeBackend, factory: RestClientFactory):
    run(cities.get_cities(factory, page=2, limit=5, country_id="c-mx", is_active=True))
    params = backend.last_call("cities").url.params
    assert params["page"] == "2"
    assert params["limit"] == "5"
    assert params["countryId"] == "c-mx"
    assert params["isActive"] == "true"


def test_tour_cards_use_city_filter_and_currency(backend: FakeBackend, factory: RestClientFactory):
    backend.add("GET", "tours/cards", {"success": True, "data": []})
    run(tours.get_tours(factory, city_id="city-1", min_price=10.5, currency="USD"))

    call = backend.last_call("tours/cards")
    assert call.url.params["city"] == "city-1"
    assert call.url.params["minPrice"] == "10.5"
    assert "maxPrice" not in call.url.params
    assert call.headers["X-Currency"] == "USD"


def test_tour_image_upload_is_multipart(backend: FakeBackend, factory: RestClientFactory):
    backend.add("POST", "tours/t-1/images", {"success": True})
    images = [("images", ("a.jpg", b"jpeg-bytes", "image/jpeg"))]
    run(tours.upload_tour_images(factory, "t-1", images, "tok", set_cover=True))

    call = backend.last_call("tours/t-1/images")
    assert call.headers["Content-Type"].startswith("multipart/form-data")
    body = call.content
    assert b'name="setCover"' in body and b"true" in body
    assert b'filename="a.jpg"' in body


def test_news_image_upload_is_multipart(backend: FakeBackend, factory: RestClientFactory):
    backend.add("POST", "news/n-1/images", {"success": True})
    images = [("images", ("a.jpg", b"jpeg-bytes", "image/jpeg")), ("images", ("b.jpg", b"more", "image/jpeg"))]
    run(news.upload_news_images(factory, "n-1", images, "tok"))

    body = backend.last_call("news/n-1/images").content
    assert body.count(b'name="images"') == 2
    assert b'name="setCover"' in body and b"false" in body


def test_set_cover_is_patch(backend: FakeBackend, factory: RestClientFactory):
    backend.add("PATCH", "tours/t-1/images/i-2/cover", {"success": True})
    assert run(tours.set_image_as_cover(factory, "t-1", "i-2", "tok")) == {"success": True}


def test_price_range_drops_unknown_and_blank_filters(backend: FakeBackend, factory: RestClientFactory):
    backend.add("GET", "tours/price-range", {"success": True, "data": {"min": 1, "max": 9}})
    run(price_range.get_price_range(factory, {"country": "MX", "city": " ", "bogus": "1"}, "es", "MXN"))

    call = backend.last_call("tours/price-range")
    assert dict(call.url.params) == {"country": "MX"}
    assert call.headers["X-Currency"] == "MXN"


def test_association_payloads(backend: FakeBackend, factory: RestClientFactory):
    backend.add("POST", "menus/m-1/roles", {"success": True})
    backend.add("POST", "roles/r-1/menus", {"success": True})
    run(menus.associate_roles_to_menu(factory, "m-1", ["r-1", "r-2"], "tok"))
    run(roles.associate_menus_to_role(factory, "r-1", ["m-1"], "tok"))

    assert request_json(backend.last_call("menus/m-1/roles")) == {"roleIds": ["r-1", "r-2"]}
    assert request_json(backend.last_call("roles/r-1/menus")) == {"menuIds": ["m-1"]}


def test_my_menu_sends_app(backend: FakeBackend, factory: RestClientFactory):
    backend.add("GET", "menus/my-menu", {"success": True, "data": []})
    run(menus.get_user_menu(factory, "tok", app="admin"))
    assert backend.last_call("menus/my-menu").url.params["app"] == "admin"


def test_user_and_offer_status(backend: FakeBackend, factory: RestClientFactory):
    backend.add("PUT", "users/u-1", {"success": True})
    backend.add("PUT", "offers/o-1/toggle-status", {"success": True})
    run(users.toggle_user_status(factory, "u-1", False, "tok"))
    run(offers.toggle_offer_status(factory, "o-1", True, "tok"))

    assert request_json(backend.last_call("users/u-1")) == {"isActive": False}
    assert request_json(backend.last_call("offers/o-1/toggle-status")) == {"isActive": True}


def test_avatar_upload_field(backend: FakeBackend, factory: RestClientFactory):
    backend.add("POST", "users/u-1/avatar", {"success": True})
    run(users.upload_user_avatar(factory, "u-1", ("avatar", ("me.png", b"png", "image/png")), "tok"))
    assert b'name="avatar"' in backend.last_call("users/u-1/avatar").content


def test_terms_paths(backend: FakeBackend, factory: RestClientFactory):
    backend.add("GET", "terms-conditions/type/register", {"success": True, "data": {}})
    backend.add("GET", "terms-conditions/tour/t-1", {"success": True, "data": {}})
    run(terms.get_terms_by_type(factory, "register"))
    run(terms.get_terms_by_tour(factory, "t-1"))
    assert backend.calls_to("terms-conditions/type/register")
    assert backend.calls_to("terms-conditions/tour/t-1")


def test_verify_email_uses_pending_token(backend: FakeBackend, factory: RestClientFactory):
    backend.add("POST", "auth/verify-email", {"success": True})
    run(auth.verify_email(factory, {"otp": "123456"}, "pending-tok"))
    call = backend.last_call("auth/verify-email")
    assert call.headers["Authorization"] == "Bearer pending-tok"
    assert request_json(call) == {"otp": "123456"}


class TestNotConfigured:
    def test_reads_return_empty_shapes_without_calling(self, backend: FakeBackend):
        factory = RestClientFactory("", transport=backend.transport)

        assert run(cities.get_cities(factory))["data"] == []
        assert run(categories.get_categories(factory)) == {"success": False, "data": []}
        assert run(tours.get_tours(factory))["pagination"]["total"] == 0
        assert run(news.get_news(factory))["data"] == []
        assert run(activities.get_activities_dropdown(factory)) == {"success": False, "data": []}
        assert backend.calls == []

    def test_writes_return_error(self, backend: FakeBackend):
        factory = RestClientFactory("", transport=backend.transport)
        result = run(roles.create_role(factory, {"name": "x"}, "tok"))
        assert result["error"]["code"] == "BACKEND_5000"
