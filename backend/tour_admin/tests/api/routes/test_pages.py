import json

import pytest
from fastapi.testclient import TestClient

from tour_admin.tests.utils.auth import log_in
from tour_admin.tests.utils.backend import CATEGORIES, FakeBackend, request_json

PROTECTED = [
    "/dashboard", "/cities", "/categories", "/menus", "/roles", "/users", "/offers", "/terms-conditions", "/tours",
    "/news", "/activities",
]


class TestGuard:
    @pytest.mark.parametrize("path", PROTECTED + ["/tours/t-1/edit", "/dashboard/"])
    def test_anonymous_is_sent_to_login(self, client: TestClient, path: str) -> None:
        r = client.get(path, follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/"

    @pytest.mark.parametrize("path", ["/", "/register"])
    def test_signed_in_skips_public_pages(self, auth_client: TestClient, path: str) -> None:
        r = auth_client.get(path, follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/dashboard"

    @pytest.mark.parametrize("path", ["/forgot-password", "/newPassword"])
    def test_exempt_pages_for_everyone(self, client: TestClient, backend: FakeBackend, path: str) -> None:
        assert client.get(path, follow_redirects=False).status_code == 200
        log_in(client, backend)
        assert client.get(path, follow_redirects=False).status_code == 200

    def test_page_actions_are_guarded(self, client: TestClient, backend: FakeBackend) -> None:
        r = client.post("/cities", data={"action": "delete", "id": "city-1"}, follow_redirects=False)
        assert r.status_code == 303
        assert backend.calls_to("cities/city-1") == []


class TestLoaders:
    def test_login_page_root(self, client: TestClient) -> None:
        body = client.get("/").json()
        assert body["page"] is None
        root = body["root"]
        assert root["selectedCountry"]["code"] == "MX"
        assert [c["code"] for c in root["countries"]] == ["US", "MX"]
        assert root["categories"] == CATEGORIES
        assert root["auth"]["isAuthenticated"] is False

    def test_new_password_carries_token(self, client: TestClient) -> None:
        assert client.get("/newPassword", params={"token": "reset-123"}).json()["page"] == {"token": "reset-123"}

    def test_categories_page(self, auth_client: TestClient) -> None:
        page = auth_client.get("/categories").json()["page"]
        assert page["data"] == CATEGORIES

    def test_tours_page_price_range(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("GET", "tours/price-range", {"success": True, "data": {"min": 500, "max": 9000}})
        page = auth_client.get("/tours").json()["page"]

        assert page["priceRange"]["data"] == {"min": 500, "max": 9000}
        call = backend.last_call("tours/price-range")
        assert call.url.params["country"] == "MX"
        assert call.headers["X-Currency"] == "MXN"

    def test_tour_edit_page(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("GET", "tours/t-1", {"success": True, "data": {"id": "t-1", "title": "Monte Albán"}})
        page = auth_client.get("/tours/t-1/edit", params={"language": "en"}).json()["page"]

        assert page["data"]["title"] == "Monte Albán"
        assert backend.last_call("tours/t-1").headers["X-Language"] == "en"

    def test_reference_reads_are_cached_across_requests(self, client: TestClient, backend: FakeBackend) -> None:
        client.get("/")
        client.get("/")
        assert len(backend.calls_to("cities")) == 1


class TestPageActions:
    def test_invalid_action(self, auth_client: TestClient) -> None:
        r = auth_client.post("/tours", data={"action": "explode"})
        assert r.status_code == 400
        assert r.json() == {"error": {"status": 400, "message": "Invalid action"}}

    def test_create_city(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("POST", "cities", {"success": True, "data": {"id": "city-2"}})
        data = json.dumps({"name": "Puebla", "countryId": "c-mx"})
        r = auth_client.post("/cities", data={"action": "create", "data": data})

        assert r.status_code == 200
        assert r.json() == {"success": True, "data": {"id": "city-2"}}
        assert backend.last_call("cities").headers["Authorization"].startswith("Bearer ey")

    def test_tours_list_needs_location(self, auth_client: TestClient) -> None:
        r = auth_client.post("/tours", data={"action": "list", "filters": "{}"})
        assert r.status_code == 400
        assert r.json()["data"] == []

    def test_upload_tour_images(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("POST", "tours/t-1/images", {"success": True, "data": [{"id": "img-1"}]})
        r = auth_client.post(
            "/tours/t-1/edit",
            data={"action": "upload_images", "setCover": "true"},
            files=[("images", ("a.jpg", b"jpeg-bytes", "image/jpeg"))],
        )
        assert r.status_code == 200
        assert b"jpeg-bytes" in backend.last_call("tours/t-1/images").content

    def test_edit_action_uses_path_id(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("PUT", "tours/t-7", {"success": True})
        data = json.dumps({"title": "Ruta", "cityId": "city-1"})
        r = auth_client.post("/tours/t-7/edit", data={"action": "update", "id": "t-other", "data": data})
        assert r.status_code == 200
        assert backend.calls_to("tours/t-7", "PUT")
        assert backend.calls_to("tours/t-other") == []

    def test_news_publish_action(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("PATCH", "news/n-1/publish", {"success": True, "data": {"isPublished": True}})
        r = auth_client.post("/news", data={"action": "publish", "newsId": "n-1"})
        assert r.status_code == 200
        assert r.json()["data"] == {"isPublished": True}
        assert backend.last_call("news/n-1/publish").headers["Authorization"].startswith("Bearer ")

    def test_toggle_user(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("PUT", "users/u-2", {"success": True})
        r = auth_client.post("/users", data={"action": "toggle_status", "userId": "u-2", "isActive": "false"})
        assert r.status_code == 200
        assert request_json(backend.last_call("users/u-2")) == {"isActive": False}

    def test_backend_error_status_passes_through(self, auth_client: TestClient, backend: FakeBackend) -> None:
        backend.add("DELETE", "roles/r-1", {"message": "Role in use"}, status=409)
        r = auth_client.post("/roles", data={"action": "delete", "roleId": "r-1"})
        assert r.status_code == 409
        assert r.json()["error"]["message"] == "Role in use"
