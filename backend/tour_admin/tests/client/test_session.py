from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from tour_admin.client.session import DashboardSession
from tour_admin.client.storage import FileTokenStorage, MemoryTokenStorage
from tour_admin.tests.utils.auth import TEST_USER, make_jwt, stub_login, stub_otp
from tour_admin.tests.utils.backend import FakeBackend


class TestDashboardSession:
    def test_two_step_login(self, client: TestClient, backend: FakeBackend) -> None:
        token = make_jwt()
        stub_login(backend, token)
        stub_otp(backend)
        storage = MemoryTokenStorage()
        dashboard = DashboardSession(client, storage)

        view = dashboard.login(TEST_USER["email"], "secret")
        assert view["requiresOtp"] is True
        assert view["isAuthenticated"] is False
        assert storage.load() is None

        view = dashboard.verify_otp("123456")
        assert view["isAuthenticated"] is True
        assert view["user"] == TEST_USER
        assert storage.load() == token

    def test_failed_login(self, client: TestClient, backend: FakeBackend) -> None:
        backend.add("POST", "auth/login", {"message": "Invalid credentials"}, status=401)
        view = DashboardSession(client, MemoryTokenStorage()).login("a@b.co", "bad")
        assert view["requiresOtp"] is False
        assert view["error"] == "Invalid credentials"

    def test_failed_otp_can_be_retried(self, client: TestClient, backend: FakeBackend) -> None:
        stub_login(backend, make_jwt())
        stub_otp(backend, status=400)
        dashboard = DashboardSession(client, MemoryTokenStorage())
        dashboard.login(TEST_USER["email"], "secret")

        view = dashboard.verify_otp("000000")
        assert view["requiresOtp"] is True
        assert view["error"] == "Invalid OTP code"

        stub_otp(backend)
        assert dashboard.verify_otp("123456")["isAuthenticated"] is True

    def test_reload_hydrates_from_root(self, client: TestClient, backend: FakeBackend) -> None:
        state = DashboardSession(client, MemoryTokenStorage()).reload()
        assert [c["code"] for c in state.reference.countries] == ["US", "MX"]
        assert state.reference.selected_country["code"] == "MX"
        assert state.reference.cities[0]["name"] == "Oaxaca"
        assert state.ui.language == "es"

    def test_logout_clears_everything(self, client: TestClient, backend: FakeBackend) -> None:
        stub_login(backend, make_jwt())
        stub_otp(backend)
        storage = MemoryTokenStorage()
        dashboard = DashboardSession(client, storage)
        dashboard.login(TEST_USER["email"], "secret")
        dashboard.verify_otp("123456")

        view = dashboard.logout()
        assert view["isAuthenticated"] is False
        assert storage.load() is None
        assert dashboard.state.reference.countries

    def test_logout_survives_network_failure(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        storage = MemoryTokenStorage("tok")
        http = httpx.Client(base_url="http://dashboard.test", transport=httpx.MockTransport(refuse))
        dashboard = DashboardSession(http, storage)

        assert dashboard.logout()["isAuthenticated"] is False
        assert storage.load() is None


class TestFileTokenStorage:
    def test_round_trip(self, tmp_path: Path) -> None:
        storage = FileTokenStorage(tmp_path / "state" / "token.json")
        assert storage.load() is None
        storage.save("abc")
        assert FileTokenStorage(tmp_path / "state" / "token.json").load() == "abc"
        storage.clear()
        storage.clear()
        assert storage.load() is None

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "token.json"
        path.write_text("{not json", encoding="utf-8")
        assert FileTokenStorage(path).load() is None
