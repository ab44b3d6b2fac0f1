"""
Browser-side session controller

Drives the dashboard over HTTP the way the browser does and keeps a
`Store` in sync. I/O happens here; the store only sees actions.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from tour_admin.store.auth import (
    LoggedOut,
    LoginFailed,
    LoginStarted,
    OtpFailed,
    OtpVerified,
    PasswordVerified,
    ServerSynced,
)
from tour_admin.store.reference import CategoriesLoaded, CitiesLoaded, CountriesLoaded, CountrySelected
from tour_admin.store.store import RootState, Store
from tour_admin.store.ui import LanguageChanged

from .storage import TokenStorage

logger = logging.getLogger(__name__)


def _error_message(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str) and error:
            return error
    return fallback


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class DashboardSession:
    def __init__(self, http: httpx.Client, storage: TokenStorage, store: Optional[Store] = None):
        self.http = http
        self.storage = storage
        self.store = store or Store()

    @property
    def state(self) -> RootState:
        return self.store.state

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Password step. Never authenticates on its own."""
        self.store.dispatch(LoginStarted())
        response = self.http.post("/api/auth/login", data={"email": email, "password": password})
        body = _json(response)
        data = body.get("data") if isinstance(body, dict) else None
        if response.status_code != 200 or not isinstance(data, dict) or not data.get("pendingToken"):
            self.store.dispatch(LoginFailed(error=_error_message(body, "Login failed")))
            return self.state.auth.view()

        self.store.dispatch(PasswordVerified(token=data["pendingToken"], user=data.get("user")))
        return self.state.auth.view()

    def verify_otp(self, code: str) -> Dict[str, Any]:
        response = self.http.post("/api/auth/verify-email", data={"otp": code})
        body = _json(response)
        data = body.get("data") if isinstance(body, dict) else None
        if response.status_code != 200 or not isinstance(data, dict):
            self.store.dispatch(OtpFailed(error=_error_message(body, "Invalid code")))
            return self.state.auth.view()

        self.store.dispatch(OtpVerified(token=data.get("token"), user=data.get("user")))
        token = self.state.auth.view()["token"]
        if token:
            self.storage.save(token)
        return self.state.auth.view()

    def logout(self) -> Dict[str, Any]:
        """
        Clear everything, then reload

        The server call is best effort; local state is cleared even when
        it fails.
        """
        try:
            self.http.post("/api/auth/logout")
        except httpx.HTTPError as e:
            logger.warning(f"Logout request failed, clearing local session anyway: {e}")
        self.storage.clear()
        self.store.dispatch(LoggedOut())
        self.reload()
        return self.state.auth.view()

    def reload(self) -> RootState:
        """Full reload: a fresh store hydrated from the root loader."""
        self.store = Store()
        try:
            response = self.http.get("/")
        except httpx.HTTPError as e:
            logger.warning(f"Reload failed: {e}")
            return self.state
        body = _json(response)
        if response.status_code == 200 and isinstance(body, dict) and isinstance(body.get("root"), dict):
            self.hydrate(body["root"])
        return self.state

    def hydrate(self, root: Dict[str, Any]) -> RootState:
        """Sync server-loaded root data into the store."""
        auth = root.get("auth") or {}
        self.store.dispatch(
            ServerSynced(
                is_authenticated=bool(auth.get("isAuthenticated")),
                token=auth.get("token") or self.storage.load(),
                user=auth.get("user"),
            )
        )
        if not auth.get("isAuthenticated") and auth.get("pendingToken"):
            self.store.dispatch(PasswordVerified(token=auth["pendingToken"], user=auth.get("pendingUser")))

        self.store.dispatch(CountriesLoaded(countries=root.get("countries") or []))
        selected = root.get("selectedCountry")
        if isinstance(selected, dict) and selected.get("code"):
            self.store.dispatch(CountrySelected(code=str(selected["code"])))
        self.store.dispatch(CitiesLoaded(cities=root.get("cities") or []))
        self.store.dispatch(CategoriesLoaded(categories=root.get("categories") or []))
        if root.get("language"):
            self.store.dispatch(LanguageChanged(language=root["language"]))
        return self.state
