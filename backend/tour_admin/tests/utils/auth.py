"""
Authentication test utilities
Backend login stubs, token builders and a logged-in client helper
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt
from fastapi.testclient import TestClient

from tour_admin.tests.utils.backend import FakeBackend

TEST_USER = {"id": "u-1", "email": "admin@example.com", "firstName": "Ana", "role": "admin"}


def make_jwt(expires_in: timedelta = timedelta(hours=1), **claims) -> str:
    payload = {"sub": "u-1", "exp": datetime.now(timezone.utc) + expires_in, **claims}
    return jwt.encode(payload, "backend-owned-key", algorithm="HS256")


def stub_login(backend: FakeBackend, token: str, user: Optional[Dict] = None) -> None:
    backend.add("POST", "auth/login", {"success": True, "data": {"user": user or TEST_USER, "accessToken": token}})


def stub_otp(backend: FakeBackend, status: int = 200, token: Optional[str] = None) -> None:
    if status == 200:
        data = {"verified": True}
        if token:
            data["accessToken"] = token
        backend.add("POST", "auth/verify-email", {"success": True, "data": data})
    else:
        backend.add("POST", "auth/verify-email", {"message": "Invalid OTP code"}, status=status)


def log_in(client: TestClient, backend: FakeBackend, token: Optional[str] = None) -> str:
    """Run both login steps and return the session token."""
    token = token or make_jwt()
    stub_login(backend, token)
    stub_otp(backend)
    response = client.post("/api/auth/login", data={"email": TEST_USER["email"], "password": "secret"})
    assert response.status_code == 200, response.text
    response = client.post("/api/auth/verify-email", data={"otp": "123456"})
    assert response.status_code == 200, response.text
    return token
